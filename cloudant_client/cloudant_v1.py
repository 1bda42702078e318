# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License. You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations under
# the License.

import json

from . import config
from .base import BaseService, drop_none, require


DEFAULT_SERVICE_NAME = "cloudant"
DEFAULT_SERVICE_URL = "http://localhost:5984"


def _json_param(value):
    if value is None:
        return None
    return json.dumps(value)


def _payload(document):
    # dicts are JSON encoded, anything else (bytes, files) is sent as is
    if isinstance(document, (dict, list)):
        return document, None
    return None, document


def _doc_headers(content_type=None, if_match=None, if_none_match=None):
    return {
        "Content-Type": content_type,
        "If-Match": if_match,
        "If-None-Match": if_none_match,
    }


class CloudantV1(BaseService):
    """Client for the Cloudant (CouchDB compatible) HTTP API.

    Every operation returns a ``DetailedResponse`` and raises
    ``CloudantError`` for error statuses. Missing required arguments and
    invalid document IDs raise ``ValueError`` before a request is sent.
    """

    def __init__(self, service_url=DEFAULT_SERVICE_URL, authenticator=None):
        super(CloudantV1, self).__init__(service_url, authenticator)

    @classmethod
    def new_instance(cls, service_name=DEFAULT_SERVICE_NAME):
        authenticator = config.get_authenticator_from_environment(service_name)
        service = cls(authenticator=authenticator)
        service.configure_service(service_name)
        return service

    # Server

    def get_server_information(self):
        return self.request("GET", [], operation_id="get_server_information")

    def get_uuids(self, count=None):
        return self.request(
            "GET", ["_uuids"], params={"count": count}, operation_id="get_uuids"
        )

    def get_capacity_throughput_information(self):
        return self.request(
            "GET",
            ["_api", "v2", "user", "capacity", "throughput"],
            operation_id="get_capacity_throughput_information",
        )

    def put_capacity_throughput_configuration(self, blocks):
        require(blocks=blocks)
        return self.request(
            "PUT",
            ["_api", "v2", "user", "capacity", "throughput"],
            body={"blocks": blocks},
            operation_id="put_capacity_throughput_configuration",
        )

    def get_current_throughput_information(self):
        return self.request(
            "GET",
            ["_api", "v2", "user", "current", "throughput"],
            operation_id="get_current_throughput_information",
        )

    def get_up_information(self):
        return self.request("GET", ["_up"], operation_id="get_up_information")

    def head_up_information(self):
        return self.request("HEAD", ["_up"], operation_id="head_up_information")

    def get_membership_information(self):
        return self.request(
            "GET", ["_membership"], operation_id="get_membership_information"
        )

    def get_active_tasks(self):
        return self.request("GET", ["_active_tasks"], operation_id="get_active_tasks")

    def get_activity_tracker_events(self):
        return self.request(
            "GET",
            ["_api", "v2", "user", "activity_tracker", "events"],
            operation_id="get_activity_tracker_events",
        )

    def post_activity_tracker_events(self, types):
        require(types=types)
        return self.request(
            "POST",
            ["_api", "v2", "user", "activity_tracker", "events"],
            body={"types": types},
            operation_id="post_activity_tracker_events",
        )

    def get_session_information(self):
        return self.request(
            "GET", ["_session"], operation_id="get_session_information"
        )

    # Databases

    def get_all_dbs(
        self, descending=None, end_key=None, limit=None, skip=None, start_key=None
    ):
        params = {
            "descending": descending,
            "end_key": _json_param(end_key),
            "limit": limit,
            "skip": skip,
            "start_key": _json_param(start_key),
        }
        return self.request(
            "GET", ["_all_dbs"], params=params, operation_id="get_all_dbs"
        )

    def post_dbs_info(self, keys):
        require(keys=keys)
        return self.request(
            "POST", ["_dbs_info"], body={"keys": keys}, operation_id="post_dbs_info"
        )

    def get_db_updates(
        self, descending=None, feed=None, heartbeat=None, timeout=None, since=None
    ):
        params = {
            "descending": descending,
            "feed": feed,
            "heartbeat": heartbeat,
            "timeout": timeout,
            "since": since,
        }
        return self.request(
            "GET", ["_db_updates"], params=params, operation_id="get_db_updates"
        )

    def post_changes(self, db, **kwargs):
        return self._post_changes(db, False, "post_changes", **kwargs)

    def post_changes_as_stream(self, db, **kwargs):
        return self._post_changes(db, True, "post_changes_as_stream", **kwargs)

    def _post_changes(
        self,
        db,
        stream,
        operation_id,
        doc_ids=None,
        fields=None,
        selector=None,
        last_event_id=None,
        att_encoding_info=None,
        attachments=None,
        conflicts=None,
        descending=None,
        feed=None,
        filter=None,
        heartbeat=None,
        include_docs=None,
        limit=None,
        seq_interval=None,
        since=None,
        style=None,
        timeout=None,
        view=None,
    ):
        require(db=db)
        body = drop_none({"doc_ids": doc_ids, "fields": fields, "selector": selector})
        params = {
            "att_encoding_info": att_encoding_info,
            "attachments": attachments,
            "conflicts": conflicts,
            "descending": descending,
            "feed": feed,
            "filter": filter,
            "heartbeat": heartbeat,
            "include_docs": include_docs,
            "limit": limit,
            "seq_interval": seq_interval,
            "since": since,
            "style": style,
            "timeout": timeout,
            "view": view,
        }
        return self.request(
            "POST",
            [db, "_changes"],
            params=params,
            body=body,
            headers={"Last-Event-ID": last_event_id},
            operation_id=operation_id,
            stream=stream,
        )

    def put_database(self, db, partitioned=None, q=None):
        require(db=db)
        return self.request(
            "PUT",
            [db],
            params={"partitioned": partitioned, "q": q},
            operation_id="put_database",
        )

    def head_database(self, db):
        require(db=db)
        return self.request("HEAD", [db], operation_id="head_database")

    def get_database_information(self, db):
        require(db=db)
        return self.request("GET", [db], operation_id="get_database_information")

    def delete_database(self, db):
        require(db=db)
        return self.request("DELETE", [db], operation_id="delete_database")

    def get_shards_information(self, db):
        require(db=db)
        return self.request(
            "GET", [db, "_shards"], operation_id="get_shards_information"
        )

    def get_document_shards_info(self, db, doc_id):
        require(db=db, doc_id=doc_id)
        return self.request(
            "GET", [db, "_shards", doc_id], operation_id="get_document_shards_info"
        )

    # Documents

    def post_document(self, db, document, content_type=None, batch=None):
        require(db=db, document=document)
        body, data = _payload(document)
        return self.request(
            "POST",
            [db],
            params={"batch": batch},
            body=body,
            data=data,
            headers=_doc_headers(content_type),
            operation_id="post_document",
        )

    def put_document(
        self,
        db,
        doc_id,
        document,
        content_type=None,
        if_match=None,
        batch=None,
        new_edits=None,
        rev=None,
    ):
        require(db=db, doc_id=doc_id, document=document)
        body, data = _payload(document)
        return self.request(
            "PUT",
            [db, doc_id],
            params={"batch": batch, "new_edits": new_edits, "rev": rev},
            body=body,
            data=data,
            headers=_doc_headers(content_type, if_match=if_match),
            operation_id="put_document",
        )

    def get_document(self, db, doc_id, **kwargs):
        return self._get_document(db, doc_id, False, "get_document", **kwargs)

    def get_document_as_stream(self, db, doc_id, **kwargs):
        return self._get_document(db, doc_id, True, "get_document_as_stream", **kwargs)

    def _get_document(
        self,
        db,
        doc_id,
        stream,
        operation_id,
        if_none_match=None,
        attachments=None,
        att_encoding_info=None,
        conflicts=None,
        deleted_conflicts=None,
        latest=None,
        local_seq=None,
        meta=None,
        rev=None,
        revs=None,
        revs_info=None,
    ):
        require(db=db, doc_id=doc_id)
        params = {
            "attachments": attachments,
            "att_encoding_info": att_encoding_info,
            "conflicts": conflicts,
            "deleted_conflicts": deleted_conflicts,
            "latest": latest,
            "local_seq": local_seq,
            "meta": meta,
            "rev": rev,
            "revs": revs,
            "revs_info": revs_info,
        }
        return self.request(
            "GET",
            [db, doc_id],
            params=params,
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id=operation_id,
            stream=stream,
        )

    def head_document(self, db, doc_id, if_none_match=None, latest=None, rev=None):
        require(db=db, doc_id=doc_id)
        return self.request(
            "HEAD",
            [db, doc_id],
            params={"latest": latest, "rev": rev},
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id="head_document",
        )

    def delete_document(self, db, doc_id, if_match=None, batch=None, rev=None):
        require(db=db, doc_id=doc_id)
        return self.request(
            "DELETE",
            [db, doc_id],
            params={"batch": batch, "rev": rev},
            headers=_doc_headers(if_match=if_match),
            operation_id="delete_document",
        )

    def post_all_docs(self, db, **kwargs):
        return self._all_docs([db, "_all_docs"], False, "post_all_docs", **kwargs)

    def post_all_docs_as_stream(self, db, **kwargs):
        return self._all_docs(
            [db, "_all_docs"], True, "post_all_docs_as_stream", **kwargs
        )

    def _all_docs(
        self,
        path,
        stream,
        operation_id,
        att_encoding_info=None,
        attachments=None,
        conflicts=None,
        descending=None,
        include_docs=None,
        inclusive_end=None,
        limit=None,
        skip=None,
        update_seq=None,
        end_key=None,
        key=None,
        keys=None,
        start_key=None,
        headers=None,
    ):
        require(db=path[0])
        body = drop_none(
            {
                "att_encoding_info": att_encoding_info,
                "attachments": attachments,
                "conflicts": conflicts,
                "descending": descending,
                "include_docs": include_docs,
                "inclusive_end": inclusive_end,
                "limit": limit,
                "skip": skip,
                "update_seq": update_seq,
                "end_key": end_key,
                "key": key,
                "keys": keys,
                "start_key": start_key,
            }
        )
        return self.request(
            "POST",
            path,
            body=body,
            headers=headers,
            operation_id=operation_id,
            stream=stream,
        )

    def post_all_docs_queries(self, db, queries):
        require(db=db, queries=queries)
        return self.request(
            "POST",
            [db, "_all_docs", "queries"],
            body={"queries": queries},
            operation_id="post_all_docs_queries",
        )

    def post_bulk_docs(self, db, bulk_docs):
        """Write a batch of documents.

        ``bulk_docs`` is either a dict like ``{"docs": [...]}`` or an
        already encoded JSON payload (bytes or a file object).
        """
        require(db=db, bulk_docs=bulk_docs)
        body, data = _payload(bulk_docs)
        headers = None
        if data is not None:
            headers = {"Content-Type": "application/json"}
        return self.request(
            "POST",
            [db, "_bulk_docs"],
            body=body,
            data=data,
            headers=headers,
            operation_id="post_bulk_docs",
        )

    def post_bulk_get(
        self,
        db,
        docs,
        attachments=None,
        att_encoding_info=None,
        latest=None,
        revs=None,
    ):
        require(db=db, docs=docs)
        params = {
            "attachments": attachments,
            "att_encoding_info": att_encoding_info,
            "latest": latest,
            "revs": revs,
        }
        return self.request(
            "POST",
            [db, "_bulk_get"],
            params=params,
            body={"docs": docs},
            operation_id="post_bulk_get",
        )

    def post_revs_diff(self, db, document_revisions):
        require(db=db, document_revisions=document_revisions)
        return self.request(
            "POST",
            [db, "_revs_diff"],
            body=document_revisions,
            operation_id="post_revs_diff",
        )

    def post_missing_revs(self, db, document_revisions):
        require(db=db, document_revisions=document_revisions)
        return self.request(
            "POST",
            [db, "_missing_revs"],
            body=document_revisions,
            operation_id="post_missing_revs",
        )

    # Local documents

    def put_local_document(self, db, doc_id, document, content_type=None, batch=None):
        require(db=db, doc_id=doc_id, document=document)
        body, data = _payload(document)
        return self.request(
            "PUT",
            [db, "_local", doc_id],
            params={"batch": batch},
            body=body,
            data=data,
            headers=_doc_headers(content_type),
            operation_id="put_local_document",
        )

    def get_local_document(
        self,
        db,
        doc_id,
        accept=None,
        if_none_match=None,
        attachments=None,
        att_encoding_info=None,
        local_seq=None,
    ):
        require(db=db, doc_id=doc_id)
        params = {
            "attachments": attachments,
            "att_encoding_info": att_encoding_info,
            "local_seq": local_seq,
        }
        headers = _doc_headers(if_none_match=if_none_match)
        headers["Accept"] = accept
        return self.request(
            "GET",
            [db, "_local", doc_id],
            params=params,
            headers=headers,
            operation_id="get_local_document",
        )

    def delete_local_document(self, db, doc_id, batch=None):
        require(db=db, doc_id=doc_id)
        return self.request(
            "DELETE",
            [db, "_local", doc_id],
            params={"batch": batch},
            operation_id="delete_local_document",
        )

    # Attachments

    def put_attachment(
        self,
        db,
        doc_id,
        attachment_name,
        attachment,
        content_type,
        if_match=None,
        rev=None,
    ):
        require(
            db=db,
            doc_id=doc_id,
            attachment_name=attachment_name,
            attachment=attachment,
            content_type=content_type,
        )
        return self.request(
            "PUT",
            [db, doc_id, attachment_name],
            params={"rev": rev},
            data=attachment,
            headers=_doc_headers(content_type, if_match=if_match),
            operation_id="put_attachment",
        )

    def get_attachment(
        self,
        db,
        doc_id,
        attachment_name,
        accept=None,
        if_match=None,
        if_none_match=None,
        range=None,
        rev=None,
    ):
        require(db=db, doc_id=doc_id, attachment_name=attachment_name)
        headers = _doc_headers(if_match=if_match, if_none_match=if_none_match)
        headers["Accept"] = accept if accept is not None else "*/*"
        headers["Range"] = range
        return self.request(
            "GET",
            [db, doc_id, attachment_name],
            params={"rev": rev},
            headers=headers,
            operation_id="get_attachment",
        )

    def head_attachment(
        self, db, doc_id, attachment_name, if_match=None, if_none_match=None, rev=None
    ):
        require(db=db, doc_id=doc_id, attachment_name=attachment_name)
        return self.request(
            "HEAD",
            [db, doc_id, attachment_name],
            params={"rev": rev},
            headers=_doc_headers(if_match=if_match, if_none_match=if_none_match),
            operation_id="head_attachment",
        )

    def delete_attachment(
        self, db, doc_id, attachment_name, if_match=None, rev=None, batch=None
    ):
        require(db=db, doc_id=doc_id, attachment_name=attachment_name)
        return self.request(
            "DELETE",
            [db, doc_id, attachment_name],
            params={"rev": rev, "batch": batch},
            headers=_doc_headers(if_match=if_match),
            operation_id="delete_attachment",
        )

    # Design documents and views

    def put_design_document(
        self,
        db,
        ddoc,
        design_document,
        if_match=None,
        batch=None,
        new_edits=None,
        rev=None,
    ):
        require(db=db, ddoc=ddoc, design_document=design_document)
        return self.request(
            "PUT",
            [db, "_design", ddoc],
            params={"batch": batch, "new_edits": new_edits, "rev": rev},
            body=design_document,
            headers=_doc_headers(if_match=if_match),
            operation_id="put_design_document",
        )

    def get_design_document(
        self,
        db,
        ddoc,
        if_none_match=None,
        attachments=None,
        att_encoding_info=None,
        conflicts=None,
        deleted_conflicts=None,
        latest=None,
        local_seq=None,
        meta=None,
        rev=None,
        revs=None,
        revs_info=None,
    ):
        require(db=db, ddoc=ddoc)
        params = {
            "attachments": attachments,
            "att_encoding_info": att_encoding_info,
            "conflicts": conflicts,
            "deleted_conflicts": deleted_conflicts,
            "latest": latest,
            "local_seq": local_seq,
            "meta": meta,
            "rev": rev,
            "revs": revs,
            "revs_info": revs_info,
        }
        return self.request(
            "GET",
            [db, "_design", ddoc],
            params=params,
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id="get_design_document",
        )

    def head_design_document(self, db, ddoc, if_none_match=None):
        require(db=db, ddoc=ddoc)
        return self.request(
            "HEAD",
            [db, "_design", ddoc],
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id="head_design_document",
        )

    def delete_design_document(self, db, ddoc, if_match=None, batch=None, rev=None):
        require(db=db, ddoc=ddoc)
        return self.request(
            "DELETE",
            [db, "_design", ddoc],
            params={"batch": batch, "rev": rev},
            headers=_doc_headers(if_match=if_match),
            operation_id="delete_design_document",
        )

    def get_design_document_information(self, db, ddoc):
        require(db=db, ddoc=ddoc)
        return self.request(
            "GET",
            [db, "_design", ddoc, "_info"],
            operation_id="get_design_document_information",
        )

    def post_design_docs(self, db, accept=None, **kwargs):
        return self._all_docs(
            [db, "_design_docs"],
            False,
            "post_design_docs",
            headers={"Accept": accept},
            **kwargs
        )

    def post_design_docs_queries(self, db, queries, accept=None):
        require(db=db, queries=queries)
        return self.request(
            "POST",
            [db, "_design_docs", "queries"],
            body={"queries": queries},
            headers={"Accept": accept},
            operation_id="post_design_docs_queries",
        )

    def post_view(self, db, ddoc, view, **kwargs):
        require(db=db, ddoc=ddoc, view=view)
        return self._view([db, "_design", ddoc, "_view", view], "post_view", **kwargs)

    def _view(
        self,
        path,
        operation_id,
        att_encoding_info=None,
        attachments=None,
        conflicts=None,
        descending=None,
        include_docs=None,
        inclusive_end=None,
        limit=None,
        skip=None,
        update_seq=None,
        end_key=None,
        end_key_doc_id=None,
        group=None,
        group_level=None,
        key=None,
        keys=None,
        reduce=None,
        stable=None,
        start_key=None,
        start_key_doc_id=None,
        update=None,
    ):
        body = drop_none(
            {
                "att_encoding_info": att_encoding_info,
                "attachments": attachments,
                "conflicts": conflicts,
                "descending": descending,
                "include_docs": include_docs,
                "inclusive_end": inclusive_end,
                "limit": limit,
                "skip": skip,
                "update_seq": update_seq,
                "end_key": end_key,
                "end_key_doc_id": end_key_doc_id,
                "group": group,
                "group_level": group_level,
                "key": key,
                "keys": keys,
                "reduce": reduce,
                "stable": stable,
                "start_key": start_key,
                "start_key_doc_id": start_key_doc_id,
                "update": update,
            }
        )
        return self.request("POST", path, body=body, operation_id=operation_id)

    def post_view_queries(self, db, ddoc, view, queries):
        require(db=db, ddoc=ddoc, view=view, queries=queries)
        return self.request(
            "POST",
            [db, "_design", ddoc, "_view", view, "queries"],
            body={"queries": queries},
            operation_id="post_view_queries",
        )

    # Partitions

    def get_partition_information(self, db, partition_key):
        require(db=db, partition_key=partition_key)
        return self.request(
            "GET",
            [db, "_partition", partition_key],
            operation_id="get_partition_information",
        )

    def post_partition_all_docs(self, db, partition_key, **kwargs):
        require(db=db, partition_key=partition_key)
        return self._all_docs(
            [db, "_partition", partition_key, "_all_docs"],
            False,
            "post_partition_all_docs",
            **kwargs
        )

    def post_partition_view(self, db, partition_key, ddoc, view, **kwargs):
        require(db=db, partition_key=partition_key, ddoc=ddoc, view=view)
        path = [db, "_partition", partition_key, "_design", ddoc, "_view", view]
        return self._view(path, "post_partition_view", **kwargs)

    def post_partition_find(self, db, partition_key, selector, **kwargs):
        require(db=db, partition_key=partition_key, selector=selector)
        return self._find(
            [db, "_partition", partition_key, "_find"],
            "post_partition_find",
            selector,
            **kwargs
        )

    def post_partition_explain(self, db, partition_key, selector, **kwargs):
        require(db=db, partition_key=partition_key, selector=selector)
        return self._find(
            [db, "_partition", partition_key, "_explain"],
            "post_partition_explain",
            selector,
            **kwargs
        )

    def post_partition_search(self, db, partition_key, ddoc, index, query, **kwargs):
        require(
            db=db, partition_key=partition_key, ddoc=ddoc, index=index, query=query
        )
        path = [db, "_partition", partition_key, "_design", ddoc, "_search", index]
        return self._search(path, "post_partition_search", query, **kwargs)

    # Query

    def post_find(self, db, selector, **kwargs):
        require(db=db, selector=selector)
        return self._find([db, "_find"], "post_find", selector, **kwargs)

    def post_explain(self, db, selector, **kwargs):
        require(db=db, selector=selector)
        return self._find([db, "_explain"], "post_explain", selector, **kwargs)

    def _find(
        self,
        path,
        operation_id,
        selector,
        bookmark=None,
        conflicts=None,
        execution_stats=None,
        fields=None,
        limit=None,
        skip=None,
        sort=None,
        stable=None,
        update=None,
        use_index=None,
        r=None,
    ):
        body = drop_none(
            {
                "selector": selector,
                "bookmark": bookmark,
                "conflicts": conflicts,
                "execution_stats": execution_stats,
                "fields": fields,
                "limit": limit,
                "skip": skip,
                "sort": sort,
                "stable": stable,
                "update": update,
                "use_index": use_index,
                "r": r,
            }
        )
        return self.request("POST", path, body=body, operation_id=operation_id)

    def post_index(
        self, db, index, ddoc=None, def_=None, name=None, partitioned=None, type=None
    ):
        require(db=db, index=index)
        body = drop_none(
            {
                "index": index,
                "ddoc": ddoc,
                "def": def_,
                "name": name,
                "partitioned": partitioned,
                "type": type,
            }
        )
        return self.request(
            "POST", [db, "_index"], body=body, operation_id="post_index"
        )

    def get_indexes_information(self, db):
        require(db=db)
        return self.request(
            "GET", [db, "_index"], operation_id="get_indexes_information"
        )

    def delete_index(self, db, ddoc, type, index):
        require(db=db, ddoc=ddoc, type=type, index=index)
        return self.request(
            "DELETE",
            [db, "_index", "_design", ddoc, type, index],
            operation_id="delete_index",
        )

    # Search

    def post_search(self, db, ddoc, index, query, **kwargs):
        require(db=db, ddoc=ddoc, index=index, query=query)
        return self._search(
            [db, "_design", ddoc, "_search", index], "post_search", query, **kwargs
        )

    def _search(
        self,
        path,
        operation_id,
        query,
        bookmark=None,
        highlight_fields=None,
        highlight_number=None,
        highlight_post_tag=None,
        highlight_pre_tag=None,
        highlight_size=None,
        include_docs=None,
        include_fields=None,
        limit=None,
        sort=None,
        stale=None,
        counts=None,
        drilldown=None,
        group_field=None,
        group_limit=None,
        group_sort=None,
        ranges=None,
    ):
        body = drop_none(
            {
                "query": query,
                "bookmark": bookmark,
                "highlight_fields": highlight_fields,
                "highlight_number": highlight_number,
                "highlight_post_tag": highlight_post_tag,
                "highlight_pre_tag": highlight_pre_tag,
                "highlight_size": highlight_size,
                "include_docs": include_docs,
                "include_fields": include_fields,
                "limit": limit,
                "sort": sort,
                "stale": stale,
                "counts": counts,
                "drilldown": drilldown,
                "group_field": group_field,
                "group_limit": group_limit,
                "group_sort": group_sort,
                "ranges": ranges,
            }
        )
        return self.request("POST", path, body=body, operation_id=operation_id)

    def post_search_analyze(self, analyzer, text):
        require(analyzer=analyzer, text=text)
        return self.request(
            "POST",
            ["_search_analyze"],
            body={"analyzer": analyzer, "text": text},
            operation_id="post_search_analyze",
        )

    def get_search_info(self, db, ddoc, index):
        require(db=db, ddoc=ddoc, index=index)
        return self.request(
            "GET",
            [db, "_design", ddoc, "_search_info", index],
            operation_id="get_search_info",
        )

    # Replication

    def put_replication_document(
        self,
        doc_id,
        replication_document,
        if_match=None,
        batch=None,
        new_edits=None,
        rev=None,
    ):
        require(doc_id=doc_id, replication_document=replication_document)
        return self.request(
            "PUT",
            ["_replicator", doc_id],
            params={"batch": batch, "new_edits": new_edits, "rev": rev},
            body=replication_document,
            headers=_doc_headers(if_match=if_match),
            operation_id="put_replication_document",
        )

    def get_replication_document(
        self,
        doc_id,
        if_none_match=None,
        conflicts=None,
        latest=None,
        rev=None,
        revs=None,
        revs_info=None,
    ):
        require(doc_id=doc_id)
        params = {
            "conflicts": conflicts,
            "latest": latest,
            "rev": rev,
            "revs": revs,
            "revs_info": revs_info,
        }
        return self.request(
            "GET",
            ["_replicator", doc_id],
            params=params,
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id="get_replication_document",
        )

    def head_replication_document(self, doc_id, if_none_match=None):
        require(doc_id=doc_id)
        return self.request(
            "HEAD",
            ["_replicator", doc_id],
            headers=_doc_headers(if_none_match=if_none_match),
            operation_id="head_replication_document",
        )

    def delete_replication_document(self, doc_id, if_match=None, batch=None, rev=None):
        require(doc_id=doc_id)
        return self.request(
            "DELETE",
            ["_replicator", doc_id],
            params={"batch": batch, "rev": rev},
            headers=_doc_headers(if_match=if_match),
            operation_id="delete_replication_document",
        )

    def get_scheduler_docs(self, limit=None, skip=None, states=None):
        return self.request(
            "GET",
            ["_scheduler", "docs"],
            params={"limit": limit, "skip": skip, "states": states},
            operation_id="get_scheduler_docs",
        )

    def get_scheduler_document(self, doc_id):
        require(doc_id=doc_id)
        return self.request(
            "GET",
            ["_scheduler", "docs", "_replicator", doc_id],
            operation_id="get_scheduler_document",
        )

    def get_scheduler_jobs(self, limit=None, skip=None):
        return self.request(
            "GET",
            ["_scheduler", "jobs"],
            params={"limit": limit, "skip": skip},
            operation_id="get_scheduler_jobs",
        )

    def get_scheduler_job(self, job_id):
        require(job_id=job_id)
        return self.request(
            "GET", ["_scheduler", "jobs", job_id], operation_id="get_scheduler_job"
        )

    def head_scheduler_job(self, job_id):
        require(job_id=job_id)
        return self.request(
            "HEAD", ["_scheduler", "jobs", job_id], operation_id="head_scheduler_job"
        )

    # Security

    def get_security(self, db):
        require(db=db)
        return self.request("GET", [db, "_security"], operation_id="get_security")

    def put_security(
        self, db, admins=None, members=None, cloudant=None, couchdb_auth_only=None
    ):
        require(db=db)
        body = drop_none(
            {
                "admins": admins,
                "members": members,
                "cloudant": cloudant,
                "couchdb_auth_only": couchdb_auth_only,
            }
        )
        return self.request(
            "PUT", [db, "_security"], body=body, operation_id="put_security"
        )

    def put_cloudant_security(
        self, db, cloudant, admins=None, members=None, couchdb_auth_only=None
    ):
        require(db=db, cloudant=cloudant)
        body = drop_none(
            {
                "cloudant": cloudant,
                "admins": admins,
                "members": members,
                "couchdb_auth_only": couchdb_auth_only,
            }
        )
        return self.request(
            "PUT",
            ["_api", "v2", "db", db, "_security"],
            body=body,
            operation_id="put_cloudant_security",
        )

    def post_api_keys(self):
        return self.request(
            "POST", ["_api", "v2", "api_keys"], operation_id="post_api_keys"
        )

    def get_cors_information(self):
        return self.request(
            "GET",
            ["_api", "v2", "user", "config", "cors"],
            operation_id="get_cors_information",
        )

    def put_cors_configuration(self, origins, allow_credentials=None, enable_cors=None):
        require(origins=origins)
        body = drop_none(
            {
                "origins": origins,
                "allow_credentials": allow_credentials,
                "enable_cors": enable_cors,
            }
        )
        return self.request(
            "PUT",
            ["_api", "v2", "user", "config", "cors"],
            body=body,
            operation_id="put_cors_configuration",
        )
