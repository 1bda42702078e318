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
import unittest

from testutil import SERVICE_URL, make_response, mock_client, sent, sent_body


class OperationTests(unittest.TestCase):
    """Checks the request each operation sends."""

    def setUp(self):
        self.client = mock_client(make_response(200, {"ok": True}))

    def check(self, method, path, body=None, params=None):
        m, url, kwargs = sent(self.client)
        self.assertEqual(m, method)
        self.assertEqual(url, SERVICE_URL + path)
        if body is not None:
            self.assertEqual(sent_body(self.client), body)
        if params is not None:
            self.assertEqual(kwargs["params"], params)
        return kwargs


class ServerTests(OperationTests):
    def test_get_server_information(self):
        self.client.get_server_information()
        self.check("GET", "")

    def test_get_uuids(self):
        self.client.get_uuids(count=3)
        self.check("GET", "/_uuids", params={"count": 3})

    def test_capacity(self):
        self.client.get_capacity_throughput_information()
        self.check("GET", "/_api/v2/user/capacity/throughput")
        self.setUp()
        self.client.put_capacity_throughput_configuration(blocks=2)
        self.check("PUT", "/_api/v2/user/capacity/throughput", body={"blocks": 2})

    def test_current_throughput(self):
        self.client.get_current_throughput_information()
        self.check("GET", "/_api/v2/user/current/throughput")

    def test_up(self):
        self.client.get_up_information()
        self.check("GET", "/_up")
        self.setUp()
        self.client.head_up_information()
        self.check("HEAD", "/_up")

    def test_membership_and_tasks(self):
        self.client.get_membership_information()
        self.check("GET", "/_membership")
        self.setUp()
        self.client.get_active_tasks()
        self.check("GET", "/_active_tasks")

    def test_activity_tracker(self):
        self.client.get_activity_tracker_events()
        self.check("GET", "/_api/v2/user/activity_tracker/events")
        self.setUp()
        self.client.post_activity_tracker_events(["management"])
        self.check(
            "POST",
            "/_api/v2/user/activity_tracker/events",
            body={"types": ["management"]},
        )

    def test_session_information(self):
        self.client.get_session_information()
        self.check("GET", "/_session")


class DatabaseTests(OperationTests):
    def test_get_all_dbs(self):
        self.client.get_all_dbs(limit=10, start_key="a", descending=False)
        self.check(
            "GET",
            "/_all_dbs",
            params={"descending": "false", "limit": 10, "start_key": '"a"'},
        )

    def test_post_dbs_info(self):
        self.client.post_dbs_info(["products", "users"])
        self.check("POST", "/_dbs_info", body={"keys": ["products", "users"]})

    def test_get_db_updates(self):
        self.client.get_db_updates(feed="normal", since="now")
        self.check("GET", "/_db_updates", params={"feed": "normal", "since": "now"})

    def test_post_changes(self):
        self.client.post_changes(
            "orders", selector={"type": "order"}, since="now", include_docs=True,
            last_event_id="5-abc",
        )
        kwargs = self.check(
            "POST",
            "/orders/_changes",
            body={"selector": {"type": "order"}},
            params={"since": "now", "include_docs": "true"},
        )
        self.assertEqual(kwargs["headers"]["Last-Event-ID"], "5-abc")

    def test_database_crud(self):
        self.client.put_database("products", partitioned=True)
        self.check("PUT", "/products", params={"partitioned": "true"})
        self.setUp()
        self.client.head_database("products")
        self.check("HEAD", "/products")
        self.setUp()
        self.client.get_database_information("products")
        self.check("GET", "/products")
        self.setUp()
        self.client.delete_database("products")
        self.check("DELETE", "/products")

    def test_shards(self):
        self.client.get_shards_information("products")
        self.check("GET", "/products/_shards")
        self.setUp()
        self.client.get_document_shards_info("products", "small-appliances:1000042")
        self.check("GET", "/products/_shards/small-appliances%3A1000042")


class DocumentTests(OperationTests):
    def test_post_document(self):
        self.client.post_document("products", {"type": "product"})
        self.check("POST", "/products", body={"type": "product"})

    def test_post_document_raw(self):
        self.client.post_document(
            "products", b'{"raw": true}', content_type="application/json"
        )
        kwargs = self.check("POST", "/products")
        self.assertEqual(kwargs["data"], b'{"raw": true}')
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")

    def test_put_document(self):
        self.client.put_document("events", "0007241142412418284", {"a": 1}, rev="1-x")
        self.check(
            "PUT", "/events/0007241142412418284", body={"a": 1}, params={"rev": "1-x"}
        )

    def test_get_document(self):
        self.client.get_document("products", "p1", conflicts=True, rev="2-y")
        self.check("GET", "/products/p1", params={"conflicts": "true", "rev": "2-y"})

    def test_get_document_as_stream(self):
        self.client.get_document_as_stream("products", "p1")
        kwargs = self.check("GET", "/products/p1")
        assert kwargs["stream"] is True

    def test_head_document(self):
        self.client.head_document("products", "p1", if_none_match='"1-a"')
        kwargs = self.check("HEAD", "/products/p1")
        self.assertEqual(kwargs["headers"]["If-None-Match"], '"1-a"')

    def test_delete_document(self):
        self.client.delete_document("orders", "order00058", rev="1-99b")
        self.check("DELETE", "/orders/order00058", params={"rev": "1-99b"})

    def test_post_all_docs(self):
        self.client.post_all_docs("orders", include_docs=True, start_key="abc", limit=10)
        self.check(
            "POST",
            "/orders/_all_docs",
            body={"include_docs": True, "start_key": "abc", "limit": 10},
        )

    def test_post_all_docs_as_stream(self):
        self.client.post_all_docs_as_stream("orders", limit=1)
        kwargs = self.check("POST", "/orders/_all_docs", body={"limit": 1})
        assert kwargs["stream"] is True

    def test_post_all_docs_queries(self):
        queries = [{"keys": ["a"]}, {"limit": 3, "skip": 2}]
        self.client.post_all_docs_queries("products", queries)
        self.check("POST", "/products/_all_docs/queries", body={"queries": queries})

    def test_post_bulk_docs(self):
        docs = {"docs": [{"_id": "0007241142412418284"}, {"_id": "0007241142412418285"}]}
        self.client.post_bulk_docs("events", docs)
        self.check("POST", "/events/_bulk_docs", body=docs)

    def test_post_bulk_docs_raw(self):
        payload = json.dumps({"docs": []}).encode("utf-8")
        self.client.post_bulk_docs("events", payload)
        kwargs = self.check("POST", "/events/_bulk_docs")
        self.assertEqual(kwargs["data"], payload)
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")

    def test_post_bulk_get(self):
        docs = [{"id": "order00067", "rev": "3-917fa23"}]
        self.client.post_bulk_get("orders", docs, revs=True)
        self.check("POST", "/orders/_bulk_get", body={"docs": docs}, params={"revs": "true"})

    def test_revs(self):
        revs = {"order00077": ["<order00077-existing-revision>"]}
        self.client.post_revs_diff("orders", revs)
        self.check("POST", "/orders/_revs_diff", body=revs)
        self.setUp()
        self.client.post_missing_revs("orders", revs)
        self.check("POST", "/orders/_missing_revs", body=revs)


class LocalDocumentTests(OperationTests):
    def test_local_crud(self):
        self.client.put_local_document("orders", "local-0007741142412418284", {"x": 1})
        self.check("PUT", "/orders/_local/local-0007741142412418284", body={"x": 1})
        self.setUp()
        self.client.get_local_document("orders", "local-1", local_seq=True)
        self.check("GET", "/orders/_local/local-1", params={"local_seq": "true"})
        self.setUp()
        self.client.delete_local_document("orders", "local-1")
        self.check("DELETE", "/orders/_local/local-1")


class AttachmentTests(OperationTests):
    def test_put_attachment(self):
        self.client.put_attachment(
            "products", "1000042", "product_details.txt", b"hello", "text/plain"
        )
        kwargs = self.check("PUT", "/products/1000042/product_details.txt")
        self.assertEqual(kwargs["data"], b"hello")
        self.assertEqual(kwargs["headers"]["Content-Type"], "text/plain")

    def test_attachment_reads_and_delete(self):
        self.client.head_attachment("products", "1000042", "a.txt", rev="1-a")
        self.check("HEAD", "/products/1000042/a.txt", params={"rev": "1-a"})
        self.setUp()
        self.client.get_attachment("products", "1000042", "a.txt", range="bytes=0-5")
        kwargs = self.check("GET", "/products/1000042/a.txt")
        self.assertEqual(kwargs["headers"]["Range"], "bytes=0-5")
        self.setUp()
        self.client.delete_attachment("products", "1000042", "a.txt", rev="4-33")
        self.check("DELETE", "/products/1000042/a.txt", params={"rev": "4-33"})


class DesignDocumentTests(OperationTests):
    def test_design_document_crud(self):
        ddoc = {"views": {"getVerifiedEmails": {"map": "function(doc) {}"}}}
        self.client.put_design_document("users", "allusers", ddoc)
        self.check("PUT", "/users/_design/allusers", body=ddoc)
        self.setUp()
        self.client.get_design_document("users", "allusers", latest=True)
        self.check("GET", "/users/_design/allusers", params={"latest": "true"})
        self.setUp()
        self.client.head_design_document("users", "allusers")
        self.check("HEAD", "/users/_design/allusers")
        self.setUp()
        self.client.delete_design_document("users", "allusers", rev="1-a")
        self.check("DELETE", "/users/_design/allusers", params={"rev": "1-a"})
        self.setUp()
        self.client.get_design_document_information("users", "allusers")
        self.check("GET", "/users/_design/allusers/_info")

    def test_post_design_docs(self):
        self.client.post_design_docs("users", attachments=True, accept="application/json")
        kwargs = self.check("POST", "/users/_design_docs", body={"attachments": True})
        self.assertEqual(kwargs["headers"]["Accept"], "application/json")
        self.setUp()
        queries = [{"include_docs": True, "limit": 5}]
        self.client.post_design_docs_queries("users", queries)
        self.check("POST", "/users/_design_docs/queries", body={"queries": queries})

    def test_post_view(self):
        self.client.post_view(
            "users", "allusers", "getVerifiedEmails", include_docs=True, limit=5
        )
        self.check(
            "POST",
            "/users/_design/allusers/_view/getVerifiedEmails",
            body={"include_docs": True, "limit": 5},
        )

    def test_post_view_queries(self):
        queries = [{"include_docs": True, "limit": 5}, {"descending": True, "skip": 1}]
        self.client.post_view_queries("users", "allusers", "getVerifiedEmails", queries)
        self.check(
            "POST",
            "/users/_design/allusers/_view/getVerifiedEmails/queries",
            body={"queries": queries},
        )


class PartitionTests(OperationTests):
    def test_partition_information(self):
        self.client.get_partition_information("events", "ns1HJS13AMkK")
        self.check("GET", "/events/_partition/ns1HJS13AMkK")

    def test_partition_all_docs(self):
        self.client.post_partition_all_docs("events", "ns1HJS13AMkK", include_docs=True)
        self.check(
            "POST", "/events/_partition/ns1HJS13AMkK/_all_docs", body={"include_docs": True}
        )

    def test_partition_view(self):
        self.client.post_partition_view(
            "events", "ns1HJS13AMkK", "checkout", "byProductId", limit=3
        )
        self.check(
            "POST",
            "/events/_partition/ns1HJS13AMkK/_design/checkout/_view/byProductId",
            body={"limit": 3},
        )

    def test_partition_find_and_explain(self):
        sel = {"userId": {"$eq": "abc123"}}
        self.client.post_partition_find("events", "ns1HJS13AMkK", sel, fields=["productId"])
        self.check(
            "POST",
            "/events/_partition/ns1HJS13AMkK/_find",
            body={"selector": sel, "fields": ["productId"]},
        )
        self.setUp()
        self.client.post_partition_explain("events", "ns1HJS13AMkK", sel)
        self.check("POST", "/events/_partition/ns1HJS13AMkK/_explain", body={"selector": sel})

    def test_partition_search(self):
        self.client.post_partition_search(
            "events", "ns1HJS13AMkK", "checkout", "findByPrice", "price:[14 TO 20]"
        )
        self.check(
            "POST",
            "/events/_partition/ns1HJS13AMkK/_design/checkout/_search/findByPrice",
            body={"query": "price:[14 TO 20]"},
        )


class QueryTests(OperationTests):
    def test_post_find(self):
        sel = {"email_verified": {"$eq": True}}
        self.client.post_find("users", sel, fields=["_id"], sort=[{"email": "desc"}])
        self.check(
            "POST",
            "/users/_find",
            body={"selector": sel, "fields": ["_id"], "sort": [{"email": "desc"}]},
        )

    def test_post_explain(self):
        self.client.post_explain("users", {"type": "user"}, execution_stats=True)
        self.check(
            "POST",
            "/users/_explain",
            body={"selector": {"type": "user"}, "execution_stats": True},
        )

    def test_post_index(self):
        index = {"fields": [{"email": "asc"}]}
        self.client.post_index("users", index, ddoc="json-index", name="getUserByEmail", type="json")
        self.check(
            "POST",
            "/users/_index",
            body={"index": index, "ddoc": "json-index", "name": "getUserByEmail", "type": "json"},
        )

    def test_indexes(self):
        self.client.get_indexes_information("users")
        self.check("GET", "/users/_index")
        self.setUp()
        self.client.delete_index("users", "json-index", "json", "getUserByName")
        self.check("DELETE", "/users/_index/_design/json-index/json/getUserByName")


class SearchTests(OperationTests):
    def test_post_search(self):
        self.client.post_search(
            "users", "checkout", "findByPrice", "price:[14 TO 20]", include_docs=True
        )
        self.check(
            "POST",
            "/users/_design/checkout/_search/findByPrice",
            body={"query": "price:[14 TO 20]", "include_docs": True},
        )

    def test_post_search_analyze(self):
        self.client.post_search_analyze("english", "running is fun")
        self.check(
            "POST",
            "/_search_analyze",
            body={"analyzer": "english", "text": "running is fun"},
        )

    def test_get_search_info(self):
        self.client.get_search_info("events", "checkout", "findByPrice")
        self.check("GET", "/events/_design/checkout/_search_info/findByPrice")


class ReplicationTests(OperationTests):
    def test_replication_documents(self):
        doc = {"source": "http://a/animaldb", "target": "http://b/animaldb-target"}
        self.client.put_replication_document("repldoc-example", doc)
        self.check("PUT", "/_replicator/repldoc-example", body=doc)
        self.setUp()
        self.client.get_replication_document("repldoc-example")
        self.check("GET", "/_replicator/repldoc-example")
        self.setUp()
        self.client.head_replication_document("repldoc-example")
        self.check("HEAD", "/_replicator/repldoc-example")
        self.setUp()
        self.client.delete_replication_document("repldoc-example", rev="3-a0ccbdc")
        self.check("DELETE", "/_replicator/repldoc-example", params={"rev": "3-a0ccbdc"})

    def test_scheduler(self):
        self.client.get_scheduler_docs(limit=100, states=["completed", "failed"])
        self.check(
            "GET",
            "/_scheduler/docs",
            params={"limit": 100, "states": "completed,failed"},
        )
        self.setUp()
        self.client.get_scheduler_document("repldoc-example")
        self.check("GET", "/_scheduler/docs/_replicator/repldoc-example")
        self.setUp()
        self.client.get_scheduler_jobs(skip=1)
        self.check("GET", "/_scheduler/jobs", params={"skip": 1})
        self.setUp()
        self.client.get_scheduler_job("7b94915cd8c4a0173c77c55cd0443939+continuous")
        self.check("GET", "/_scheduler/jobs/7b94915cd8c4a0173c77c55cd0443939%2Bcontinuous")
        self.setUp()
        self.client.head_scheduler_job("job")
        self.check("HEAD", "/_scheduler/jobs/job")


class SecurityTests(OperationTests):
    def test_security(self):
        self.client.get_security("products")
        self.check("GET", "/products/_security")
        self.setUp()
        self.client.put_security("products", members={"names": ["user1"]})
        self.check("PUT", "/products/_security", body={"members": {"names": ["user1"]}})

    def test_cloudant_security(self):
        perms = {"nobody": ["_reader", "_writer"]}
        self.client.put_cloudant_security("products", perms)
        self.check("PUT", "/_api/v2/db/products/_security", body={"cloudant": perms})

    def test_api_keys(self):
        self.client.post_api_keys()
        self.check("POST", "/_api/v2/api_keys")

    def test_cors(self):
        self.client.get_cors_information()
        self.check("GET", "/_api/v2/user/config/cors")
        self.setUp()
        self.client.put_cors_configuration(["https://example.com"], enable_cors=True)
        self.check(
            "PUT",
            "/_api/v2/user/config/cors",
            body={"origins": ["https://example.com"], "enable_cors": True},
        )
