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
import logging
from urllib.parse import quote

import requests

from . import auth
from . import common
from . import config
from .errors import CloudantError


log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 6 * 60

# Path segments that must not start with "_" for a given operation.
DOC_ID_RULE = (1, "Document ID")
ATT_NAME_RULE = (2, "Attachment name")

VALIDATION_RULES = {
    "delete_document": [DOC_ID_RULE],
    "get_document": [DOC_ID_RULE],
    "get_document_as_stream": [DOC_ID_RULE],
    "head_document": [DOC_ID_RULE],
    "put_document": [DOC_ID_RULE],
    "delete_attachment": [DOC_ID_RULE, ATT_NAME_RULE],
    "get_attachment": [DOC_ID_RULE, ATT_NAME_RULE],
    "head_attachment": [DOC_ID_RULE, ATT_NAME_RULE],
    "put_attachment": [DOC_ID_RULE, ATT_NAME_RULE],
}


class DetailedResponse(object):
    def __init__(self, result=None, headers=None, status_code=None):
        self.result = result
        self.headers = headers if headers is not None else {}
        self.status_code = status_code

    def get_result(self):
        return self.result

    def get_headers(self):
        return self.headers

    def get_status_code(self):
        return self.status_code

    def __repr__(self):
        return "<DetailedResponse [{}]>".format(self.status_code)


def encode_params(params):
    ret = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        ret[key] = value
    return ret


def drop_none(body):
    return {k: v for k, v in body.items() if v is not None}


def validate_path(operation_id, path):
    for idx, name in VALIDATION_RULES.get(operation_id, []):
        if len(path) > idx and str(path[idx]).startswith("_"):
            raise ValueError(
                "{} {} starts with the invalid _ character".format(name, path[idx])
            )


def require(**kwargs):
    for name, value in kwargs.items():
        if value is None:
            raise ValueError("{} must be provided".format(name))


class BaseService(object):
    def __init__(self, service_url=None, authenticator=None):
        if authenticator is None:
            authenticator = auth.NoAuthAuthenticator()
        self.authenticator = authenticator
        self.sess = requests.session()
        self.sess.auth = authenticator
        self.sess.headers["User-Agent"] = common.get_user_agent()
        self.sess.headers["Accept"] = "application/json"
        self.default_headers = {}
        self.timeout = DEFAULT_TIMEOUT
        self.disable_ssl_verification = False
        self.service_url = None
        if service_url is not None:
            self.set_service_url(service_url)

    def set_service_url(self, service_url):
        if service_url is None:
            raise ValueError("service_url must be provided")
        self.service_url = service_url.rstrip("/")
        if isinstance(self.authenticator, auth.CouchDbSessionAuthenticator):
            self.authenticator.url = self.service_url

    def set_default_headers(self, headers):
        if not isinstance(headers, dict):
            raise TypeError("headers must be a dictionary")
        self.default_headers = dict(headers)
        if isinstance(self.authenticator, auth.CouchDbSessionAuthenticator):
            self.authenticator.headers = dict(headers)

    def set_disable_ssl_verification(self, status=False):
        self.disable_ssl_verification = status
        if isinstance(self.authenticator, auth.CouchDbSessionAuthenticator):
            self.authenticator.disable_ssl_verification = status

    def set_timeout(self, seconds):
        self.timeout = seconds
        if isinstance(self.authenticator, auth.CouchDbSessionAuthenticator):
            self.authenticator.timeout = seconds

    def configure_service(self, service_name):
        props = config.get_service_properties(service_name)
        if props.get(config.PROPNAME_URL):
            self.set_service_url(props[config.PROPNAME_URL])
        if config.parse_bool(props.get(config.PROPNAME_DISABLE_SSL, "")):
            self.set_disable_ssl_verification(True)

    def url(self, path):
        if self.service_url is None:
            raise ValueError("The service URL is required")
        parts = [quote(str(p), safe="") for p in path]
        return "/".join([self.service_url] + parts)

    def request(
        self,
        method,
        path,
        params=None,
        body=None,
        data=None,
        headers=None,
        operation_id=None,
        stream=False,
    ):
        """Issue a request and wrap the reply in a ``DetailedResponse``.

        ``path`` is a list of unencoded segments. ``body`` is JSON encoded,
        ``data`` is sent as given. ``stream`` returns the ``requests``
        response itself as the result, unread.
        """
        if operation_id is not None:
            validate_path(operation_id, path)

        hdrs = dict(self.default_headers)
        if operation_id is not None:
            hdrs.update(common.get_sdk_headers(operation_id))
        if body is not None:
            hdrs["Content-Type"] = "application/json"
            data = json.dumps(body)
        if headers:
            hdrs.update({k: v for k, v in headers.items() if v is not None})

        url = self.url(path)
        log.debug("%s %s", method.upper(), url)
        r = self.sess.request(
            method.upper(),
            url,
            params=encode_params(params),
            data=data,
            headers=hdrs,
            timeout=self.timeout,
            verify=not self.disable_ssl_verification,
            stream=stream,
        )
        if r.status_code >= 400:
            raise CloudantError(r)

        if method.upper() == "HEAD":
            result = None
        elif stream:
            result = r
        elif r.headers.get("Content-Type", "").startswith("application/json"):
            result = r.json()
        elif r.content:
            result = r.content
        else:
            result = None
        return DetailedResponse(result, r.headers, r.status_code)
