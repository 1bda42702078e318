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


class CloudantError(Exception):
    """An HTTP error status returned by the server.

    The decoded JSON error body is available as ``result``; when the
    server sent CouchDB style ``error``/``reason`` fields they are also
    summarized in ``errors`` as a list of ``{"code", "message"}`` dicts.
    """

    def __init__(self, response, message=None):
        self.response = response
        self.status_code = response.status_code if response is not None else None
        self.result = None
        self.errors = []
        self.trace = None
        if response is not None:
            self.result = augment_error(response)
            if isinstance(self.result, dict):
                self.errors = self.result.get("errors", [])
                self.trace = self.result.get("trace")
        if message is None:
            message = self._message()
        self.message = message
        super(CloudantError, self).__init__(message)

    def _message(self):
        for err in self.errors:
            if isinstance(err, dict) and err.get("message"):
                return err["message"]
        if self.response is None:
            return "Unknown error"
        if self.response.text:
            return self.response.text
        return self.response.reason or "Unknown error"

    def __str__(self):
        msg = "Error: {}, Status code: {}".format(self.message, self.status_code)
        if self.trace:
            msg += ", Trace: {}".format(self.trace)
        return msg


class AuthenticationError(CloudantError):
    pass


def _is_json(response):
    ct = response.headers.get("Content-Type", "")
    return ct.startswith("application/json")


def augment_error(response):
    """Decode an error body, adding ``errors`` and ``trace`` if missing.

    Returns the decoded body, or ``None`` if it is not JSON.
    """
    if not _is_json(response):
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict) or "trace" in body:
        return body

    if "errors" not in body and "error" in body:
        code = body["error"]
        message = code
        if body.get("reason"):
            message += ": " + body["reason"]
        body["errors"] = [{"code": code, "message": message}]

    trace = response.headers.get("X-Request-Id")
    if not trace:
        trace = response.headers.get("X-Couch-Request-Id")
    if "errors" in body and trace:
        body["trace"] = trace
    return body

