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

import base64
import logging
import threading
import time
from urllib.parse import urlsplit

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from .errors import AuthenticationError, CloudantError


log = logging.getLogger(__name__)

AUTHTYPE_NOAUTH = "NOAUTH"
AUTHTYPE_BASIC = "BASIC"
AUTHTYPE_BEARERTOKEN = "BEARERTOKEN"
AUTHTYPE_COUCHDB_SESSION = "COUCHDB_SESSION"

SESSION_COOKIE = "AuthSession"


def has_bad_first_or_last_char(value):
    if not value:
        return False
    return value[0] in '{}"' or value[-1] in '{}"'


def _check_property(name, value):
    if not value:
        raise ValueError("The {} property is required but was not specified.".format(name))
    if has_bad_first_or_last_char(value):
        raise ValueError(
            "The {} property is invalid. Please remove any surrounding "
            "{{, }}, or \" characters.".format(name)
        )


class Authenticator(AuthBase):
    def authentication_type(self):
        raise NotImplementedError()

    def validate(self):
        pass

    def __call__(self, r):
        return r


class NoAuthAuthenticator(Authenticator):
    def authentication_type(self):
        return AUTHTYPE_NOAUTH


class BasicAuthenticator(Authenticator):
    def __init__(self, username, password):
        self.username = username
        self.password = password
        self.validate()

    def authentication_type(self):
        return AUTHTYPE_BASIC

    def validate(self):
        _check_property("username", self.username)
        _check_property("password", self.password)

    def __call__(self, r):
        return HTTPBasicAuth(self.username, self.password)(r)


class BearerTokenAuthenticator(Authenticator):
    def __init__(self, bearer_token):
        self.bearer_token = bearer_token
        self.validate()

    def authentication_type(self):
        return AUTHTYPE_BEARERTOKEN

    def validate(self):
        if not self.bearer_token:
            raise ValueError("The bearer token shouldn't be None.")

    def __call__(self, r):
        r.headers["Authorization"] = "Bearer {}".format(self.bearer_token)
        return r


def _session_expiry(value):
    # AuthSession is base64(user:hex-timestamp:hmac)
    try:
        padded = value + "=" * (-len(value) % 4)
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        parts = raw.split(b":")
        return int(parts[1], 16)
    except (ValueError, IndexError) as e:
        raise ValueError("Invalid format for AuthSession: {}".format(e))


class Session(object):
    """An ``AuthSession`` cookie and its expiry bookkeeping.

    Times are seconds since the epoch. A session should be refreshed once
    80% of its remaining lifetime at creation has passed.
    """

    def __init__(self, value, expires):
        self.value = value
        self.expires = expires
        now = time.time()
        self.refresh_time = expires - (expires - now) * 0.2

    @classmethod
    def from_cookie(cls, cookie):
        expires = cookie.expires
        if not expires:
            expires = _session_expiry(cookie.value)
        return cls(cookie.value, expires)

    def is_valid(self):
        return self.value is not None and time.time() < self.expires

    def needs_refresh(self):
        now = time.time()
        if now > self.refresh_time:
            # only one caller gets to refresh; others wait a minute
            self.refresh_time = now + 60
            return True
        return False


class CouchDbSessionAuthenticator(Authenticator):
    """Authenticates requests with a CouchDB session cookie.

    The cookie is fetched from ``/_session`` on first use and renewed in
    the background when it gets close to expiry; an expired session is
    renewed before the request goes out.
    """

    def __init__(self, username, password):
        self.username = username
        self.password = password
        self.url = None
        self.disable_ssl_verification = False
        self.headers = {}
        self.timeout = None
        self.sess = requests.session()
        self._session = None
        self._lock = threading.Lock()
        self.validate()

    def authentication_type(self):
        return AUTHTYPE_COUCHDB_SESSION

    def validate(self):
        _check_property("username", self.username)
        _check_property("password", self.password)

    def __call__(self, r):
        if not self.url:
            parts = urlsplit(r.url)
            self.url = "{}://{}".format(parts.scheme, parts.netloc)
        cookie = self.refresh_cookie()
        cookies = [
            c.strip()
            for c in r.headers.get("Cookie", "").split(";")
            if c.strip() and not c.strip().startswith(SESSION_COOKIE + "=")
        ]
        cookies.append("{}={}".format(SESSION_COOKIE, cookie))
        r.headers["Cookie"] = "; ".join(cookies)
        return r

    def refresh_cookie(self):
        with self._lock:
            if self._session is None or not self._session.is_valid():
                self._session = self.request_session()
            elif self._session.needs_refresh():
                t = threading.Thread(target=self._refresh_in_background)
                t.daemon = True
                t.start()
            return self._session.value

    def _refresh_in_background(self):
        # The current session is still valid, so a failure here is not
        # reported to the caller.
        try:
            session = self.request_session()
        except (CloudantError, ValueError, requests.RequestException) as e:
            log.debug("Background session refresh failed: %s", e)
            return
        with self._lock:
            self._session = session
        log.debug("Refreshed session cookie, expires at %s", session.expires)

    def request_session(self):
        headers = dict(self.headers)
        headers["Content-Type"] = "application/x-www-form-urlencoded"
        r = self.sess.post(
            self.url + "/_session",
            data={"name": self.username, "password": self.password},
            headers=headers,
            auth=HTTPBasicAuth(self.username, self.password),
            verify=not self.disable_ssl_verification,
            timeout=self.timeout,
        )
        if r.status_code < 200 or r.status_code >= 300:
            raise AuthenticationError(r)
        for cookie in r.cookies:
            if cookie.name == SESSION_COOKIE:
                return Session.from_cookie(cookie)
        raise AuthenticationError(r, "Missing AuthSession cookie in the response")
