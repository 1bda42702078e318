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

"""External configuration for service clients.

Properties are looked up per service name, e.g. for ``CLOUDANT``::

    CLOUDANT_URL=https://example.cloudant.com
    CLOUDANT_AUTH_TYPE=COUCHDB_SESSION
    CLOUDANT_USERNAME=admin
    CLOUDANT_PASSWORD=pass

either in a credentials file or in the process environment.
"""

import logging
import os

from . import auth


log = logging.getLogger(__name__)

CREDENTIALS_FILE_ENV = "IBM_CREDENTIALS_FILE"
DEFAULT_CREDENTIALS_FILE = "ibm-credentials.env"

PROPNAME_URL = "URL"
PROPNAME_AUTH_TYPE = "AUTH_TYPE"
PROPNAME_USERNAME = "USERNAME"
PROPNAME_PASSWORD = "PASSWORD"
PROPNAME_BEARER_TOKEN = "BEARER_TOKEN"
PROPNAME_DISABLE_SSL = "DISABLE_SSL"


def _prefix(service_name):
    return service_name.upper().replace("-", "_") + "_"


def _credential_file_paths():
    explicit = os.environ.get(CREDENTIALS_FILE_ENV)
    if explicit:
        return [explicit]
    return [
        os.path.join(os.getcwd(), DEFAULT_CREDENTIALS_FILE),
        os.path.join(os.path.expanduser("~"), DEFAULT_CREDENTIALS_FILE),
    ]


def _select(pairs, service_name):
    prefix = _prefix(service_name)
    props = {}
    for key, value in pairs:
        if key.startswith(prefix):
            props[key[len(prefix):]] = value
    # AUTHTYPE is an older spelling of AUTH_TYPE
    if PROPNAME_AUTH_TYPE not in props and "AUTHTYPE" in props:
        props[PROPNAME_AUTH_TYPE] = props.pop("AUTHTYPE")
    return props


def read_credentials_file(path):
    pairs = []
    with open(path) as handle:
        for line in handle:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            pairs.append((key.strip(), value.strip()))
    return pairs


def properties_from_file(service_name):
    for path in _credential_file_paths():
        if not os.path.isfile(path):
            continue
        log.debug("Reading service properties from %s", path)
        return _select(read_credentials_file(path), service_name)
    return {}


def properties_from_environment(service_name):
    return _select(os.environ.items(), service_name)


def get_service_properties(service_name):
    props = properties_from_file(service_name)
    if not props:
        props = properties_from_environment(service_name)
    return props


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def get_authenticator_from_environment(service_name):
    props = get_service_properties(service_name)
    auth_type = props.get(PROPNAME_AUTH_TYPE)
    if not auth_type:
        if props.get(PROPNAME_USERNAME):
            auth_type = auth.AUTHTYPE_COUCHDB_SESSION
        else:
            auth_type = auth.AUTHTYPE_NOAUTH
    auth_type = auth_type.upper()

    if auth_type == auth.AUTHTYPE_COUCHDB_SESSION:
        authenticator = auth.CouchDbSessionAuthenticator(
            props.get(PROPNAME_USERNAME), props.get(PROPNAME_PASSWORD)
        )
        if props.get(PROPNAME_URL):
            authenticator.url = props[PROPNAME_URL].rstrip("/")
        if parse_bool(props.get(PROPNAME_DISABLE_SSL, "")):
            authenticator.disable_ssl_verification = True
        return authenticator
    elif auth_type == auth.AUTHTYPE_BASIC:
        return auth.BasicAuthenticator(
            props.get(PROPNAME_USERNAME), props.get(PROPNAME_PASSWORD)
        )
    elif auth_type == auth.AUTHTYPE_BEARERTOKEN:
        return auth.BearerTokenAuthenticator(props.get(PROPNAME_BEARER_TOKEN))
    elif auth_type == auth.AUTHTYPE_NOAUTH:
        return auth.NoAuthAuthenticator()
    raise ValueError("Unsupported authentication type: {}".format(auth_type))
