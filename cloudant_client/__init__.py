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

from .auth import (
    BasicAuthenticator,
    BearerTokenAuthenticator,
    CouchDbSessionAuthenticator,
    NoAuthAuthenticator,
)
from .base import BaseService, DetailedResponse
from .cloudant_v1 import CloudantV1
from .common import __version__
from .errors import AuthenticationError, CloudantError
from .fanout import FanOut, fan_out, same_members
