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

import platform


__version__ = "0.1.0"

SDK_NAME = "cloudant-client"


def get_system_info():
    return "python.version={}; os.name={}; os.arch={}; lang=python;".format(
        platform.python_version(), platform.system(), platform.machine()
    )


def get_user_agent():
    return "{}/{} ({})".format(SDK_NAME, __version__, get_system_info())


def get_sdk_headers(operation_id):
    return {
        "User-Agent": get_user_agent(),
        "X-IBMCloud-SDK-Analytics": "service_name=cloudant;"
        "service_version=V1;operation_id={}".format(operation_id),
    }
