# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from dataclasses import field

import mesop as me

from models.session import SessionState


@me.stateclass
class PageState:
    """Coloring Page Creator Page State"""

    # pylint: disable=E3701:invalid-field-call

    session: SessionState = field(default_factory=SessionState)

    # Reported by the export_actions web component once it is attached
    share_supported: bool = False

    # Bumped on reset so the uploader forgets the previously chosen file
    uploader_key: int = 0

    processed_resolution: str = ""
