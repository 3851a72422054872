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

"""Python wrapper for the Export Actions Lit component (download and native share)."""

import typing

import mesop as me

from services.export_service import DownloadFile, SharePayload


@me.web_component(path="./export_actions.js")
def export_actions(
    *,
    download: DownloadFile | None,
    share: SharePayload | None,
    on_share_result: typing.Callable[[me.WebEvent], None] | None = None,
    on_capability: typing.Callable[[me.WebEvent], None] | None = None,
    key: str | None = None,
):
    """
    Renders Download and Share buttons for the generated coloring page.

    Args:
        download: File to offer for download; the button is hidden when None.
        share: Payload for the native share sheet; the button is hidden when None.
        on_share_result: Receives {"outcome", "error_name", "error_message"}.
        on_capability: Receives {"available": bool} once the component is attached.
    """
    source = download or share
    return me.insert_web_component(
        key=key,
        name="export-actions",
        properties={
            "showDownload": download is not None,
            "showShare": share is not None,
            "imageDataUrl": source.data_url if source else "",
            "fileName": source.file_name if source else "",
            "mimeType": source.mime_type if source else "",
            "shareTitle": share.title if share else "",
            "shareText": share.text if share else "",
        },
        events={
            "shareResultEvent": on_share_result,
            "capabilityEvent": on_capability,
        },
    )
