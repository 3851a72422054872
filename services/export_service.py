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

"""Service for downloading and sharing generated coloring pages."""

from dataclasses import dataclass
from typing import Literal, Protocol

from pydantic import BaseModel

from common.analytics import log_export
from common.error_handling import (
    NoProcessedImageError,
    ShareFailedError,
    ShareUnsupportedError,
)
from config.coloring_page_presets import EXPORT_FILE_NAME, SHARE_TEXT, SHARE_TITLE
from models.session import SessionState

# DOMException name the browser raises when the user dismisses the share sheet
SHARE_CANCELLED_ERROR_NAME = "AbortError"


class ShareCapability(Protocol):
    """Whether the host platform can perform a native share."""

    def is_available(self) -> bool: ...


@dataclass
class BrowserShareCapability:
    """Capability as reported by the export_actions web component."""

    available: bool = False

    def is_available(self) -> bool:
        return self.available


@dataclass(frozen=True)
class DownloadFile:
    file_name: str
    mime_type: str
    data_url: str


@dataclass(frozen=True)
class SharePayload:
    title: str
    text: str
    file_name: str
    mime_type: str
    data_url: str


class ShareResult(BaseModel):
    """Outcome of a native share attempt, as reported by the browser."""

    outcome: Literal["shared", "error", "unsupported"]
    error_name: str = ""
    error_message: str = ""


class ExportService:
    """Builds download/share payloads and interprets share outcomes."""

    def can_download(self, session: SessionState) -> bool:
        return session.processed_image is not None

    def can_share(self, session: SessionState, capability: ShareCapability) -> bool:
        return session.processed_image is not None and capability.is_available()

    def build_download(self, session: SessionState) -> DownloadFile:
        image = session.processed_image
        if image is None:
            raise NoProcessedImageError()
        return DownloadFile(
            file_name=EXPORT_FILE_NAME,
            mime_type=image.mime_type,
            data_url=image.to_data_url(),
        )

    def build_share_payload(
        self, session: SessionState, capability: ShareCapability
    ) -> SharePayload:
        """
        Packages the processed image for the native share sheet.

        Raises:
            NoProcessedImageError: if nothing has been generated yet.
            ShareUnsupportedError: if the platform has no share capability.
        """
        image = session.processed_image
        if image is None:
            raise NoProcessedImageError()
        if not capability.is_available():
            raise ShareUnsupportedError()
        return SharePayload(
            title=SHARE_TITLE,
            text=SHARE_TEXT,
            file_name=EXPORT_FILE_NAME,
            mime_type=image.mime_type,
            data_url=image.to_data_url(),
        )

    def resolve_share_result(self, result: ShareResult) -> None:
        """
        Raises for share failures; user cancellation is not an error.

        Raises:
            ShareUnsupportedError: if the browser reported no share support.
            ShareFailedError: for any failure other than cancellation.
        """
        if result.outcome == "shared":
            log_export("share", "shared")
            return
        if result.outcome == "unsupported":
            log_export("share", "unsupported")
            raise ShareUnsupportedError()
        if result.error_name == SHARE_CANCELLED_ERROR_NAME:
            log_export("share", "cancelled")
            return
        log_export("share", "error", f"{result.error_name}: {result.error_message}")
        raise ShareFailedError(result.error_message)


# Global instance
export_service = ExportService()
