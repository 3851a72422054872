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

"""Converter session: the image pair, style options and request lifecycle.

All mutations go through `transition`, which keeps the lifecycle status and the
error message consistent. Generation requests are tagged with a sequence number
so that a request settling after a reset (or after a newer request or a new
image) is discarded.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.analytics import get_logger
from common.error_handling import ColoringPageError, NoInputImageError
from models.requests import ImagePayload, LineThickness, StyleOptions

logger = get_logger(__name__)


class LifecycleStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass
class SessionState:
    """Serializable session state. Enum values are stored as plain strings."""

    original_image_data: str = ""
    original_image_mime_type: str = ""
    processed_image_data: str = ""
    processed_image_mime_type: str = ""

    line_thickness: str = LineThickness.NORMAL.value
    remove_grays: bool = True
    upscale: bool = False

    status: str = LifecycleStatus.IDLE.value
    error_message: str = ""
    request_seq: int = 0

    @property
    def original_image(self) -> Optional[ImagePayload]:
        if not self.original_image_data:
            return None
        return ImagePayload(mime_type=self.original_image_mime_type, data=self.original_image_data)

    @property
    def processed_image(self) -> Optional[ImagePayload]:
        if not self.processed_image_data:
            return None
        return ImagePayload(mime_type=self.processed_image_mime_type, data=self.processed_image_data)

    @property
    def style_options(self) -> StyleOptions:
        return StyleOptions(
            line_thickness=LineThickness(self.line_thickness),
            remove_grays=self.remove_grays,
            upscale=self.upscale,
        )

    @property
    def is_loading(self) -> bool:
        return self.status == LifecycleStatus.LOADING.value


_UNSET = object()


def transition(
    session: SessionState,
    status: LifecycleStatus,
    *,
    error_message: str = "",
    original_image=_UNSET,
    processed_image=_UNSET,
    request_seq: Optional[int] = None,
) -> SessionState:
    """Single entry point for lifecycle changes.

    `original_image` and `processed_image` accept an ImagePayload or None
    (to clear); when omitted they are left as they are.
    """
    status = LifecycleStatus(status)
    if status == LifecycleStatus.ERROR and not error_message:
        error_message = ColoringPageError.default_message
    if status != LifecycleStatus.ERROR:
        error_message = ""

    if original_image is not _UNSET:
        session.original_image_data = original_image.data if original_image else ""
        session.original_image_mime_type = original_image.mime_type if original_image else ""
    if processed_image is not _UNSET:
        session.processed_image_data = processed_image.data if processed_image else ""
        session.processed_image_mime_type = processed_image.mime_type if processed_image else ""
    if request_seq is not None:
        session.request_seq = request_seq

    session.status = status.value
    session.error_message = error_message
    return session


def update_style_options(session: SessionState, options: StyleOptions) -> SessionState:
    """Replaces the style options wholesale. Lifecycle is untouched."""
    session.line_thickness = options.line_thickness.value
    session.remove_grays = options.remove_grays
    session.upscale = options.upscale
    return session


def acquire_image(session: SessionState, payload: ImagePayload) -> SessionState:
    """Replaces the original image and clears any processed image and error."""
    return transition(
        session,
        LifecycleStatus.IDLE,
        original_image=payload,
        processed_image=None,
        request_seq=session.request_seq + 1,
    )


def begin_generation(session: SessionState) -> int:
    """Moves the session to loading and returns the new request's sequence number.

    Raises:
        NoInputImageError: if there is no original image. The session is left
            in the error state with the corresponding message.
    """
    if session.original_image is None:
        error = NoInputImageError()
        transition(session, LifecycleStatus.ERROR, error_message=error.message)
        raise error
    seq = session.request_seq + 1
    transition(session, LifecycleStatus.LOADING, request_seq=seq)
    return seq


def _is_current(session: SessionState, seq: int) -> bool:
    if seq != session.request_seq:
        logger.info(f"Discarding stale generation result (request {seq}, current {session.request_seq})")
        return False
    return True


def complete_generation(session: SessionState, seq: int, payload: ImagePayload) -> bool:
    """Stores a successful result. Returns False if the request was stale."""
    if not _is_current(session, seq):
        return False
    transition(session, LifecycleStatus.READY, processed_image=payload)
    return True


def fail_generation(session: SessionState, seq: int, message: str) -> bool:
    """Records a failure, keeping any earlier processed image. Returns False if stale."""
    if not _is_current(session, seq):
        return False
    transition(session, LifecycleStatus.ERROR, error_message=message)
    return True


def reset_session(session: SessionState) -> SessionState:
    """Clears both images and the error and returns to idle. Style options are kept."""
    return transition(
        session,
        LifecycleStatus.IDLE,
        original_image=None,
        processed_image=None,
        request_seq=session.request_seq + 1,
    )


def report_error(session: SessionState, message: str) -> bool:
    """Surfaces a non-generation failure (e.g. sharing) as the session error.

    While a generation is in flight the session stays loading and the message
    is only logged. Returns True if the error was recorded.
    """
    if session.is_loading:
        logger.warning(f"Not surfacing error while a generation is in flight: {message}")
        return False
    transition(session, LifecycleStatus.ERROR, error_message=message)
    return True
