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

import pytest

from common.error_handling import (
    NoProcessedImageError,
    ShareFailedError,
    ShareUnsupportedError,
)
from models.requests import ImagePayload
from models.session import SessionState, acquire_image, begin_generation, complete_generation
from services.export_service import BrowserShareCapability, ShareResult, export_service

RESULT = ImagePayload(mime_type="image/png", data="AAA=")


@pytest.fixture
def ready_session(png_payload) -> SessionState:
    session = SessionState()
    acquire_image(session, png_payload)
    complete_generation(session, begin_generation(session), RESULT)
    return session


@pytest.mark.parametrize("has_processed", [True, False])
@pytest.mark.parametrize("share_available", [True, False])
def test_affordances(png_payload, has_processed, share_available):
    session = SessionState()
    acquire_image(session, png_payload)
    if has_processed:
        complete_generation(session, begin_generation(session), RESULT)
    capability = BrowserShareCapability(available=share_available)

    assert export_service.can_download(session) is has_processed
    assert export_service.can_share(session, capability) is (has_processed and share_available)


def test_download_uses_fixed_file_name(ready_session):
    download = export_service.build_download(ready_session)

    assert download.file_name == "coloring-page.png"
    assert download.mime_type == "image/png"
    assert download.data_url == "data:image/png;base64,AAA="


def test_share_payload_has_fixed_title_and_caption(ready_session):
    payload = export_service.build_share_payload(ready_session, BrowserShareCapability(available=True))

    assert payload.title == "My Coloring Page"
    assert payload.text == "Check out this coloring page I made!"
    assert payload.file_name == "coloring-page.png"
    assert payload.data_url == "data:image/png;base64,AAA="


def test_share_without_processed_image_fails():
    with pytest.raises(NoProcessedImageError) as excinfo:
        export_service.build_share_payload(SessionState(), BrowserShareCapability(available=True))
    assert excinfo.value.message == "No processed image to share."

    with pytest.raises(NoProcessedImageError):
        export_service.build_download(SessionState())


def test_share_without_capability_fails(ready_session):
    with pytest.raises(ShareUnsupportedError) as excinfo:
        export_service.build_share_payload(ready_session, BrowserShareCapability(available=False))
    assert excinfo.value.message == "Web Share API is not available on your browser."


def test_user_cancellation_is_not_an_error():
    export_service.resolve_share_result(
        ShareResult(outcome="error", error_name="AbortError", error_message="Share canceled")
    )
    export_service.resolve_share_result(ShareResult(outcome="shared"))


def test_share_failure_passes_message_through():
    with pytest.raises(ShareFailedError) as excinfo:
        export_service.resolve_share_result(
            ShareResult(outcome="error", error_name="NotAllowedError", error_message="Permission denied")
        )
    assert excinfo.value.message == "Permission denied"


def test_share_failure_without_message_uses_fallback():
    with pytest.raises(ShareFailedError) as excinfo:
        export_service.resolve_share_result(ShareResult(outcome="error", error_name="DataError"))
    assert excinfo.value.message == "Could not share the image."


def test_unsupported_outcome_raises():
    with pytest.raises(ShareUnsupportedError):
        export_service.resolve_share_result(ShareResult(outcome="unsupported"))
