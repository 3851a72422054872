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

from common.error_handling import NoInputImageError
from models.requests import ImagePayload, LineThickness, StyleOptions
from models.session import (
    LifecycleStatus,
    SessionState,
    acquire_image,
    begin_generation,
    complete_generation,
    fail_generation,
    report_error,
    reset_session,
    transition,
    update_style_options,
)

RESULT = ImagePayload(mime_type="image/png", data="AAA=")
NEWER_RESULT = ImagePayload(mime_type="image/png", data="AQE=")


def _assert_reset(session: SessionState):
    assert session.original_image is None
    assert session.processed_image is None
    assert session.error_message == ""
    assert session.status == LifecycleStatus.IDLE.value


@pytest.fixture
def session(png_payload) -> SessionState:
    session = SessionState()
    acquire_image(session, png_payload)
    return session


def test_generate_without_image_sets_error():
    session = SessionState()

    with pytest.raises(NoInputImageError):
        begin_generation(session)

    assert session.status == LifecycleStatus.ERROR.value
    assert session.error_message == "Please upload an image first."


def test_successful_generation_sets_processed_and_ready(session, png_payload):
    seq = begin_generation(session)
    assert session.is_loading
    assert session.error_message == ""

    assert complete_generation(session, seq, RESULT)

    assert session.status == LifecycleStatus.READY.value
    assert session.processed_image == RESULT
    assert session.original_image == png_payload


def test_failure_keeps_previous_processed_image(session):
    complete_generation(session, begin_generation(session), RESULT)

    seq = begin_generation(session)
    assert fail_generation(session, seq, "quota exceeded")

    assert session.status == LifecycleStatus.ERROR.value
    assert session.error_message == "quota exceeded"
    assert session.processed_image == RESULT


def test_new_attempt_clears_error(session):
    fail_generation(session, begin_generation(session), "boom")

    begin_generation(session)

    assert session.status == LifecycleStatus.LOADING.value
    assert session.error_message == ""


def test_acquisition_clears_processed_and_error_but_keeps_options(session, png_payload):
    update_style_options(session, StyleOptions(line_thickness=LineThickness.BOLD, remove_grays=False, upscale=True))
    complete_generation(session, begin_generation(session), RESULT)
    fail_generation(session, begin_generation(session), "boom")

    acquire_image(session, png_payload)

    assert session.processed_image is None
    assert session.error_message == ""
    assert session.status == LifecycleStatus.IDLE.value
    assert session.style_options == StyleOptions(line_thickness=LineThickness.BOLD, remove_grays=False, upscale=True)


@pytest.mark.parametrize("prior", ["idle", "loading", "error", "ready"])
def test_reset_always_returns_to_idle(session, prior):
    if prior == "loading":
        begin_generation(session)
    elif prior == "error":
        fail_generation(session, begin_generation(session), "boom")
    elif prior == "ready":
        complete_generation(session, begin_generation(session), RESULT)

    reset_session(session)
    _assert_reset(session)

    reset_session(session)
    _assert_reset(session)


def test_reset_keeps_style_options(session):
    update_style_options(session, StyleOptions(line_thickness=LineThickness.THIN))

    reset_session(session)

    assert session.style_options.line_thickness == LineThickness.THIN


def test_result_arriving_after_reset_is_discarded(session):
    seq = begin_generation(session)
    reset_session(session)

    assert not complete_generation(session, seq, RESULT)
    assert not fail_generation(session, seq, "late failure")
    _assert_reset(session)


def test_only_the_newest_request_settles(session):
    first = begin_generation(session)
    second = begin_generation(session)

    assert complete_generation(session, second, NEWER_RESULT)
    assert not complete_generation(session, first, RESULT)
    assert session.processed_image == NEWER_RESULT


def test_result_for_previous_image_is_discarded(session, png_payload):
    seq = begin_generation(session)
    acquire_image(session, png_payload)

    assert not complete_generation(session, seq, RESULT)
    assert session.processed_image is None


def test_transition_keeps_error_and_status_consistent(session):
    transition(session, LifecycleStatus.READY, error_message="ignored")
    assert session.error_message == ""

    transition(session, LifecycleStatus.ERROR)
    assert session.error_message == "An unknown error occurred while processing the image."


def test_share_error_during_generation_keeps_request_in_flight(session):
    seq = begin_generation(session)

    assert not report_error(session, "Permission denied")

    assert session.is_loading
    assert session.error_message == ""
    assert complete_generation(session, seq, RESULT)
    assert session.processed_image == RESULT


def test_share_error_when_idle_is_surfaced(session):
    complete_generation(session, begin_generation(session), RESULT)

    assert report_error(session, "Permission denied")

    assert session.status == LifecycleStatus.ERROR.value
    assert session.error_message == "Permission denied"
    assert session.processed_image == RESULT
