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
"""Coloring Page Creator: turn a photo into a coloring page with Gemini."""

import uuid

import mesop as me
from pydantic import ValidationError

from common.analytics import (
    get_logger,
    log_image_acquired,
    log_page_view,
    track_click,
)
from common.error_handling import ColoringPageError, NoInputImageError
from common.utils import format_resolution
from components.camera_capture.camera_capture import camera_capture
from components.export_actions.export_actions import export_actions
from components.header import header
from config.coloring_page_presets import LINE_THICKNESS_PRESETS
from models.coloring_page import generate_for_session
from models.image_acquisition import (
    ACCEPTED_FILE_TYPES,
    payload_from_data_url,
    payload_from_upload,
)
from models.requests import LineThickness
from models.session import (
    acquire_image,
    begin_generation,
    report_error,
    reset_session,
    update_style_options,
)
from services.export_service import (
    BrowserShareCapability,
    ShareResult,
    export_service,
)
from state.coloring_page_state import PageState
from state.state import AppState

PAGE_NAME = "coloring_page"

logger = get_logger(__name__)

_PANEL_STYLE = me.Style(
    flex_grow=1,
    flex_basis=0,
    display="flex",
    flex_direction="column",
    gap=8,
    background=me.theme_var("surface-container-lowest"),
    padding=me.Padding.all(16),
    border_radius=12,
)

_IMAGE_CONTAINER_STYLE = me.Style(
    position="relative",
    display="flex",
    align_items="center",
    justify_content="center",
    min_height=360,
    border_radius=8,
    background=me.theme_var("surface-variant"),
)


def coloring_page_content():
    """Renders the main UI for the Coloring Page Creator."""
    state = me.state(PageState)
    session = state.session

    header(
        "Coloring Page Creator",
        "palette",
        subtitle="Turn any photo into a beautiful coloring page with AI.",
    )

    with me.box(style=me.Style(display="flex", flex_direction="row", gap=16, flex_wrap="wrap")):
        _original_panel(state)
        _coloring_page_panel(state)

    if session.original_image_data:
        _editor_controls(state)


def _original_panel(state: PageState):
    session = state.session
    with me.box(style=_PANEL_STYLE):
        me.text("Original Image", type="headline-6")
        with me.box(style=_IMAGE_CONTAINER_STYLE):
            if session.original_image_data:
                me.image(
                    src=session.original_image.to_data_url(),
                    alt="Original user upload",
                    style=me.Style(width="100%", max_height="60vh", object_fit="contain"),
                )
            else:
                with me.box(
                    style=me.Style(
                        display="flex",
                        flex_direction="column",
                        align_items="center",
                        gap=12,
                    )
                ):
                    with me.box(style=me.Style(display="flex", flex_direction="row", gap=12)):
                        camera_capture(on_capture=on_camera_capture, key="camera_capture")
                        me.uploader(
                            label="Upload Image",
                            on_upload=on_upload,
                            accepted_file_types=ACCEPTED_FILE_TYPES,
                            type="flat",
                            key=f"coloring_uploader_{state.uploader_key}",
                        )
                    me.text(
                        "Take a photo or choose a file",
                        style=me.Style(color=me.theme_var("on-surface-variant")),
                    )


def _coloring_page_panel(state: PageState):
    session = state.session
    with me.box(style=_PANEL_STYLE):
        me.text("Coloring Page", type="headline-6")
        with me.box(style=_IMAGE_CONTAINER_STYLE):
            if session.is_loading:
                with me.box(
                    style=me.Style(
                        position="absolute",
                        top=0,
                        left=0,
                        right=0,
                        bottom=0,
                        display="flex",
                        align_items="center",
                        justify_content="center",
                        background="rgba(255, 255, 255, 0.6)",
                    )
                ):
                    me.progress_spinner()
            if session.processed_image_data:
                me.image(
                    src=session.processed_image.to_data_url(),
                    alt="Processed coloring page",
                    style=me.Style(width="100%", max_height="60vh", object_fit="contain"),
                )
            else:
                with me.box(
                    style=me.Style(
                        display="flex",
                        flex_direction="column",
                        align_items="center",
                        opacity=0.6,
                    )
                ):
                    me.icon("format_paint", style=me.Style(font_size=48, width=48, height=48))
                    me.text("Your generated coloring page will appear here.")
        if session.processed_image_data and state.processed_resolution:
            me.text(f"Resolution: {state.processed_resolution}", style=me.Style(font_size=12))


def _editor_controls(state: PageState):
    session = state.session
    options = session.style_options
    capability = BrowserShareCapability(available=state.share_supported)

    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            gap=16,
            margin=me.Margin(top=16),
            padding=me.Padding.all(16),
            border_radius=12,
            background=me.theme_var("surface-container-lowest"),
        )
    ):
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=32, align_items="center", flex_wrap="wrap")):
            with me.box():
                me.text(f"Line Thickness: {options.line_thickness.label}")
                me.slider(
                    min=1,
                    max=len(LINE_THICKNESS_PRESETS),
                    step=1,
                    value=options.line_thickness.slider_value,
                    on_value_change=on_thickness_change,
                )
            me.checkbox(
                label="Crisp B&W (No Grays)",
                checked=options.remove_grays,
                on_change=on_remove_grays_change,
            )
            me.checkbox(
                label="Upscale for Detail",
                checked=options.upscale,
                on_change=on_upscale_change,
            )

        if session.error_message:
            me.text(
                session.error_message,
                style=me.Style(
                    color=me.theme_var("error"),
                    background=me.theme_var("error-container"),
                    padding=me.Padding.all(12),
                    border_radius=8,
                ),
            )

        with me.box(style=me.Style(display="flex", flex_direction="row", gap=12, align_items="center", flex_wrap="wrap")):
            me.button("Start Over", on_click=on_start_over_click, type="stroked")
            if session.is_loading:
                generate_label = "Creating..."
            elif session.processed_image_data:
                generate_label = "Update Coloring Page"
            else:
                generate_label = "Create Coloring Page"
            me.button(
                generate_label,
                on_click=on_generate_click,
                type="flat",
                disabled=session.is_loading or not session.original_image_data,
            )
            if export_service.can_download(session) and not session.is_loading:
                export_actions(
                    download=export_service.build_download(session),
                    share=export_service.build_share_payload(session, capability)
                    if export_service.can_share(session, capability)
                    else None,
                    on_share_result=on_share_result,
                    on_capability=on_share_capability,
                    key="export_actions",
                )


def on_upload(e: me.UploadEvent):
    """Decodes the uploaded file locally and makes it the original image."""
    state = me.state(PageState)
    payload = payload_from_upload(e.file.getvalue(), e.file.mime_type)
    if payload:
        log_image_acquired("upload", payload.mime_type, e.file.size)
        acquire_image(state.session, payload)
        state.processed_resolution = ""
    yield


def on_camera_capture(e: me.WebEvent):
    """Handles a photo from the camera capture component."""
    state = me.state(PageState)
    payload = payload_from_data_url(e.value.get("value", ""))
    if payload:
        log_image_acquired("camera", payload.mime_type, len(payload.to_bytes()))
        acquire_image(state.session, payload)
        state.processed_resolution = ""
    yield


def on_thickness_change(e: me.SliderValueChangeEvent):
    session = me.state(PageState).session
    options = session.style_options.model_copy(
        update={"line_thickness": LineThickness.from_slider(e.value)}
    )
    update_style_options(session, options)


def on_remove_grays_change(e: me.CheckboxChangeEvent):
    session = me.state(PageState).session
    update_style_options(session, session.style_options.model_copy(update={"remove_grays": e.checked}))


def on_upscale_change(e: me.CheckboxChangeEvent):
    session = me.state(PageState).session
    update_style_options(session, session.style_options.model_copy(update={"upscale": e.checked}))


async def on_generate_click(e: me.ClickEvent):
    """Sends the original image to the model and stores the coloring page."""
    state = me.state(PageState)
    session = state.session

    try:
        seq = begin_generation(session)
    except NoInputImageError:
        yield
        return
    yield

    if await generate_for_session(session, seq):
        state.processed_resolution = format_resolution(session.processed_image_data)
    yield


@track_click(element_id="coloring_page_start_over")
def on_start_over_click(e: me.ClickEvent):
    """Clears both images and any error, keeping the style options."""
    state = me.state(PageState)
    reset_session(state.session)
    state.processed_resolution = ""
    state.uploader_key += 1
    yield


def on_share_capability(e: me.WebEvent):
    state = me.state(PageState)
    state.share_supported = bool(e.value.get("available"))
    yield


def on_share_result(e: me.WebEvent):
    """Surfaces share failures; a cancelled share sheet is not an error."""
    state = me.state(PageState)
    try:
        export_service.resolve_share_result(ShareResult(**e.value))
    except ValidationError as ex:
        logger.error(f"Malformed share result {e.value}: {ex}")
        report_error(state.session, "Could not share the image.")
    except ColoringPageError as ex:
        report_error(state.session, ex.message)
    yield


def on_load(e: me.LoadEvent):
    """Registers the page view for analytics."""
    app_state = me.state(AppState)
    app_state.current_page = PAGE_NAME
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    log_page_view(PAGE_NAME, session_id=app_state.session_id)
    yield


SECURITY_POLICY = me.SecurityPolicy(
    allowed_script_srcs=["https://cdn.jsdelivr.net"],
    allowed_connect_srcs=["data:"],
)


@me.page(
    path="/",
    title="Coloring Page Creator",
    on_load=on_load,
    security_policy=SECURITY_POLICY,
)
@me.page(
    path="/coloring_page",
    title="Coloring Page Creator",
    on_load=on_load,
    security_policy=SECURITY_POLICY,
)
def page():
    """Define the Mesop page route for the Coloring Page Creator."""
    with me.box(
        style=me.Style(
            max_width=1200,
            margin=me.Margin.symmetric(horizontal="auto"),
            padding=me.Padding.all(24),
        )
    ):
        coloring_page_content()
