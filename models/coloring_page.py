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

"""Gemini image generation for coloring pages."""

from google import genai
from google.genai import types
from pydantic import ValidationError

from common.analytics import get_logger, track_model_call
from common.error_handling import (
    ColoringPageError,
    GenerationError,
    NoImageReturnedError,
)
from common.utils import encode_base64
from config.coloring_page_presets import COLORING_PAGE_PROMPTS
from config.default import Default
from config.gemini_image_models import get_gemini_image_model_config
from models.requests import ColoringPageRequest, ImagePayload, StyleOptions
from models.session import SessionState, complete_generation, fail_generation

cfg = Default()
logger = get_logger(__name__)


def build_coloring_prompt(options: StyleOptions) -> str:
    """Builds the instruction sent alongside the image.

    Clauses are always in the same order: the base instruction with the line
    weight, then the gray removal clause, then the upscale clause.
    """
    clauses = [
        COLORING_PAGE_PROMPTS["base"].format(
            line_description=options.line_thickness.description
        )
    ]
    if options.remove_grays:
        clauses.append(COLORING_PAGE_PROMPTS["remove_grays"])
    if options.upscale:
        clauses.append(COLORING_PAGE_PROMPTS["upscale"])
    return " ".join(clauses)


def resolve_model_name(model_name_or_version: str | None = None) -> str:
    """Returns the full API model ID for a configured name or version ID."""
    requested = model_name_or_version or cfg.COLORING_PAGE_MODEL
    model_config = get_gemini_image_model_config(requested)
    return model_config.model_name if model_config else requested


def get_genai_client() -> genai.Client:
    if cfg.use_vertexai:
        return genai.Client(vertexai=True, project=cfg.PROJECT_ID, location=cfg.LOCATION)
    return genai.Client(api_key=cfg.API_KEY)


def _inline_image(blob: types.Blob) -> ImagePayload:
    data = blob.data or b""
    if isinstance(data, bytes):
        data = encode_base64(data)
    try:
        return ImagePayload(mime_type=blob.mime_type or "", data=data)
    except ValidationError as e:
        logger.warning(f"First inline part is not a usable image: {e}")
        raise NoImageReturnedError() from e


def extract_image_payload(response: types.GenerateContentResponse) -> ImagePayload:
    """Returns the first inline data part of the response as the image.

    Raises:
        NoImageReturnedError: if no part carries inline data, or the first one
            is not a usable image.
    """
    parts = []
    if response.candidates and response.candidates[0].content:
        parts = response.candidates[0].content.parts or []

    for part in parts:
        if part.inline_data:
            return _inline_image(part.inline_data)
        if part.text:
            logger.info(f"Model returned text alongside the image: {part.text[:200]}")

    raise NoImageReturnedError()


async def generate_coloring_page(
    request: ColoringPageRequest, client: genai.Client | None = None
) -> ImagePayload:
    """
    Sends the original image and the instruction to the model in a single call.

    Args:
        request: The source image and style options.
        client: Optional pre-built client; one is created from config otherwise.

    Returns:
        The generated coloring page.

    Raises:
        NoImageReturnedError: if the model answered without an image.
        GenerationError: for any transport or service failure.
    """
    model_name = resolve_model_name(request.model_name)
    prompt = build_coloring_prompt(request.options)
    logger.info(
        f"Generating coloring page with {model_name} "
        f"(thickness={request.options.line_thickness.value}, "
        f"remove_grays={request.options.remove_grays}, upscale={request.options.upscale})"
    )

    try:
        client = client or get_genai_client()
        contents = types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(
                    data=request.image.to_bytes(),
                    mime_type=request.image.mime_type,
                ),
                types.Part.from_text(text=prompt),
            ],
        )
        response = await client.aio.models.generate_content(
            model=model_name,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
            ),
        )
        return extract_image_payload(response)
    except ColoringPageError:
        raise
    except Exception as e:
        logger.error(f"Coloring page generation failed: {e}")
        raise GenerationError(str(e)) from e


async def generate_for_session(
    session: SessionState, seq: int, client: genai.Client | None = None
) -> bool:
    """Runs the generation for request `seq` and settles it on the session.

    The outcome is applied only through `complete_generation` or
    `fail_generation`, so a request superseded while it was in flight leaves
    the session untouched.

    Returns:
        True if a new coloring page was stored on the session.
    """
    model_name = resolve_model_name()
    request = ColoringPageRequest(
        image=session.original_image,
        options=session.style_options,
        model_name=model_name,
    )
    try:
        with track_model_call(
            model_name=model_name,
            line_thickness=request.options.line_thickness.value,
            remove_grays=request.options.remove_grays,
            upscale=request.options.upscale,
        ):
            result = await generate_coloring_page(request, client=client)
    except ColoringPageError as e:
        logger.error(f"Failed to generate coloring page. Details: {e.message}")
        fail_generation(session, seq, e.message)
        return False
    return complete_generation(session, seq, result)
