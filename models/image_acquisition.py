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

"""Local decoding of uploaded and camera-captured images. No network calls."""

import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from common.analytics import get_logger
from common.utils import decode_base64
from models.requests import ImagePayload

logger = get_logger(__name__)

ACCEPTED_FILE_TYPES = ["image/*"]


def _is_decodable_image(raw: bytes) -> bool:
    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        logger.warning(f"Acquired file is not a decodable image: {e}")
        return False


def payload_from_upload(data: bytes, mime_type: str) -> Optional[ImagePayload]:
    """Builds an ImagePayload from an uploaded file, or None if it is not an image."""
    if not data or not mime_type or not mime_type.startswith("image/"):
        logger.warning(f"Ignoring upload with MIME type '{mime_type}' ({len(data or b'')} bytes)")
        return None
    if not _is_decodable_image(data):
        return None
    return ImagePayload.from_bytes(data, mime_type)


def payload_from_data_url(data_url: str) -> Optional[ImagePayload]:
    """Builds an ImagePayload from a `data:` URL such as the camera component emits."""
    payload = ImagePayload.from_data_url(data_url)
    if payload is None:
        logger.warning("Ignoring capture that is not a base64 data URL")
        return None
    raw = decode_base64(payload.data)
    if raw is None:
        return None
    return payload_from_upload(raw, payload.mime_type)
