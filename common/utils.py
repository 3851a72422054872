# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import binascii
import io
import re

from absl import logging
from PIL import Image

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,;]*)*?;base64,(?P<data>.*)$", re.DOTALL)


def make_data_url(mime_type: str, base64_data: str) -> str:
    """Builds a `data:` URL from a MIME type and base64 payload."""
    return f"data:{mime_type};base64,{base64_data}"


def split_data_url(data_url: str) -> tuple[str, str] | None:
    """Splits a base64 `data:` URL into (mime_type, base64_data).

    Args:
        data_url: A string such as ``data:image/png;base64,iVBORw0KGgo...``.

    Returns:
        The MIME type and the base64 payload, or None if the string is not a
        base64 data URL.
    """
    if not data_url:
        return None
    match = _DATA_URL_PATTERN.match(data_url.strip())
    if not match or not match.group("mime"):
        return None
    return match.group("mime"), match.group("data")


def encode_base64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def decode_base64(data: str) -> bytes | None:
    """Decodes base64 text, returning None when it is malformed."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        logging.info(f"App: Could not decode base64 data: {e}")
        return None


def get_image_dimensions_from_base64(base64_string: str) -> tuple[int, int] | None:
    """Retrieves the width and height of an image from a base64 encoded string.

    Args:
        base64_string: The base64 encoded image data, optionally as a data URL.

    Returns:
        A tuple (width, height) if successful, or None if an error occurs.
    """
    try:
        # Remove the data URL prefix if it exists.
        if base64_string.startswith("data:image"):
            parts = base64_string.split(",")
            if len(parts) > 1:
                base64_string = parts[1]

        image_data = base64.b64decode(base64_string)
        with Image.open(io.BytesIO(image_data)) as img:
            return img.size
    except Exception as e:
        logging.info(f"App: Error getting image dimensions: {e}")
        return None


def format_resolution(base64_string: str) -> str:
    """Returns "WIDTHxHEIGHT" for display, or "Unknown"."""
    dimensions = get_image_dimensions_from_base64(base64_string)
    if not dimensions:
        return "Unknown"
    width, height = dimensions
    return f"{width}x{height}"
