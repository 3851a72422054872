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

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from common.utils import decode_base64, encode_base64, make_data_url, split_data_url
from config.coloring_page_presets import LINE_THICKNESS_PRESETS


class LineThickness(str, Enum):
    """Line weight of the generated drawing, ordered thinnest first."""

    THIN = "thin"
    NORMAL = "normal"
    BOLD = "bold"

    @property
    def label(self) -> str:
        return LINE_THICKNESS_PRESETS[self.value]["label"]

    @property
    def description(self) -> str:
        return LINE_THICKNESS_PRESETS[self.value]["description"]

    @property
    def slider_value(self) -> int:
        return LINE_THICKNESS_PRESETS[self.value]["slider"]

    @classmethod
    def from_slider(cls, value: float) -> "LineThickness":
        """Maps a slider position (1-3) to a thickness, clamping out-of-range values."""
        position = min(max(int(round(value)), 1), len(cls))
        for thickness in cls:
            if thickness.slider_value == position:
                return thickness
        return cls.NORMAL


class ImagePayload(BaseModel, frozen=True):
    """An encoded image: base64 data plus its MIME type."""

    mime_type: str
    data: str

    @field_validator("mime_type")
    @classmethod
    def _check_mime_type(cls, value: str) -> str:
        if not value.startswith("image/"):
            raise ValueError(f"'{value}' is not an image MIME type.")
        return value

    @field_validator("data")
    @classmethod
    def _check_data(cls, value: str) -> str:
        if not value or not decode_base64(value):
            raise ValueError("Image data must be non-empty base64.")
        return value

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "ImagePayload":
        return cls(mime_type=mime_type, data=encode_base64(raw))

    @classmethod
    def from_data_url(cls, data_url: str) -> Optional["ImagePayload"]:
        parts = split_data_url(data_url)
        if not parts:
            return None
        mime_type, data = parts
        try:
            return cls(mime_type=mime_type, data=data)
        except ValidationError:
            return None

    def to_data_url(self) -> str:
        return make_data_url(self.mime_type, self.data)

    def to_bytes(self) -> bytes:
        raw = decode_base64(self.data)
        if raw is None:
            raise ValueError(f"Image payload ({self.mime_type}) is not valid base64.")
        return raw


class StyleOptions(BaseModel, frozen=True):
    """User-selected parameters controlling the generation instruction."""

    line_thickness: LineThickness = LineThickness.NORMAL
    remove_grays: bool = True
    upscale: bool = False


class ColoringPageRequest(BaseModel):
    """
    Defines the contract for a coloring page generation request.
    Used by the Mesop page and by the HTTP API.
    """

    image: ImagePayload
    options: StyleOptions = Field(default_factory=StyleOptions)
    model_name: Optional[str] = None


class ColoringPageResponse(BaseModel):
    """HTTP API response for a generated coloring page."""

    image: ImagePayload
    prompt: str
    model_name: str
