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

"""Default application configuration, read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(override=True)


@dataclass
class Default:
    """Defaults for the Coloring Page Creator."""

    # Gemini API key. Not validated here; the first request fails if it is
    # missing or invalid.
    API_KEY: str = os.environ.get("GEMINI_API_KEY", os.environ.get("API_KEY", ""))

    # Used only when no API key is configured (Vertex AI backend).
    PROJECT_ID: str = os.environ.get("GOOGLE_CLOUD_PROJECT", "")
    LOCATION: str = os.environ.get("GOOGLE_CLOUD_LOCATION", "us-central1")

    COLORING_PAGE_MODEL: str = os.environ.get(
        "COLORING_PAGE_MODEL", "gemini-2.5-flash-image-preview"
    )

    APP_ENV: str = os.environ.get("APP_ENV", "")
    PORT: int = int(os.environ.get("PORT", 8080))
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def use_vertexai(self) -> bool:
        return not self.API_KEY and bool(self.PROJECT_ID)
