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

# Ordered from thinnest to boldest; "slider" is the position on the UI slider.
LINE_THICKNESS_PRESETS = {
    "thin": {
        "label": "Thin",
        "slider": 1,
        "description": "very thin, delicate lines, like a fine-point pen drawing",
    },
    "normal": {
        "label": "Normal",
        "slider": 2,
        "description": "clear, medium-thickness lines, standard for a coloring book",
    },
    "bold": {
        "label": "Bold",
        "slider": 3,
        "description": "very bold, thick lines, like a thick marker drawing",
    },
}

COLORING_PAGE_PROMPTS = {
    "base": (
        "Convert this image into a black and white line drawing suitable for a "
        "coloring book page. The lines should be {line_description}."
    ),
    "remove_grays": (
        "The final image must be strictly black and white, with all shades of "
        "gray and color completely removed. The background should be pure white."
    ),
    "upscale": (
        "Additionally, upscale the image to a higher resolution, making the lines "
        "sharper and more detailed, suitable for high-quality printing."
    ),
}

# Download and share surface
EXPORT_FILE_NAME = "coloring-page.png"
SHARE_TITLE = "My Coloring Page"
SHARE_TEXT = "Check out this coloring page I made!"
