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

import logging

# Mesop logs this when an event arrives for a handler from a previous render,
# e.g. the uploader after Start Over bumps its key.
BENIGN_MESOP_ERROR = "Unknown handler id"

suppressed_logger = logging.getLogger("coloring_page.suppressed")


class ColoringPageError(Exception):
    """Base exception carrying a user-facing message."""

    default_message = "An unknown error occurred while processing the image."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoInputImageError(ColoringPageError):
    """Generation was attempted without an original image."""

    default_message = "Please upload an image first."


class NoImageReturnedError(ColoringPageError):
    """The model responded without any inline image part."""

    default_message = "The AI did not return an image. Please try again."


class GenerationError(ColoringPageError):
    """Transport or service failure during a generation call."""


class NoProcessedImageError(ColoringPageError):
    """Export was attempted before a coloring page was generated."""

    default_message = "No processed image to share."


class ShareUnsupportedError(ColoringPageError):
    """The browser does not expose the Web Share API."""

    default_message = "Web Share API is not available on your browser."


class ShareFailedError(ColoringPageError):
    """A share attempt failed for a reason other than user cancellation."""

    default_message = "Could not share the image."


class UnknownHandlerIdFilter(logging.Filter):
    """Drops Mesop's benign stale-handler errors, keeping a debug trace."""

    def filter(self, record):
        message = record.getMessage()
        if BENIGN_MESOP_ERROR not in message:
            return True
        suppressed_logger.debug("Suppressed Mesop error: %s", message)
        return False
