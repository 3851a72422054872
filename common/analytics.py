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

"""Structured (JSON) logging and usage events for the Coloring Page Creator."""

import functools
import inspect
import json
import logging
import os
import time
from contextlib import contextmanager

import mesop as me
from google.cloud import logging as cloud_logging

from config.default import Default
from state.state import AppState

ANALYTICS_LOGGER_NAME = "coloring_page.analytics"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra_data` fields are merged in."""

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_data", {}))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_handler() -> logging.Handler:
    # K_SERVICE is only set on Cloud Run
    if os.environ.get("K_SERVICE"):
        return cloud_logging.Client().get_default_handler()
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Returns a logger writing JSON locally and to Cloud Logging on Cloud Run."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(Default().LOG_LEVEL)
        logger.addHandler(_make_handler())
        logger.propagate = False
    return logger


analytics_logger = get_logger(ANALYTICS_LOGGER_NAME)


def _current_page_and_session() -> tuple[str, str]:
    try:
        state = me.state(AppState)
        return state.current_page or "unknown", state.session_id or "unknown"
    except Exception:
        # No Mesop request context (API calls, tests)
        return "unknown", "unknown"


def _emit(event_type: str, message: str, level: int = logging.INFO, **fields):
    page_name, session_id = _current_page_and_session()
    extra_data = {
        "event_type": event_type,
        "page_name": fields.pop("page_name", None) or page_name,
        "session_id": fields.pop("session_id", None) or session_id,
        **fields,
    }
    analytics_logger.log(level, message, extra={"extra_data": extra_data})


def log_page_view(page_name: str, session_id: str = None):
    _emit("page_view", f"Page view: {page_name}", page_name=page_name, session_id=session_id)


def log_ui_click(element_id: str, extras: dict = None):
    _emit("ui_click", f"UI Click: {element_id}", element_id=element_id, **(extras or {}))


def log_image_acquired(source: str, mime_type: str, size_bytes: int):
    """Records a new original image from the uploader or the camera."""
    _emit(
        "image_acquired",
        f"Image acquired from {source} ({mime_type}, {size_bytes} bytes)",
        source=source,
        mime_type=mime_type,
        size_bytes=size_bytes,
    )


def log_export(action: str, outcome: str, detail: str = ""):
    """Records a download or share attempt and how it ended."""
    level = logging.ERROR if outcome == "error" else logging.INFO
    _emit("export", f"Export {action}: {outcome}", level=level, action=action, outcome=outcome, detail=detail)


def log_model_call(model_name: str, status: str, duration_ms: float = 0, details: dict = None):
    level = logging.INFO if status == "success" else logging.ERROR
    _emit(
        "model_call",
        f"Model Call: {model_name} ({status})",
        level=level,
        model_name=model_name,
        status=status,
        duration_ms=round(duration_ms, 2),
        details=details or {},
    )


def track_click(element_id: str):
    """Decorator logging a click before running a Mesop event handler.

    Generator handlers stay generators so Mesop keeps streaming their yields.
    """

    def decorator(handler_function):
        if inspect.isgeneratorfunction(handler_function):

            @functools.wraps(handler_function)
            def generator_wrapper(*args, **kwargs):
                log_ui_click(element_id)
                yield from handler_function(*args, **kwargs)

            return generator_wrapper

        @functools.wraps(handler_function)
        def wrapper(*args, **kwargs):
            log_ui_click(element_id)
            return handler_function(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def track_model_call(model_name: str, **details):
    """Logs duration and outcome of the wrapped model call, then re-raises."""
    start = time.monotonic()
    try:
        yield
    except Exception as e:
        details["error_type"] = type(e).__name__
        details["error"] = getattr(e, "message", None) or str(e)
        log_model_call(model_name, "failure", (time.monotonic() - start) * 1000, details)
        raise
    log_model_call(model_name, "success", (time.monotonic() - start) * 1000, details)
