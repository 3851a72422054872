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

"""FastAPI entry point: JSON API plus the Mesop UI."""

import logging

import mesop as me
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.wsgi import WSGIMiddleware

from common.error_handling import UnknownHandlerIdFilter
from config.default import Default
from routers.coloring_page_router import router as coloring_page_router

import pages.coloring_page  # noqa: F401  registers the Mesop page routes

cfg = Default()

logging.getLogger().addFilter(UnknownHandlerIdFilter())
logging.getLogger("mesop").addFilter(UnknownHandlerIdFilter())

app = FastAPI(title="Coloring Page Creator")
app.include_router(coloring_page_router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


app.mount(
    "/",
    WSGIMiddleware(
        me.create_wsgi_app(debug_mode=cfg.APP_ENV in ("local", "dev"))
    ),
)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=cfg.PORT, reload=cfg.APP_ENV in ("local", "dev"))
