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

from fastapi import APIRouter, HTTPException

from common.analytics import track_model_call
from common.error_handling import ColoringPageError
from models.coloring_page import (
    build_coloring_prompt,
    generate_coloring_page,
    resolve_model_name,
)
from models.requests import ColoringPageRequest, ColoringPageResponse

router = APIRouter(prefix="/api", tags=["coloring_page"])


@router.post("/coloring_page", response_model=ColoringPageResponse)
async def create_coloring_page(request: ColoringPageRequest):
    """
    Converts the posted image into a coloring page in a single model call.
    Model failures are returned as 502 with the user-facing message.
    """
    model_name = resolve_model_name(request.model_name)
    request = request.model_copy(update={"model_name": model_name})
    try:
        with track_model_call(model_name=model_name, source="api"):
            image = await generate_coloring_page(request)
    except ColoringPageError as e:
        raise HTTPException(status_code=502, detail=e.message) from e

    return ColoringPageResponse(
        image=image,
        prompt=build_coloring_prompt(request.options),
        model_name=model_name,
    )
