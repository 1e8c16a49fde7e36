"""FastAPI routes for image analysis."""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from controllers.analyze_controller import analyze_image
from utils.errors import AnalysisError, UpstreamError

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])


class AnalyzePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: Optional[str] = Field(default=None, alias="imageUrl")


@router.post("/analyze", summary="Generate title, description, keywords and category for an image")
async def post_analyze(request: Request, payload: AnalyzePayload):
    """Analyze a single image sent as a data URI or URL."""
    try:
        return await analyze_image(request, payload.image_url)
    except AnalysisError:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.exception("Unexpected error analyzing image")
        raise UpstreamError() from exc
