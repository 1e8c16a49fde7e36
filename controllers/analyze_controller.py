"""Controller for handling image analysis requests."""

from typing import Any, Dict, Optional

from fastapi import Request
from openai import AsyncOpenAI

from services.openai.image_analyzer import ImageAnalyzer
from utils.errors import InputError, UpstreamError


def _get_openai_client(request: Request) -> AsyncOpenAI:
    """Retrieve the shared OpenAI client from the app state."""
    openai_client = getattr(request.app.state, "openai_client", None)
    if openai_client is None:
        raise UpstreamError("OpenAI client not initialized.")
    return openai_client


async def analyze_image(request: Request, image_url: Optional[str]) -> Dict[str, Any]:
    """Validate the payload and return the analysis body for one image.

    Args:
        request: FastAPI request (used to access app.state for the shared client).
        image_url: Data URI or remote URL of the image.

    Returns:
        A dict containing: title, description, keywords, categoryId.

    Raises:
        InputError: If no image was supplied.
        UpstreamError: If the model could not be reached or returned nothing.
        ParseError: If the reply could not be parsed.
    """
    cleaned = image_url.strip() if isinstance(image_url, str) else ""
    if not cleaned:
        raise InputError()

    analyzer = ImageAnalyzer(_get_openai_client(request))
    result = await analyzer.analyze(cleaned)
    return result.to_payload()
