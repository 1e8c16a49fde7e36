"""Description: Stock-image analysis service using an OpenAI-compatible chat completions API."""

import logging
import time
from typing import Any, Dict, List

from openai import AsyncOpenAI

from models.analysis import AnalysisResult
from services.openai.analysis_prompts import build_system_prompt, build_user_prompt
from services.openai.media_inputs import build_messages
from services.openai.response_parser import extract_message_text, extract_usage, parse_labelled_response
from utils.errors import ParseError, UpstreamError

LOGGER = logging.getLogger(__name__)

MODEL = "gpt-4o-mini"
TEMPERATURE = 0.8
MAX_TOKENS = 4000


class ImageAnalyzer:
    """Class for generating a title, description, keywords and category for an image."""

    def __init__(self, client: AsyncOpenAI) -> None:
        """Initialize the ImageAnalyzer with an OpenAI async client."""
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.system_prompt = build_system_prompt()
        self.user_prompt = build_user_prompt()

    async def analyze(self, image_url: str) -> AnalysisResult:
        """Analyze one image given as a data URI or a reachable URL.

        Raises:
            UpstreamError: If the service call fails or returns no content.
            ParseError: If the reply does not contain all four fields.
        """
        start_time = time.time()
        messages = build_messages(self.system_prompt, self.user_prompt, image_url=image_url)
        response = await self._create_completion(messages)

        text = extract_message_text(response)
        if not text.strip():
            LOGGER.error("Empty completion returned by the analysis model.")
            raise UpstreamError("No response from the analysis model")

        result = self._parse_response(text)
        usage = extract_usage(response)
        LOGGER.info(
            "Image analyzed in %.2fs (input_tokens=%s, output_tokens=%s)",
            time.time() - start_time,
            usage["input_tokens"],
            usage["output_tokens"],
        )
        return result

    async def _create_completion(self, messages: List[Dict[str, Any]]) -> Any:
        """Send the multimodal request to the chat completions API."""
        try:
            return await self.client.chat.completions.create(
                model=MODEL,
                messages=messages,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except Exception as exc:
            LOGGER.error("Error during chat completion call: %s", exc)
            raise UpstreamError() from exc

    def _parse_response(self, text: str) -> AnalysisResult:
        """Parse the labelled output from the model."""
        try:
            return parse_labelled_response(text)
        except ParseError as exc:
            LOGGER.error("Error parsing model output: %s", exc)
            LOGGER.debug("Full model output: %r", text)
            raise
