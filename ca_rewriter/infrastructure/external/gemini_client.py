"""Thin wrapper around the Google Gemini client for structured JSON generation."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

from google import genai
from google.genai import types

from ca_rewriter.domain.content.errors import (
    ConfigurationError,
    EmptyResponseError,
    ParseError,
    ServiceError,
)
from ca_rewriter.infrastructure.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _is_overloaded(error: Exception) -> bool:
    message = str(error).lower()
    return "overloaded" in message or "unavailable" in message


def _strip_code_fence(response_text: str) -> str:
    if response_text.startswith("```json"):
        response_text = response_text[7:]
    if response_text.startswith("```"):
        response_text = response_text[3:]
    if response_text.endswith("```"):
        response_text = response_text[:-3]
    return response_text.strip()


class GeminiClient:
    """Direct wrapper for Google Gemini AI client."""

    def __init__(self, settings: Settings | None = None):
        if settings is None:
            settings = get_settings()

        self.settings = settings
        self.project_id = settings.gcp_project_id
        self.region = settings.gcp_region
        self.model_id = settings.gemini_model
        self.use_vertex_ai = settings.use_vertex_ai
        self.max_output_tokens = settings.max_output_tokens
        self.max_retries = settings.max_retries
        self.retry_delay = settings.retry_delay

        if self.use_vertex_ai:
            if not self.project_id:
                raise ConfigurationError("GCP_PROJECT_ID is required for Vertex AI")

            self.client = genai.Client(
                vertexai=True,
                project=self.project_id,
                location=self.region,
            )
        else:
            self.api_key = settings.gemini_api_key
            if not self.api_key:
                raise ConfigurationError(
                    "API Key is missing. Please set the GEMINI_API_KEY environment variable."
                )

            self.client = genai.Client(api_key=self.api_key)

        logger.info(f"Initialized Gemini client with model: {self.model_id}")

    def generate_json_response(
        self,
        text: str,
        system_instruction: str,
        schema: dict[str, Any],
        temperature: float = 0.3,
    ) -> dict[str, Any]:
        """Generate a structured JSON response for ``text``.

        Args:
            text: User content sent as the single user turn
            system_instruction: Operation specific instruction
            schema: Response schema the output must conform to
            temperature: Sampling temperature

        Returns:
            The parsed JSON object

        Raises:
            EmptyResponseError: The service returned no text
            ParseError: The text is not a JSON object
            ServiceError: Any other service or network failure
        """
        text_part = types.Part.from_text(text=text)
        contents = [types.Content(role="user", parts=[text_part])]

        generate_config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
            temperature=temperature,
            max_output_tokens=self.max_output_tokens,
        )

        retry_delay = self.retry_delay
        for attempt in range(self.max_retries):
            try:
                logger.debug(
                    f"Generating JSON (attempt {attempt + 1}/{self.max_retries})"
                )
                response = self.client.models.generate_content(
                    model=self.model_id,
                    contents=contents,
                    config=generate_config,
                )
            except Exception as e:
                if _is_overloaded(e) and attempt < self.max_retries - 1:
                    logger.warning(
                        f"API overloaded, retrying in {retry_delay} seconds..."
                    )
                    time.sleep(retry_delay)
                    retry_delay *= 2
                    continue
                logger.error(f"Error generating JSON: {e}")
                raise ServiceError(str(e) or "Gemini request failed.") from e

            return self._parse_response(response)

        raise ServiceError("Failed to generate JSON after all retries")

    async def generate_json_response_async(
        self,
        text: str,
        system_instruction: str,
        schema: dict[str, Any],
        temperature: float = 0.3,
    ) -> dict[str, Any]:
        """Run ``generate_json_response`` without blocking the event loop."""
        return await asyncio.to_thread(
            self.generate_json_response,
            text,
            system_instruction,
            schema,
            temperature,
        )

    def _parse_response(self, response: Any) -> dict[str, Any]:
        response_text = (response.text or "").strip()
        if not response_text:
            raise EmptyResponseError()

        logger.debug(f"JSON response length: {len(response_text)}")
        response_text = _strip_code_fence(response_text)

        try:
            parsed = json.loads(response_text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            logger.error(f"Response text: {response_text[:500]}")
            raise ParseError(f"Malformed JSON in Gemini response: {e}") from e

        if not isinstance(parsed, dict):
            raise ParseError("Expected a JSON object in Gemini response")
        return parsed
