"""
Google Gemini provider using the google-genai SDK.
"""

from __future__ import annotations

from typing import Any, Optional

from google import genai

from llm_consensus.errors import ConfigurationError
from llm_consensus.models.query import QueryRequest
from llm_consensus.providers.base import BaseProvider
from llm_consensus.utils.protocols import StreamCallback


class GoogleProvider(BaseProvider):
	"""Provider for Google's Gemini API."""

	name = "google"

	def __init__(self, api_key: Optional[str] = None, *,
	             client: Any = None) -> None:
		if client is None:
			if not api_key:
				raise ConfigurationError(
				    "GOOGLE_API_KEY environment variable required")
			client = genai.Client(api_key=api_key)
		self.client = client

	async def _complete(self, request: QueryRequest) -> str:
		response = await self.client.aio.models.generate_content(
		    model=request.model,
		    contents=request.prompt,
		)
		return response.text or ""

	async def _stream(self, request: QueryRequest,
	                  emit: StreamCallback) -> None:
		stream = await self.client.aio.models.generate_content_stream(
		    model=request.model,
		    contents=request.prompt,
		)
		try:
			async for chunk in stream:
				emit(chunk.text or "")
		finally:
			await stream.aclose()


__all__ = ["GoogleProvider"]
