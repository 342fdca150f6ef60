"""
OpenAI provider.

Uses the Responses API, which supports the reasoning and pro models.
"""

from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI

from llm_consensus.errors import ConfigurationError, ProviderError
from llm_consensus.models.query import QueryRequest
from llm_consensus.providers.base import BaseProvider
from llm_consensus.utils.protocols import StreamCallback

TEXT_DELTA_EVENT = "response.output_text.delta"
_FAILURE_EVENTS = ("error", "response.failed")


class OpenAIProvider(BaseProvider):
	"""Provider for OpenAI's Responses API."""

	name = "openai"

	def __init__(
	    self,
	    api_key: Optional[str] = None,
	    *,
	    base_url: Optional[str] = None,
	    client: Any = None,
	) -> None:
		"""
		Initialize the OpenAI provider.

		Parameters:
			api_key: OpenAI API key.
			base_url: Optional custom base URL (proxies, compatible APIs).
			client: Preconfigured AsyncOpenAI-compatible client.
		"""
		if client is None:
			if not api_key:
				raise ConfigurationError(
				    "OPENAI_API_KEY environment variable required")
			client = AsyncOpenAI(api_key=api_key, base_url=base_url)
		self.client = client

	async def _complete(self, request: QueryRequest) -> str:
		response = await self.client.responses.create(
		    model=request.model,
		    input=request.prompt,
		)
		return response.output_text or ""

	async def _stream(self, request: QueryRequest,
	                  emit: StreamCallback) -> None:
		stream = await self.client.responses.create(
		    model=request.model,
		    input=request.prompt,
		    stream=True,
		)
		# the HTTP response stays open until the stream is closed
		try:
			async for event in stream:
				event_type = getattr(event, "type", None)
				if event_type == TEXT_DELTA_EVENT:
					emit(getattr(event, "delta", "") or "")
				elif event_type in _FAILURE_EVENTS:
					message = getattr(event, "message", None) or str(event)
					raise ProviderError(f"stream error: {message}",
					                    provider=self.name)
		finally:
			await stream.close()


__all__ = ["OpenAIProvider"]
