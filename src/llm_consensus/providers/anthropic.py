"""
Anthropic Claude provider.
"""

from __future__ import annotations

from typing import Any, Optional

from anthropic import AsyncAnthropic

from llm_consensus.errors import ConfigurationError
from llm_consensus.models.query import QueryRequest
from llm_consensus.providers.base import BaseProvider
from llm_consensus.utils.protocols import StreamCallback

DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(BaseProvider):
	"""Provider for Anthropic's Messages API."""

	name = "anthropic"

	def __init__(
	    self,
	    api_key: Optional[str] = None,
	    *,
	    base_url: Optional[str] = None,
	    max_tokens: int = DEFAULT_MAX_TOKENS,
	    client: Any = None,
	) -> None:
		if client is None:
			if not api_key:
				raise ConfigurationError(
				    "ANTHROPIC_API_KEY environment variable required")
			client = AsyncAnthropic(api_key=api_key, base_url=base_url)
		self.client = client
		self.max_tokens = max_tokens

	def _messages(self, request: QueryRequest) -> list[dict[str, str]]:
		return [{"role": "user", "content": request.prompt}]

	async def _complete(self, request: QueryRequest) -> str:
		message = await self.client.messages.create(
		    model=request.model,
		    max_tokens=self.max_tokens,
		    messages=self._messages(request),
		)
		return "".join(
		    getattr(block, "text", "") or ""
		    for block in message.content
		    if getattr(block, "type", "text") == "text")

	async def _stream(self, request: QueryRequest,
	                  emit: StreamCallback) -> None:
		async with self.client.messages.stream(
		    model=request.model,
		    max_tokens=self.max_tokens,
		    messages=self._messages(request),
		) as stream:
			async for text in stream.text_stream:
				emit(text)


__all__ = ["AnthropicProvider", "DEFAULT_MAX_TOKENS"]
