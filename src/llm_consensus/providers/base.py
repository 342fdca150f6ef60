"""
Provider base classes.

``BaseProvider`` implements the query/stream contract once (latency
measurement, error wrapping, chunk accumulation) so vendor providers
only supply the SDK calls. ``FunctionProvider`` adapts a plain async
callable into a provider for tests and ad-hoc integrations.
"""

from __future__ import annotations

import inspect
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Awaitable, Callable, Optional, Union

from llm_consensus.errors import ProviderError
from llm_consensus.models.query import QueryRequest, QueryResponse
from llm_consensus.utils.protocols import StreamCallback

QueryFunc = Callable[[QueryRequest], Union[QueryResponse,
                                           Awaitable[QueryResponse]]]


class BaseProvider(ABC):
	"""Shared implementation of the provider capability."""

	name: str = "base"

	@abstractmethod
	async def _complete(self, request: QueryRequest) -> str:
		"""Return the full response text for a request."""

	async def _stream(self, request: QueryRequest,
	                  emit: StreamCallback) -> None:
		"""Emit response text fragments in order.

		Providers without native streaming inherit this default, which
		emits the complete text as a single chunk.
		"""
		emit(await self._complete(request))

	def _wrap_error(self, exc: Exception) -> ProviderError:
		if isinstance(exc, ProviderError):
			return exc
		return ProviderError(str(exc) or type(exc).__name__,
		                     provider=self.name)

	def _response(self, request: QueryRequest, content: str,
	              start: float) -> QueryResponse:
		if not content:
			raise ProviderError("no content in response", provider=self.name)
		return QueryResponse(
		    model=request.model,
		    content=content,
		    provider=self.name,
		    latency=timedelta(seconds=time.monotonic() - start),
		)

	async def query(self, request: QueryRequest) -> QueryResponse:
		start = time.monotonic()
		try:
			content = await self._complete(request)
		except Exception as exc:
			raise self._wrap_error(exc) from exc
		return self._response(request, content or "", start)

	async def query_stream(
	    self,
	    request: QueryRequest,
	    on_chunk: Optional[StreamCallback] = None,
	) -> QueryResponse:
		start = time.monotonic()
		parts: list[str] = []

		def emit(chunk: str) -> None:
			if not chunk:
				return
			parts.append(chunk)
			if on_chunk:
				on_chunk(chunk)

		try:
			await self._stream(request, emit)
		except Exception as exc:
			raise self._wrap_error(exc) from exc
		return self._response(request, "".join(parts), start)

	def __repr__(self) -> str:
		return f"{self.__class__.__name__}(name={self.name})"


class FunctionProvider:
	"""
	Adapter that turns a callable into a provider.

	The callable receives a QueryRequest and returns a QueryResponse
	(directly or as an awaitable). Errors propagate unchanged.
	Streaming is synthesized by emitting the full content once.
	"""

	def __init__(self, func: QueryFunc, name: str = "function") -> None:
		self.func = func
		self.name = name

	async def query(self, request: QueryRequest) -> QueryResponse:
		result = self.func(request)
		if inspect.isawaitable(result):
			result = await result
		return result

	async def query_stream(
	    self,
	    request: QueryRequest,
	    on_chunk: Optional[StreamCallback] = None,
	) -> QueryResponse:
		response = await self.query(request)
		if on_chunk and response.content:
			on_chunk(response.content)
		return response

	def __repr__(self) -> str:
		return f"FunctionProvider(name={self.name})"


__all__ = ["BaseProvider", "FunctionProvider", "QueryFunc"]
