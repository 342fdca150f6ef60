"""
Protocol definitions for dependency injection.

Defines the provider capability and the progress observer so that
runner and judge can be driven by vendor SDKs, test doubles or UIs
interchangeably.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
	from llm_consensus.models.query import QueryRequest, QueryResponse

StreamCallback = Callable[[str], None]


@runtime_checkable
class Provider(Protocol):
	"""
	Capability that turns a (model, prompt) request into a response.

	Both methods raise ProviderError on network, auth or parse failure.
	"""

	name: str

	async def query(self, request: "QueryRequest") -> "QueryResponse":
		"""Send the prompt and wait for the full response."""
		...

	async def query_stream(
	    self,
	    request: "QueryRequest",
	    on_chunk: Optional[StreamCallback] = None,
	) -> "QueryResponse":
		"""Send the prompt, relaying partial text to ``on_chunk``.

		Chunks are delivered strictly before returning and their
		concatenation equals the returned content.
		"""
		...


class ProgressObserver(Protocol):
	"""
	Observer for per-model query progress.

	Invoked inline from the runner's tasks; implementations must be
	fast and must not perform I/O.
	"""

	def on_model_start(self, model: str) -> None:
		...

	def on_model_stream(self, model: str, chunk: str) -> None:
		...

	def on_model_complete(self, model: str) -> None:
		...

	def on_model_error(self, model: str, error: BaseException) -> None:
		...


__all__ = ["Provider", "ProgressObserver", "StreamCallback"]
