"""
Provider registry.

Maps model identifiers to provider instances. Registration normally
happens once during setup, before any query traffic, but every
operation is lock-protected so concurrent use stays safe.
"""

from __future__ import annotations

import threading

from llm_consensus.errors import ModelNotFoundError
from llm_consensus.utils.protocols import Provider


class Registry:
	"""
	Thread-safe mapping of model id to provider.

	A single mutex guards the map, so lookups are exclusive with each
	other as well as with registration. Every critical section is a
	dict operation, so readers never wait long.
	"""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._providers: dict[str, Provider] = {}

	def register(self, model: str, provider: Provider) -> None:
		"""Associate a model with a provider, replacing any previous one."""
		with self._lock:
			self._providers[model] = provider

	def get(self, model: str) -> Provider:
		"""
		Return the provider for a model.

		Raises:
			ModelNotFoundError: If the model is not registered.
		"""
		with self._lock:
			provider = self._providers.get(model)
		if provider is None:
			raise ModelNotFoundError(model)
		return provider

	def list_models(self) -> set[str]:
		with self._lock:
			return set(self._providers)

	def __contains__(self, model: object) -> bool:
		with self._lock:
			return model in self._providers

	def __len__(self) -> int:
		with self._lock:
			return len(self._providers)


__all__ = ["Registry"]
