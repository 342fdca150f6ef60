"""
Model catalog.

Maps model identifiers to the provider kind that serves them. Built
once at startup (usually from the bundled YAML catalog) and passed to
the registry-building step.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from llm_consensus.errors import ConfigurationError


class ProviderKind(str, Enum):
	"""Supported LLM vendors."""

	OPENAI = "openai"
	ANTHROPIC = "anthropic"
	GOOGLE = "google"


class ModelCatalog(BaseModel):
	"""Known models mapped to their provider kinds."""

	models: dict[str, ProviderKind] = Field(default_factory=dict)

	def provider_for(self, model: str) -> ProviderKind:
		"""
		Return the provider kind for a model.

		Raises:
			ConfigurationError: If the model is not in the catalog.
		"""
		kind = self.models.get(model)
		if kind is None:
			raise ConfigurationError(
			    f"unknown model {model!r}; available models: "
			    f"{', '.join(self.available())}")
		return kind

	def available(self) -> list[str]:
		return sorted(self.models)

	def __contains__(self, model: object) -> bool:
		return model in self.models


__all__ = ["ProviderKind", "ModelCatalog"]
