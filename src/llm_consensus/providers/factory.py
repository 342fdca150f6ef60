"""
Provider factory.

Creates vendor providers from configuration and builds the registry
for a run from an explicit model catalog.
"""

from __future__ import annotations

from typing import Callable, Iterable

from llm_consensus.errors import ConfigurationError
from llm_consensus.models.catalog import ModelCatalog, ProviderKind
from llm_consensus.models.config import Config
from llm_consensus.providers.registry import Registry
from llm_consensus.utils.logging import get_logger
from llm_consensus.utils.protocols import Provider

logger = get_logger(__name__)

ProviderFactory = Callable[[ProviderKind, Config], Provider]


def create_provider(kind: ProviderKind, config: Config) -> Provider:
	"""Factory for vendor providers with configured credentials."""
	if kind is ProviderKind.OPENAI:
		from llm_consensus.providers.openai import OpenAIProvider
		return OpenAIProvider(config.openai_api_key,
		                      base_url=config.openai_base_url)
	if kind is ProviderKind.ANTHROPIC:
		from llm_consensus.providers.anthropic import AnthropicProvider
		return AnthropicProvider(
		    config.anthropic_api_key,
		    base_url=config.anthropic_base_url,
		    max_tokens=config.max_output_tokens,
		)
	if kind is ProviderKind.GOOGLE:
		from llm_consensus.providers.google import GoogleProvider
		return GoogleProvider(config.google_api_key)
	raise ConfigurationError(f"unhandled provider kind: {kind}")


def build_registry(
    models: Iterable[str],
    judge: str,
    catalog: ModelCatalog,
    config: Config,
    factory: ProviderFactory = create_provider,
) -> Registry:
	"""
	Register a provider for every requested model and the judge.

	One provider instance is created per provider kind and shared by
	all models of that kind.

	Parameters:
		models: Requested model ids.
		judge: Judge model id.
		catalog: Model to provider-kind mapping.
		config: Application configuration (credentials).
		factory: Provider constructor, overridable for tests.

	Returns:
		Populated Registry.

	Raises:
		ConfigurationError: For unknown models or missing credentials.
	"""
	registry = Registry()
	instances: dict[ProviderKind, Provider] = {}
	for model in dict.fromkeys([*models, judge]):
		kind = catalog.provider_for(model)
		if kind not in instances:
			try:
				instances[kind] = factory(kind, config)
			except ConfigurationError as exc:
				raise ConfigurationError(
				    f"initializing provider for {model}: {exc}") from exc
		registry.register(model, instances[kind])
	logger.debug("registered models: %s", sorted(registry.list_models()))
	return registry


__all__ = ["create_provider", "build_registry", "ProviderFactory"]
