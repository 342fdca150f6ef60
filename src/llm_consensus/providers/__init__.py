"""LLM provider integrations.

Key modules:
    - base: Shared provider implementation and the function adapter
    - registry: Thread-safe model to provider mapping
    - factory: Provider construction and registry building
    - openai / anthropic / google: Vendor SDK providers

Vendor modules are imported lazily by the factory so that only the
SDKs actually needed for a run are loaded.
"""

from llm_consensus.providers.base import BaseProvider, FunctionProvider
from llm_consensus.providers.registry import Registry
from llm_consensus.providers.factory import (
    build_registry,
    create_provider,
    ProviderFactory,
)

__all__ = [
    "BaseProvider",
    "FunctionProvider",
    "Registry",
    "build_registry",
    "create_provider",
    "ProviderFactory",
]
