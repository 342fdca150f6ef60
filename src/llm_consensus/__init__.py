"""
LLM Consensus - query several LLMs concurrently and synthesize one answer.

This package fans a prompt out to multiple models from different
providers, then asks a judge model to reconcile the responses.

Main entry points:
    - llm_consensus.main: CLI entrypoint
    - llm_consensus.core.pipeline: run_consensus() for a full run
    - llm_consensus.models.config: Config and load_env()
"""

from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("llm-consensus")
except PackageNotFoundError:
	__version__ = "dev"

__all__ = ["__version__"]
