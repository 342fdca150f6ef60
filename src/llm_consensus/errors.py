"""
Error taxonomy for consensus runs.

Per-model failures are recovered inside the runner and never surface
as exceptions; only the errors below terminate an operation.
"""

from __future__ import annotations


class ConsensusError(Exception):
	"""Base class for all llm-consensus errors."""


class ConfigurationError(ConsensusError):
	"""Invalid configuration: unknown model, missing API key, bad catalog."""


class ProviderError(ConsensusError):
	"""A provider failed to answer (network, auth or parse failure)."""

	def __init__(self, message: str, provider: str | None = None) -> None:
		super().__init__(message)
		self.provider = provider


class ModelNotFoundError(ProviderError):
	"""The requested model has no registered provider."""

	def __init__(self, model: str) -> None:
		super().__init__(f"unknown model: {model}")
		self.model = model


class QueryTimeoutError(ProviderError):
	"""A model did not answer within its per-model timeout."""

	def __init__(self, timeout: float) -> None:
		super().__init__(f"timed out after {timeout:g}s")
		self.timeout = timeout


class QueryCancelledError(ProviderError):
	"""A model query was cancelled by the run's cancellation signal."""

	def __init__(self) -> None:
		super().__init__("cancelled")


class AllModelsFailedError(ConsensusError):
	"""Every queried model failed; the run produced no usable response."""

	def __init__(self, warnings: list[str]) -> None:
		self.warnings = list(warnings)
		detail = "; ".join(self.warnings) if self.warnings else "no models"
		super().__init__(f"all models failed: {detail}")


class EmptyResponsesError(ConsensusError):
	"""The judge was asked to synthesize zero responses."""

	def __init__(self) -> None:
		super().__init__("no responses to synthesize")


class JudgeQueryError(ConsensusError):
	"""The judge provider call failed."""

	def __init__(self, judge_model: str, cause: BaseException) -> None:
		super().__init__(f"judge query failed: {cause}")
		self.judge_model = judge_model
		self.cause = cause


class StageError(ConsensusError):
	"""Terminal failure attributed to a pipeline stage."""

	stage = "consensus"

	def __init__(self, cause: BaseException) -> None:
		super().__init__(f"{self.stage}: {cause}")
		self.cause = cause


class QueryPhaseError(StageError):
	"""The query phase failed (all models failed)."""

	stage = "running queries"


class SynthesisPhaseError(StageError):
	"""The synthesis phase failed (judge lookup or judge query)."""

	stage = "consensus synthesis"


__all__ = [
    "ConsensusError",
    "ConfigurationError",
    "ProviderError",
    "ModelNotFoundError",
    "QueryTimeoutError",
    "QueryCancelledError",
    "AllModelsFailedError",
    "EmptyResponsesError",
    "JudgeQueryError",
    "StageError",
    "QueryPhaseError",
    "SynthesisPhaseError",
]
