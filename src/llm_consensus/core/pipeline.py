"""
Consensus pipeline.

Runs the query phase, hands the successful responses to the judge,
and assembles the final ConsensusResult.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from llm_consensus.core.judge import synthesize
from llm_consensus.core.runner import notify, run_models
from llm_consensus.errors import (
    AllModelsFailedError,
    EmptyResponsesError,
    JudgeQueryError,
    ModelNotFoundError,
    QueryPhaseError,
    SynthesisPhaseError,
)
from llm_consensus.loaders.catalog import load_catalog
from llm_consensus.models.catalog import ModelCatalog
from llm_consensus.models.config import Config
from llm_consensus.models.consensus_result import ConsensusResult
from llm_consensus.models.run_params import RunParams
from llm_consensus.providers.factory import build_registry
from llm_consensus.providers.registry import Registry
from llm_consensus.utils.logging import get_logger
from llm_consensus.utils.protocols import ProgressObserver

logger = get_logger(__name__)


async def run_consensus(
    config: Config,
    params: RunParams,
    *,
    registry: Optional[Registry] = None,
    catalog: Optional[ModelCatalog] = None,
    observer: Optional[ProgressObserver] = None,
    judge_observer: Optional[ProgressObserver] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> ConsensusResult:
	"""
	Query all models, then synthesize a consensus with the judge.

	The judge model is ``config.judge``; apply CLI overrides to the
	config before calling. When ``registry`` is omitted it is built from
	``catalog`` (or the configured catalog file).

	Parameters:
		config: Application configuration.
		params: Validated run parameters (prompt and models).
		registry: Optional prebuilt registry.
		catalog: Optional model catalog used to build the registry.
		observer: Progress observer for the query phase.
		judge_observer: Progress observer for the judge, keyed by the
			judge model name.
		cancel_event: Optional run-wide cancellation signal.

	Returns:
		ConsensusResult ready for rendering or persistence.

	Raises:
		ConfigurationError: If the registry cannot be built.
		QueryPhaseError: If every model failed.
		SynthesisPhaseError: If the judge is unknown or its query failed.
	"""
	judge = config.judge
	if registry is None:
		catalog = catalog or load_catalog(config.catalog_file)
		registry = build_registry(params.models, judge, catalog, config)

	try:
		run = await run_models(
		    registry,
		    params.models,
		    params.prompt,
		    timeout=config.timeout_seconds,
		    observer=observer,
		    cancel_event=cancel_event,
		)
	except AllModelsFailedError as exc:
		raise QueryPhaseError(exc) from exc

	notify(judge_observer, "on_model_start", judge)
	try:
		judge_provider = registry.get(judge)
		consensus = await synthesize(
		    judge_provider,
		    judge,
		    params.prompt,
		    run.responses,
		    on_chunk=lambda chunk: notify(judge_observer, "on_model_stream",
		                                  judge, chunk),
		    timeout=config.judge_timeout_seconds,
		    cancel_event=cancel_event,
		)
	except (ModelNotFoundError, EmptyResponsesError, JudgeQueryError) as exc:
		notify(judge_observer, "on_model_error", judge, exc)
		raise SynthesisPhaseError(exc) from exc
	notify(judge_observer, "on_model_complete", judge)

	return ConsensusResult.from_run(params.prompt, run, consensus, judge)


__all__ = ["run_consensus"]
