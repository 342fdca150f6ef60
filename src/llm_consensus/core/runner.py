"""
Concurrent multi-model query runner.

Fans one prompt out to every requested model, each in its own task
with its own timeout, and collects successes and failures without
letting any single model abort the run.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Optional, Sequence

from llm_consensus.errors import (
    AllModelsFailedError,
    ModelNotFoundError,
    QueryCancelledError,
    QueryTimeoutError,
)
from llm_consensus.models.query import QueryRequest, QueryResponse
from llm_consensus.models.run_result import RunResult
from llm_consensus.providers.registry import Registry
from llm_consensus.utils.logging import get_logger
from llm_consensus.utils.protocols import ProgressObserver

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


def notify(observer: Optional[ProgressObserver], event: str,
           *args: Any) -> None:
	"""Invoke an observer hook if present.

	Hooks are optional; a failing hook is logged and ignored so that
	progress reporting never changes the outcome of a query.
	"""
	if observer is None:
		return
	handler = getattr(observer, event, None)
	if handler is None:
		return
	try:
		handler(*args)
	except Exception:
		logger.warning("progress observer %s failed", event, exc_info=True)


async def query_with_deadline(
    query: Awaitable[QueryResponse],
    timeout: Optional[float],
    cancel_event: Optional[asyncio.Event] = None,
) -> QueryResponse:
	"""
	Await a query, bounded by a timeout and a cancellation signal.

	Whichever happens first wins: the query completes, the timeout
	expires, or ``cancel_event`` is set. On timeout or cancellation the
	in-flight query is cancelled and awaited before raising.

	Raises:
		QueryTimeoutError: The timeout expired first.
		QueryCancelledError: The cancellation signal fired first.
		Exception: Whatever the query itself raised.
	"""
	task = asyncio.ensure_future(query)
	waiters: set[asyncio.Future] = {task}
	cancel_waiter: Optional[asyncio.Future] = None
	if cancel_event is not None:
		cancel_waiter = asyncio.ensure_future(cancel_event.wait())
		waiters.add(cancel_waiter)

	try:
		done, _ = await asyncio.wait(waiters, timeout=timeout,
		                             return_when=asyncio.FIRST_COMPLETED)
	except asyncio.CancelledError:
		task.cancel()
		raise
	finally:
		if cancel_waiter is not None:
			cancel_waiter.cancel()

	if task in done:
		return task.result()

	task.cancel()
	await asyncio.wait({task})
	if not task.cancelled():
		# finished or failed while being cancelled; mark exception retrieved
		task.exception()
	if cancel_waiter is not None and cancel_event.is_set():
		raise QueryCancelledError()
	raise QueryTimeoutError(timeout or 0)


async def run_models(
    registry: Registry,
    models: Sequence[str],
    prompt: str,
    *,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    observer: Optional[ProgressObserver] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> RunResult:
	"""
	Query all models concurrently and collect results.

	Best effort: each model's failure (unknown model, provider error,
	timeout, cancellation) is recorded as a warning plus a failed-model
	entry and never aborts the other models. The call returns only
	after every model task has finished.

	Parameters:
		registry: Model to provider mapping.
		models: Model ids to query; each entry gets its own task.
		prompt: Prompt sent to every model.
		timeout: Per-model timeout in seconds (None disables it).
		observer: Optional progress observer.
		cancel_event: Optional run-wide cancellation signal.

	Returns:
		RunResult with responses in completion order.

	Raises:
		AllModelsFailedError: If no model produced a response.
	"""
	logger.info("run start models=%s timeout=%s", ",".join(models), timeout)
	lock = asyncio.Lock()
	result = RunResult()

	async def record_failure(model: str, exc: BaseException) -> None:
		async with lock:
			result.warnings.append(f"{model}: {exc}")
			result.failed_models.append(model)
		logger.warning("model %s failed: %s", model, exc)
		notify(observer, "on_model_error", model, exc)

	async def run_one(model: str) -> None:
		notify(observer, "on_model_start", model)
		try:
			provider = registry.get(model)
		except ModelNotFoundError as exc:
			await record_failure(model, exc)
			return

		def relay(chunk: str) -> None:
			notify(observer, "on_model_stream", model, chunk)

		request = QueryRequest(model=model, prompt=prompt)
		try:
			response = await query_with_deadline(
			    provider.query_stream(request, relay),
			    timeout,
			    cancel_event,
			)
		except Exception as exc:
			await record_failure(model, exc)
			return

		async with lock:
			result.responses.append(response)
		logger.info("model %s completed in %.1fs", model,
		            response.latency_seconds)
		notify(observer, "on_model_complete", model)

	await asyncio.gather(*(run_one(m) for m in models))

	if not result.responses:
		raise AllModelsFailedError(result.warnings)
	logger.info("run done succeeded=%d failed=%d", result.succeeded,
	            result.failed)
	return result


__all__ = [
    "run_models",
    "query_with_deadline",
    "notify",
    "DEFAULT_TIMEOUT_SECONDS",
]
