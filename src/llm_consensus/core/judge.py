"""
Judge synthesis of a consensus answer.

Embeds every collected response into a fixed judge prompt and asks
the judge model to produce one final answer.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from llm_consensus.errors import EmptyResponsesError, JudgeQueryError
from llm_consensus.core.runner import query_with_deadline
from llm_consensus.loaders.prompts import load_judge_template
from llm_consensus.models.query import QueryRequest, QueryResponse
from llm_consensus.utils.logging import get_logger
from llm_consensus.utils.protocols import Provider, StreamCallback

logger = get_logger(__name__)


def _format_responses(responses: Sequence[QueryResponse]) -> str:
	"""
	Render one labeled block per response, in input order.

	Parameters:
		responses: Responses to embed.

	Returns:
		Concatenated response blocks.
	"""
	blocks = []
	for res in responses:
		blocks.append(f"--- Model: {res.model} | Provider: {res.provider} ---\n"
		              f"{res.content}\n\n")
	return "".join(blocks)


def build_judge_prompt(original_prompt: str,
                       responses: Sequence[QueryResponse]) -> str:
	"""Compose the full judge prompt from the template and responses."""
	template = load_judge_template()
	return template.safe_substitute(
	    prompt=original_prompt,
	    responses=_format_responses(responses),
	)


async def synthesize(
    provider: Provider,
    judge_model: str,
    original_prompt: str,
    responses: Sequence[QueryResponse],
    *,
    on_chunk: Optional[StreamCallback] = None,
    timeout: Optional[float] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> str:
	"""
	Synthesize a consensus answer from model responses.

	A single response is returned verbatim without calling the judge;
	its content is still forwarded once to ``on_chunk``.

	Parameters:
		provider: Provider serving the judge model.
		judge_model: Judge model id.
		original_prompt: The user's prompt, embedded verbatim.
		responses: Responses to reconcile (read only).
		on_chunk: Optional callback receiving judge output fragments.
		timeout: Optional judge timeout in seconds.
		cancel_event: Optional run-wide cancellation signal.

	Returns:
		The consensus text.

	Raises:
		EmptyResponsesError: If ``responses`` is empty.
		JudgeQueryError: If the judge provider call fails, times out or
			is cancelled.
	"""
	if not responses:
		raise EmptyResponsesError()

	if len(responses) == 1:
		content = responses[0].content
		logger.info("single response from %s, skipping judge",
		            responses[0].model)
		if on_chunk:
			on_chunk(content)
		return content

	logger.info("judge start model=%s responses=%d", judge_model,
	            len(responses))
	request = QueryRequest(
	    model=judge_model,
	    prompt=build_judge_prompt(original_prompt, responses),
	)
	try:
		resp = await query_with_deadline(
		    provider.query_stream(request, on_chunk),
		    timeout,
		    cancel_event,
		)
	except Exception as exc:
		logger.warning("judge %s failed: %s", judge_model, exc)
		raise JudgeQueryError(judge_model, exc) from exc
	logger.info("judge completed model=%s in %.1fs", judge_model,
	            resp.latency_seconds)
	return resp.content


__all__ = ["synthesize", "build_judge_prompt"]
