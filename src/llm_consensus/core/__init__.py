"""Core consensus logic.

This subpackage contains the query orchestration and judge synthesis.

Key modules:
    - runner: Concurrent best-effort model queries via run_models()
    - judge: Consensus synthesis via synthesize()
    - pipeline: End-to-end run via run_consensus()
"""

from llm_consensus.core.runner import run_models, query_with_deadline
from llm_consensus.core.judge import synthesize, build_judge_prompt
from llm_consensus.core.pipeline import run_consensus

__all__ = [
    # runner
    "run_models",
    "query_with_deadline",
    # judge
    "synthesize",
    "build_judge_prompt",
    # pipeline
    "run_consensus",
]
