"""
Result persistence utilities.

Writes the JSON result contract to disk and auto-saves complete runs
into per-run directories under the data directory.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from pathlib import Path

from llm_consensus.models.consensus_result import ConsensusResult
from llm_consensus.utils.logging import get_logger
from llm_consensus.utils.paths import ensure_within

logger = get_logger(__name__)

RESULT_FILE = "result.json"
PROMPT_FILE = "prompt.txt"
CONSENSUS_FILE = "consensus.md"


def generate_run_id(now: datetime | None = None) -> str:
	"""
	Create a unique run identifier.

	Format: ``YYYYmmdd-HHMMSS-<6 hex>``, e.g. ``20260112-143052-a1b2c3``.
	"""
	now = now or datetime.now()
	return f"{now.strftime('%Y%m%d-%H%M%S')}-{secrets.token_hex(3)}"


def write_json(path: Path | str, result: ConsensusResult) -> Path:
	"""
	Persist the JSON result, ensuring parent directories.

	Parameters:
		path: Destination file path.
		result: Result to serialize.

	Returns:
		The written path.
	"""
	path = Path(path)
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(result.to_json() + "\n", encoding="utf-8")
	return path


def save_run(data_dir: Path | str, result: ConsensusResult,
             run_id: str | None = None) -> tuple[Path, list[str]]:
	"""
	Auto-save a run to ``<data_dir>/<run_id>/``.

	``result.json`` is mandatory. ``prompt.txt`` and ``consensus.md`` are
	convenience copies; failing to write them is reported but not fatal.

	Parameters:
		data_dir: Base directory for saved runs.
		result: Result to persist.
		run_id: Optional explicit run id (generated when omitted).

	Returns:
		Tuple of (run directory, non-fatal write problems).

	Raises:
		OSError: If the run directory or result.json cannot be written.
		ValueError: If ``run_id`` escapes ``data_dir``.
	"""
	base = Path(data_dir)
	run_dir = ensure_within(base, base / (run_id or generate_run_id()))
	run_dir.mkdir(parents=True, exist_ok=True)

	problems: list[str] = []
	extras = (
	    (PROMPT_FILE, result.prompt, "prompt"),
	    (CONSENSUS_FILE, result.consensus, "consensus"),
	)
	for name, content, label in extras:
		try:
			(run_dir / name).write_text(content, encoding="utf-8")
		except OSError as exc:
			logger.warning("failed to save %s: %s", label, exc)
			problems.append(f"Failed to save {label}: {exc}")

	write_json(run_dir / RESULT_FILE, result)
	logger.info("run saved to %s", run_dir)
	return run_dir, problems


__all__ = [
    "generate_run_id",
    "write_json",
    "save_run",
    "RESULT_FILE",
    "PROMPT_FILE",
    "CONSENSUS_FILE",
]
