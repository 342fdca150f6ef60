"""
Consensus result model.

The final, externally visible artifact of a run. Its JSON rendering
is the durable contract consumed by persistence and scripting.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

from .query import QueryResponse
from .run_result import RunResult


class ConsensusResult(BaseModel):
	"""
	Aggregate outcome of a consensus run.

	Combines the runner's responses, warnings and failures with the
	judge's synthesized answer.
	"""

	prompt: str
	responses: list[QueryResponse] = Field(default_factory=list)
	consensus: str
	judge: str
	warnings: list[str] = Field(default_factory=list)
	failed_models: list[str] = Field(default_factory=list)

	@classmethod
	def from_run(cls, prompt: str, run: RunResult, consensus: str,
	             judge: str) -> "ConsensusResult":
		return cls(
		    prompt=prompt,
		    responses=list(run.responses),
		    consensus=consensus,
		    judge=judge,
		    warnings=list(run.warnings),
		    failed_models=list(run.failed_models),
		)

	def to_json_dict(self) -> dict[str, Any]:
		"""
		Render the stable JSON structure.

		``warnings`` and ``failed_models`` are omitted when empty.

		Returns:
			Dictionary ready for ``json.dumps``.
		"""
		data: dict[str, Any] = {
		    "prompt": self.prompt,
		    "responses": [r.model_dump(by_alias=True) for r in self.responses],
		    "consensus": self.consensus,
		    "judge": self.judge,
		}
		if self.warnings:
			data["warnings"] = list(self.warnings)
		if self.failed_models:
			data["failed_models"] = list(self.failed_models)
		return data

	def to_json(self) -> str:
		return json.dumps(self.to_json_dict(), indent=2, ensure_ascii=False)


__all__ = ["ConsensusResult"]
