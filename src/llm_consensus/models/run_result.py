"""
Run result model.

Defines the RunResult returned by the query runner once every
model task has finished.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .query import QueryResponse


class RunResult(BaseModel):
	"""
	Outcome of querying several models with the same prompt.

	Every requested model is either in ``responses`` or in
	``failed_models``. Responses are in completion order.
	"""

	responses: list[QueryResponse] = Field(default_factory=list)
	warnings: list[str] = Field(default_factory=list)
	failed_models: list[str] = Field(default_factory=list)

	@property
	def succeeded(self) -> int:
		return len(self.responses)

	@property
	def failed(self) -> int:
		return len(self.failed_models)


__all__ = ["RunResult"]
