"""
Query request and response models.

A request is built once per query attempt; a response is produced
exactly once per successful query.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class QueryRequest(BaseModel):
	"""Immutable input for a single model query."""

	model_config = ConfigDict(frozen=True)

	model: str
	prompt: str


class QueryResponse(BaseModel):
	"""
	Result of a single successful model query.

	Serializes latency as integer milliseconds under ``latency_ms``
	when dumped with ``by_alias=True``.
	"""

	model: str
	content: str
	provider: str
	latency: timedelta = Field(default=timedelta(0),
	                           serialization_alias="latency_ms")

	@field_serializer("latency")
	def _serialize_latency(self, v: timedelta) -> int:
		return int(v.total_seconds() * 1000)

	@property
	def latency_seconds(self) -> float:
		return self.latency.total_seconds()


__all__ = ["QueryRequest", "QueryResponse"]
