"""
Model query progress tracking.

Defines the transient per-model state rendered by the terminal UI
while a run is in flight. Never persisted.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel

# Rough heuristic: ~4 characters per token.
CHARS_PER_TOKEN = 4
PREVIEW_LENGTH = 30


class ModelStatus(str, Enum):
	"""
	Lifecycle states for a model query.

	PENDING: Query not yet started.
	RUNNING: Connected, waiting for the first chunk.
	STREAMING: Receiving chunks.
	COMPLETE: Finished successfully.
	FAILED: Terminated with an error.
	"""

	PENDING = "pending"
	RUNNING = "running"
	STREAMING = "streaming"
	COMPLETE = "complete"
	FAILED = "failed"


def _now() -> datetime:
	return datetime.now(timezone.utc)


def truncate(text: str, limit: int) -> str:
	"""Flatten newlines and shorten text to ``limit`` characters."""
	text = text.replace("\n", " ").strip()
	if len(text) > limit:
		return text[:limit - 1] + "…"
	return text


class ModelQueryState(BaseModel):
	"""Progress tracker for a single model query."""

	model: str
	status: ModelStatus = ModelStatus.PENDING
	start_time: Optional[datetime] = None
	end_time: Optional[datetime] = None
	char_count: int = 0
	last_chunk: str = ""
	error: Optional[str] = None

	@property
	def token_estimate(self) -> int:
		return self.char_count // CHARS_PER_TOKEN

	@property
	def elapsed(self) -> timedelta:
		"""Time spent so far, or total duration once finished."""
		if not self.start_time:
			return timedelta(0)
		return (self.end_time or _now()) - self.start_time

	@property
	def finished(self) -> bool:
		return self.status in (ModelStatus.COMPLETE, ModelStatus.FAILED)

	def mark_started(self) -> None:
		self.status = ModelStatus.RUNNING
		self.start_time = _now()

	def mark_streaming(self, chunk: str) -> None:
		self.status = ModelStatus.STREAMING
		self.char_count += len(chunk)
		self.last_chunk = truncate(chunk, PREVIEW_LENGTH)

	def mark_complete(self) -> None:
		self.status = ModelStatus.COMPLETE
		self.end_time = _now()

	def mark_failed(self, error: BaseException | str) -> None:
		self.status = ModelStatus.FAILED
		self.end_time = _now()
		self.error = str(error)


__all__ = [
    "ModelStatus",
    "ModelQueryState",
    "truncate",
    "CHARS_PER_TOKEN",
]
