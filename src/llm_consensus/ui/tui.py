"""
Terminal UI for run progress visualization.

Provides a Rich-based live progress table for the query and judge
phases, plus the print helpers used to render the final outcome.
All output goes to a stderr console so stdout stays clean for JSON.
"""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Sequence

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from llm_consensus.models.progress import (
    ModelQueryState,
    ModelStatus,
    truncate,
)
from llm_consensus.models.query import QueryResponse

MODEL_NAME_WIDTH = 25
PROMPT_PREVIEW_LENGTH = 60

_STATUS_STYLES = {
    ModelStatus.PENDING: "dim",
    ModelStatus.RUNNING: "yellow",
    ModelStatus.STREAMING: "cyan",
    ModelStatus.COMPLETE: "green",
    ModelStatus.FAILED: "red",
}


def make_console() -> Console:
	"""Console bound to stderr, the channel for all human output."""
	return Console(stderr=True)


def _seconds(delta: timedelta) -> float:
	return delta.total_seconds()


def describe_status(state: ModelQueryState) -> str:
	"""
	Render the status column text for one model.

	Parameters:
		state: Progress state of the model.

	Returns:
		Human readable status line.
	"""
	elapsed = _seconds(state.elapsed)
	if state.status == ModelStatus.PENDING:
		return "pending"
	if state.status == ModelStatus.RUNNING:
		return f"connecting... {elapsed:.1f}s"
	if state.status == ModelStatus.STREAMING:
		line = f"streaming ~{state.token_estimate} tokens {elapsed:.1f}s"
		if state.last_chunk:
			line += f"  {state.last_chunk}"
		return line
	if state.status == ModelStatus.COMPLETE:
		return f"done ~{state.token_estimate} tokens in {elapsed:.1f}s"
	return f"failed: {state.error}"


class ProgressDisplay:
	"""
	Live progress table for a set of concurrently queried models.

	Implements the progress observer hooks. Hooks only mutate state
	under a lock; the Live display re-renders on its own refresh thread,
	so callbacks stay cheap even for chunk-heavy streams. When disabled
	the state is still tracked but nothing is drawn.
	"""

	def __init__(self, models: Sequence[str], *, title: str = "Querying",
	             enabled: bool = True, console: Console | None = None):
		self.console = console or make_console()
		self.title = title
		self.enabled = enabled
		self.order: list[str] = list(dict.fromkeys(models))
		self.states: dict[str, ModelQueryState] = {
		    m: ModelQueryState(model=m) for m in self.order
		}
		self._spinners: dict[str, Spinner] = {
		    m: Spinner("dots") for m in self.order
		}
		self.completed = 0
		self._lock = threading.Lock()
		self.live: Live | None = None

	def _state(self, model: str) -> ModelQueryState | None:
		return self.states.get(model)

	def on_model_start(self, model: str) -> None:
		with self._lock:
			state = self._state(model)
			if state:
				state.mark_started()

	def on_model_stream(self, model: str, chunk: str) -> None:
		with self._lock:
			state = self._state(model)
			if state:
				state.mark_streaming(chunk)

	def on_model_complete(self, model: str) -> None:
		with self._lock:
			self.completed += 1
			state = self._state(model)
			if state:
				state.mark_complete()

	def on_model_error(self, model: str, error: BaseException) -> None:
		with self._lock:
			state = self._state(model)
			if state:
				state.mark_failed(error)

	def _icon(self, state: ModelQueryState):
		if state.status in (ModelStatus.RUNNING, ModelStatus.STREAMING):
			return self._spinners[state.model]
		if state.status == ModelStatus.COMPLETE:
			return Text("✓", style="green")
		if state.status == ModelStatus.FAILED:
			return Text("✗", style="red")
		return Text("○", style="dim")

	def _build_table(self) -> Table:
		"""Build the progress table from a consistent state snapshot."""
		with self._lock:
			table = Table(
			    title=f"{self.title} {len(self.order)} model(s)",
			    title_justify="left",
			    title_style="bold cyan",
			    box=box.SIMPLE,
			    show_header=False,
			)
			table.add_column("", width=2)
			table.add_column("Model", min_width=MODEL_NAME_WIDTH)
			table.add_column("Status")
			for model in self.order:
				state = self.states[model]
				style = _STATUS_STYLES[state.status]
				table.add_row(
				    self._icon(state),
				    truncate(state.model, MODEL_NAME_WIDTH),
				    Text(describe_status(state), style=style),
				)
			return table

	def __enter__(self):
		"""Start the Live display when enabled."""
		if self.enabled:
			self.live = Live(
			    get_renderable=self._build_table,
			    console=self.console,
			    refresh_per_second=10,
			    transient=True,
			)
			self.live.start()
		return self

	def __exit__(self, exc_type, exc, tb):
		"""Stop the Live display."""
		self.finalize()

	def finalize(self) -> None:
		"""Stop the live display."""
		if self.live:
			self.live.stop()
			self.live = None


class ConsensusView:
	"""
	Two-phase live display: model queries, then the judge.

	``queries`` is the observer for the query phase; the view itself is
	the judge observer. The judge's start event closes the query table,
	prints the phase transition and opens the judge table.
	"""

	def __init__(self, models: Sequence[str], judge: str, *,
	             enabled: bool = True, console: Console | None = None):
		self.console = console or make_console()
		self.enabled = enabled
		self.queries = ProgressDisplay(models, title="Querying",
		                               enabled=enabled, console=self.console)
		self.judge = ProgressDisplay([judge], title="Judging",
		                             enabled=enabled, console=self.console)

	def __enter__(self):
		self.queries.__enter__()
		return self

	def __exit__(self, exc_type, exc, tb):
		self.finalize()

	def finalize(self) -> None:
		self.queries.finalize()
		self.judge.finalize()

	def on_model_start(self, model: str) -> None:
		self.queries.finalize()
		if self.enabled:
			print_success(
			    self.console,
			    f"Received responses from {self.queries.completed} models")
			self.console.print()
			print_phase(self.console, "Synthesizing consensus...")
			self.console.print()
		self.judge.__enter__()
		self.judge.on_model_start(model)

	def on_model_stream(self, model: str, chunk: str) -> None:
		self.judge.on_model_stream(model, chunk)

	def on_model_complete(self, model: str) -> None:
		self.judge.on_model_complete(model)
		self.judge.finalize()
		if self.enabled:
			print_success(self.console, "Consensus reached!")

	def on_model_error(self, model: str, error: BaseException) -> None:
		self.judge.on_model_error(model, error)
		self.judge.finalize()


def print_header(console: Console, prompt: str) -> None:
	console.print()
	console.print(
	    Panel(
	        Text(truncate(prompt, PROMPT_PREVIEW_LENGTH), style="dim"),
	        title="LLM Consensus",
	        title_align="left",
	        border_style="cyan",
	        box=box.ROUNDED,
	        expand=False,
	    ))
	console.print()


def print_phase(console: Console, phase: str) -> None:
	console.print(Text(f"▸ {phase}", style="bold yellow"))


def print_success(console: Console, msg: str) -> None:
	console.print(Text(f"✓ {msg}", style="green"))


def print_error(console: Console, msg: str) -> None:
	console.print(Text(f"✗ {msg}", style="red"))


def print_model_response(console: Console, response: QueryResponse) -> None:
	"""Print one model's answer framed with model, provider and latency."""
	console.print(
	    Panel(
	        Text(response.content),
	        title=Text(f"{response.model} ({response.provider}) "
	                   f"[{response.latency_seconds:.1f}s]"),
	        title_align="left",
	        border_style="blue",
	        box=box.SQUARE,
	    ))


def print_consensus(console: Console, consensus: str) -> None:
	console.print(
	    Panel(
	        Text(consensus),
	        title="CONSENSUS",
	        border_style="bold green",
	        box=box.DOUBLE,
	    ))


def print_summary(console: Console, total_models: int, succeeded: int,
                  failed: int, total_time: timedelta) -> None:
	"""
	Print the run summary.

	Parameters:
		console: Destination console.
		total_models: Number of models queried.
		succeeded: Number of successful responses.
		failed: Number of failed models.
		total_time: Wall-clock duration of the whole run.
	"""
	console.print()
	console.rule("Summary", style="dim", align="left")
	line = Text(f"Models queried: {total_models} (")
	line.append(f"{succeeded} succeeded", style="green")
	line.append(", ")
	line.append(f"{failed} failed", style="red")
	line.append(")")
	console.print(line)
	console.print(f"Total time: {_seconds(total_time):.1f}s")


__all__ = [
    "ProgressDisplay",
    "ConsensusView",
    "describe_status",
    "make_console",
    "print_header",
    "print_phase",
    "print_success",
    "print_error",
    "print_model_response",
    "print_consensus",
    "print_summary",
]
