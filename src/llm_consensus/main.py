from __future__ import annotations

import asyncio
import signal
import sys
import time
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, TextIO

import typer
from pydantic import ValidationError
from typer.main import get_command

from llm_consensus import __version__
from llm_consensus.core.pipeline import run_consensus
from llm_consensus.errors import ConfigurationError, ConsensusError
from llm_consensus.loaders.catalog import load_catalog
from llm_consensus.models.config import Config, load_env
from llm_consensus.models.consensus_result import ConsensusResult
from llm_consensus.models.run_params import RunParams
from llm_consensus.providers.factory import build_registry
from llm_consensus.providers.registry import Registry
from llm_consensus.ui.reporting import save_run, write_json
from llm_consensus.ui.tui import (
    ConsensusView,
    make_console,
    print_consensus,
    print_error,
    print_header,
    print_model_response,
    print_phase,
    print_success,
    print_summary,
)
from llm_consensus.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

NO_PROMPT_MESSAGE = (
    "no prompt provided: use positional argument, --file, or pipe to stdin")

cli = typer.Typer(add_completion=False, no_args_is_help=True)


@cli.callback()
def root() -> None:
	"""
	Root callback for the llm-consensus CLI.

	Sets up the Typer application with no-args-is-help behavior.
	"""
	return None


def read_prompt(words: Optional[List[str]], file: Optional[str],
                stdin: Optional[TextIO] = None) -> str:
	"""
	Resolve the prompt text.

	Precedence: positional words (joined by spaces), then ``file``
	(surrounding whitespace stripped), then piped stdin.

	Parameters:
		words: Positional prompt words.
		file: Optional prompt file path.
		stdin: Input stream; defaults to sys.stdin.

	Returns:
		The prompt text.

	Raises:
		ConfigurationError: If the file cannot be read or no source is
			available.
	"""
	if words:
		return " ".join(words)
	if file:
		try:
			return Path(file).read_text(encoding="utf-8").strip()
		except OSError as exc:
			raise ConfigurationError(f"reading prompt file: {exc}") from exc
	stdin = stdin if stdin is not None else sys.stdin
	if stdin is not None and not stdin.isatty():
		return "\n".join(stdin.read().splitlines())
	raise ConfigurationError(NO_PROMPT_MESSAGE)


def _format_validation_error(exc: ValidationError) -> str:
	parts = []
	for err in exc.errors():
		loc = ".".join(str(p) for p in err.get("loc", ()))
		msg = err.get("msg", "")
		parts.append(f"{loc}: {msg}" if loc else msg)
	return "; ".join(parts)


async def _execute(config: Config, params: RunParams, registry: Registry,
                   view: ConsensusView) -> ConsensusResult:
	"""Run the pipeline with SIGINT/SIGTERM wired to cancellation."""
	cancel_event = asyncio.Event()
	loop = asyncio.get_running_loop()
	installed = []
	for sig in (signal.SIGINT, signal.SIGTERM):
		try:
			loop.add_signal_handler(sig, cancel_event.set)
			installed.append(sig)
		except (NotImplementedError, RuntimeError):
			logger.debug("signal handler for %s unavailable", sig)
	try:
		with view:
			return await run_consensus(
			    config,
			    params,
			    registry=registry,
			    observer=view.queries,
			    judge_observer=view,
			    cancel_event=cancel_event,
			)
	finally:
		for sig in installed:
			loop.remove_signal_handler(sig)


def _emit_json(result: ConsensusResult) -> None:
	typer.echo(result.to_json())


def run_impl(
    prompt_words: Optional[List[str]],
    models: Optional[str],
    judge: Optional[str] = None,
    file: Optional[str] = None,
    output: Optional[str] = None,
    data_dir: Optional[str] = None,
    timeout: Optional[int] = None,
    judge_timeout: Optional[int] = None,
    quiet: bool = False,
    json_output: bool = False,
    no_save: bool = False,
) -> None:
	"""
	Query all models, synthesize a consensus and route the result.

	Output routing: ``--output`` writes JSON to that file; otherwise,
	unless ``--json`` or ``--no-save``, the run is auto-saved under the
	data directory; ``--json`` prints JSON to stdout; an interactive
	terminal gets the formatted responses and consensus; anything else
	gets JSON on stdout.

	Raises:
		ConsensusError: On configuration or pipeline failure.
		ValidationError: On invalid parameters.
		OSError: If the result file cannot be written.
	"""
	load_env()
	config = Config()
	configure_logging(config.log_level)

	if not models:
		raise ConfigurationError("--models flag is required")
	prompt = read_prompt(prompt_words, file)
	params = RunParams(
	    prompt=prompt,
	    models=models,
	    judge=judge,
	    timeout=timeout,
	    judge_timeout=judge_timeout,
	    output=output,
	    data_dir=data_dir,
	    quiet=quiet,
	    json_output=json_output,
	    no_save=no_save,
	)
	config.apply_overrides(params)

	console = make_console()
	show_ui = console.is_terminal and not params.quiet and not params.json_output
	started = time.monotonic()

	catalog = load_catalog(config.catalog_file)
	registry = build_registry(params.models, config.judge, catalog, config)

	if show_ui:
		print_header(console, params.prompt)
		print_phase(console, "Querying models...")
		console.print()

	view = ConsensusView(params.models, config.judge, enabled=show_ui,
	                     console=console)
	result = asyncio.run(_execute(config, params, registry, view))

	if params.output:
		path = write_json(params.output, result)
		if show_ui:
			console.print()
			print_success(console, f"Run saved to {path.parent}")
	elif params.auto_save:
		run_dir, problems = save_run(config.data_path, result)
		if show_ui:
			for problem in problems:
				print_error(console, problem)
			console.print()
			print_success(console, f"Run saved to {run_dir}")
	elif params.json_output:
		_emit_json(result)
	elif show_ui:
		console.print()
		for response in result.responses:
			print_model_response(console, response)
		print_consensus(console, result.consensus)
		print_summary(
		    console,
		    len(params.models),
		    len(result.responses),
		    len(result.failed_models),
		    timedelta(seconds=time.monotonic() - started),
		)
		if result.warnings:
			console.print()
			for warning in result.warnings:
				print_error(console, warning)
	else:
		_emit_json(result)


def version_callback(value: bool) -> None:
	if value:
		typer.echo(f"llm-consensus {__version__}")
		raise typer.Exit()


@cli.command()
def run(
    prompt: Optional[List[str]] = typer.Argument(
        None, help="Prompt text (words are joined with spaces)"),
    models: Optional[str] = typer.Option(
        None, "--models", help="Comma-separated list of models to query"),
    judge: Optional[str] = typer.Option(
        None, "--judge", help="Model to use for consensus synthesis"),
    file: Optional[str] = typer.Option(None, "--file",
                                       help="Read prompt from file"),
    output: Optional[str] = typer.Option(
        None, "--output",
        help="Write JSON output to a specific file (overrides auto-save)"),
    data_dir: Optional[str] = typer.Option(
        None, "--data-dir", help="Directory for auto-saved runs"),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", help="Per-model timeout in seconds"),
    judge_timeout: Optional[int] = typer.Option(
        None, "--judge-timeout", help="Judge timeout in seconds"),
    quiet: bool = typer.Option(False, "--quiet", "-q",
                               help="Suppress progress output"),
    json_output: bool = typer.Option(
        False, "--json",
        help="Output JSON to stdout (no interactive display, no auto-save)"),
    no_save: bool = typer.Option(
        False, "--no-save",
        help="Don't auto-save results to the data directory"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Print version information and exit",
    ),
) -> None:
	"""
	Query several models and synthesize a consensus answer.

	This is the main CLI command; errors are reported on stderr with a
	non-zero exit code.
	"""
	try:
		run_impl(prompt, models, judge, file, output, data_dir, timeout,
		         judge_timeout, quiet, json_output, no_save)
	except ValidationError as exc:
		typer.echo(f"error: {_format_validation_error(exc)}", err=True)
		raise typer.Exit(code=1)
	except (ConsensusError, OSError) as exc:
		typer.echo(f"error: {exc}", err=True)
		raise typer.Exit(code=1)


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Typer entrypoint that defaults to `run` when appropriate.

	Allows calling 'llm-consensus --models a,b "prompt"' without
	explicitly specifying the 'run' subcommand.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)

	_click_app = get_command(cli)
	commands = getattr(_click_app, "commands", {}).keys()
	# allow optional `run` prefix; everything except top-level help routes to run
	if args and args[0] == "run":
		args = args[1:]
	if args and args[0] not in commands and args[0] != "--help":
		args = ["run"] + args
	return _click_app.main(
	    args=args,
	    prog_name="llm-consensus",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
