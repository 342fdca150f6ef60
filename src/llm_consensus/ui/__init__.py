"""User interface components.

This subpackage provides terminal UI and output persistence
functionality for llm-consensus.

Key modules:
    - tui: Rich-based live progress display and print helpers
    - reporting: JSON result writing and run auto-save
"""

from llm_consensus.ui.tui import (
    ConsensusView,
    ProgressDisplay,
    describe_status,
    make_console,
    print_consensus,
    print_error,
    print_header,
    print_model_response,
    print_phase,
    print_success,
    print_summary,
)
from llm_consensus.ui.reporting import generate_run_id, save_run, write_json

__all__ = [
    "ConsensusView",
    "ProgressDisplay",
    "describe_status",
    "make_console",
    "print_consensus",
    "print_error",
    "print_header",
    "print_model_response",
    "print_phase",
    "print_success",
    "print_summary",
    "generate_run_id",
    "save_run",
    "write_json",
]
