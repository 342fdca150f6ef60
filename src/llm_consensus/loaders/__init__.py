"""File and resource loading utilities.

Key modules:
    - prompts: Judge prompt template loading
    - catalog: Model catalog loading from YAML
"""

from .prompts import load_judge_template, load_prompt
from .catalog import load_catalog, parse_catalog

__all__ = [
    "load_prompt",
    "load_judge_template",
    "load_catalog",
    "parse_catalog",
]
