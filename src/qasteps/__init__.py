from __future__ import annotations

from .parser import StepParser, lint_actions, normalize, parse_block
from .types import KeywordTable, ParsedAction

__all__ = ["StepParser", "KeywordTable", "ParsedAction", "normalize", "parse_block", "lint_actions"]

__version__ = "0.1.0"
