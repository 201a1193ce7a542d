from __future__ import annotations

from .assembler import DEFAULT_EXTRACTORS, StepParser, assemble, default_parser, parse_block
from .classifier import ActionClassifier, classify
from .extractors import (
    extract_css_selector,
    extract_dialog_expectation,
    extract_dropdown_field,
    extract_duration,
    extract_general_selector,
    extract_hinted_selector,
    extract_input_field,
    extract_quoted_text,
    extract_scroll_target,
    extract_selector,
    extract_timeout,
    extract_url,
    extract_value,
    finalize_selector,
)
from .fields import FieldDetector, detect_field_category, resolve_field_category
from .lint import lint_actions
from .normalizer import StepSequence, normalize

__all__ = [
	"StepParser",
	"assemble",
	"default_parser",
	"parse_block",
	"DEFAULT_EXTRACTORS",
	"ActionClassifier",
	"classify",
	"FieldDetector",
	"detect_field_category",
	"resolve_field_category",
	"StepSequence",
	"normalize",
	"lint_actions",
	"extract_selector",
	"extract_general_selector",
	"extract_css_selector",
	"extract_input_field",
	"extract_dropdown_field",
	"extract_value",
	"extract_timeout",
	"extract_url",
	"extract_quoted_text",
	"extract_hinted_selector",
	"finalize_selector",
	"extract_scroll_target",
	"extract_duration",
	"extract_dialog_expectation",
]
