from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Mapping

from ..types import ActionType, FieldCategory, KeywordTable, ParsedAction, SelectorMatch
from .classifier import ActionClassifier
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
    extract_timeout,
    extract_url,
    extract_value,
    finalize_selector,
)
from .fields import FieldDetector
from .normalizer import normalize

logger = logging.getLogger(__name__)

Extractor = Callable[[str], Any]
Classify = Callable[[str], ActionType]
DetectField = Callable[[str], FieldCategory]


def _target_selector(step: str) -> SelectorMatch | None:
    hint = extract_hinted_selector(step)
    if hint is not None:
        return SelectorMatch(kind=hint.kind, value=finalize_selector(hint.kind, hint.value) or hint.value)
    general = extract_general_selector(step)
    if general is not None:
        return general
    css = extract_css_selector(step)
    return SelectorMatch(kind="css", value=css) if css is not None else None


def _step_value(step: str) -> str | None:
    value = extract_value(step)
    if value is not None:
        return value
    return extract_quoted_text(step)


DEFAULT_EXTRACTORS: dict[str, Extractor] = {
    "selector": _target_selector,
    "value": _step_value,
    "url": extract_url,
    "timeout_ms": extract_timeout,
    "input_field": extract_input_field,
    "dropdown_field": extract_dropdown_field,
    "scroll_target": extract_scroll_target,
    "dialog": extract_dialog_expectation,
}

# fields kept only for the listed action types
ACTION_SCOPED_FIELDS: dict[str, frozenset[str]] = {
    "field_category": frozenset({"type"}),
    "scroll_target": frozenset({"scroll"}),
}

_RECORD_FIELDS = frozenset(ParsedAction.model_fields) - {"raw", "type"}


def _check_extractors(extractors: Mapping[str, Extractor]) -> None:
    unknown = set(extractors) - _RECORD_FIELDS
    if unknown:
        raise ValueError(f"Extractors target unknown action fields: {sorted(unknown)}")


def assemble(
    step: str,
    classify: Classify,
    extractors: Mapping[str, Extractor] = DEFAULT_EXTRACTORS,
    detect_field: DetectField | None = None,
) -> ParsedAction:
    """Compose classifier and extractor output for one normalized step."""

    action_type = classify(step)
    extracted: dict[str, Any] = {name: extractor(step) for name, extractor in extractors.items()}
    if detect_field is not None:
        extracted["field_category"] = detect_field(step)

    if action_type == "wait" and extracted.get("timeout_ms") is None:
        extracted["timeout_ms"] = extract_duration(step)

    fields: dict[str, Any] = {}
    for name, value in extracted.items():
        if value is None:
            continue
        scope = ACTION_SCOPED_FIELDS.get(name)
        if scope is not None and action_type not in scope:
            continue
        fields[name] = value
    return ParsedAction(raw=step, type=action_type, **fields)


class StepParser:
    """Parses raw step blocks into ordered :class:`ParsedAction` records."""

    def __init__(
        self,
        table: KeywordTable | None = None,
        workers: int = 1,
        extractors: Mapping[str, Extractor] | None = None,
    ) -> None:
        self.table = table or KeywordTable.default()
        self.workers = max(1, workers)
        self._classifier = ActionClassifier(self.table)
        self._detector = FieldDetector.from_table(self.table)
        self._extractors = dict(DEFAULT_EXTRACTORS)
        if extractors:
            self._extractors.update(extractors)
        _check_extractors(self._extractors)

    def parse_step(self, step: str) -> ParsedAction:
        action = assemble(step, self._classifier, self._extractors, self._detector)
        logger.debug("Parsed step", extra={"step": step, "action": action.type})
        return action

    def parse_steps(self, steps: Iterable[str]) -> list[ParsedAction]:
        items = [step for step in steps if step]
        if self.workers == 1 or len(items) < 2:
            return [self.parse_step(step) for step in items]
        # Executor.map yields in submission order, not completion order
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(pool.map(self.parse_step, items))

    def parse(self, raw: str) -> list[ParsedAction]:
        actions = self.parse_steps(normalize(raw))
        unknown = sum(1 for action in actions if action.type == "unknown")
        logger.info("Parsed step block", extra={"steps": len(actions), "unknown": unknown})
        return actions


_default_parser: StepParser | None = None


def default_parser() -> StepParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = StepParser()
    return _default_parser


def parse_block(raw: str) -> list[ParsedAction]:
    return default_parser().parse(raw)
