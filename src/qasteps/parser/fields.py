from __future__ import annotations

import re
from typing import Sequence

from ..types import DEFAULT_FIELD_PATTERNS, FIELD_CATEGORY_ORDER, FieldCategory, KeywordTable
from .dispatch import TriggerRule, first_match, first_matching_rule, pattern_rule, substring_rule
from .extractors import strip_quoted

FALLBACK_CATEGORY: FieldCategory = "text"

_INTO = re.compile(r"\binto\b", re.IGNORECASE)


def field_target_text(step: str) -> str:
    """Text naming the field a step targets: quoted values dropped, then the part after the last ``into``."""

    text = strip_quoted(step)
    parts = _INTO.split(text)
    if len(parts) > 1 and parts[-1].strip():
        return parts[-1].strip()
    return text


def _category_rules(categories: Sequence[FieldCategory]) -> tuple[TriggerRule, ...]:
    return tuple(substring_rule(category, category) for category in categories)


_DEFAULT_CATEGORY_RULES = _category_rules(FIELD_CATEGORY_ORDER)


def resolve_field_category(
    pattern: str | re.Pattern[str],
    categories: Sequence[FieldCategory] | None = None,
) -> FieldCategory:
    """Map a label pattern to its field category.

    The check runs against the pattern's own source text, in priority
    order, so ``username|user`` resolves to ``username`` although it also
    contains ``name``.
    """

    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    rules = _DEFAULT_CATEGORY_RULES if categories is None else _category_rules(categories)
    category = first_match(rules, source)
    return category if category is not None else FALLBACK_CATEGORY  # type: ignore[return-value]


class FieldDetector:
    """Finds which label pattern a step mentions and resolves its category."""

    def __init__(
        self,
        patterns: Sequence[str] = DEFAULT_FIELD_PATTERNS,
        categories: Sequence[FieldCategory] = FIELD_CATEGORY_ORDER,
    ) -> None:
        self._label_rules = tuple(pattern_rule(pattern, pattern) for pattern in patterns)
        self._categories = tuple(categories)

    @classmethod
    def from_table(cls, table: KeywordTable) -> "FieldDetector":
        return cls(patterns=table.field_patterns, categories=table.field_categories)

    def matched_pattern(self, step: str) -> re.Pattern[str] | None:
        rule = first_matching_rule(self._label_rules, field_target_text(step))
        return rule.pattern if rule is not None else None

    def detect(self, step: str) -> FieldCategory:
        pattern = self.matched_pattern(step)
        if pattern is None:
            return FALLBACK_CATEGORY
        return resolve_field_category(pattern, self._categories)

    __call__ = detect


_default_detector = FieldDetector()


def detect_field_category(step: str) -> FieldCategory:
    return _default_detector.detect(step)
