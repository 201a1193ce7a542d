from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class TriggerRule:
    """Pairs a compiled trigger pattern with the label it selects."""

    label: str
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def keyword_rule(label: str, keywords: Iterable[str]) -> TriggerRule:
    """Rule matching text that starts with one of ``keywords`` as a whole word.

    A keyword counts when it is followed by a non-word character (space,
    colon, punctuation) or by the end of the text.
    """

    ordered = sorted({word for word in keywords if word}, key=len, reverse=True)
    if not ordered:
        raise ValueError(f"rule '{label}' needs at least one keyword")
    alternation = "|".join(re.escape(word) for word in ordered)
    return TriggerRule(label, re.compile(rf"^(?:{alternation})(?=\W|$)"))


def pattern_rule(label: str, pattern: str | re.Pattern[str], flags: int = re.IGNORECASE) -> TriggerRule:
    if isinstance(pattern, re.Pattern):
        return TriggerRule(label, pattern)
    return TriggerRule(label, re.compile(pattern, flags))


def substring_rule(label: str, needle: str) -> TriggerRule:
    return TriggerRule(label, re.compile(re.escape(needle)))


def first_match(rules: Sequence[TriggerRule], text: str) -> str | None:
    """Return the label of the first rule matching ``text``, in rule order."""

    for rule in rules:
        if rule.matches(text):
            return rule.label
    return None


def first_matching_rule(rules: Sequence[TriggerRule], text: str) -> TriggerRule | None:
    for rule in rules:
        if rule.matches(text):
            return rule
    return None
