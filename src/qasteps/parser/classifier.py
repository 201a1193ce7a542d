from __future__ import annotations

import logging
from typing import Iterable, Mapping

from ..types import ActionType, KeywordTable
from .dispatch import TriggerRule, first_match, keyword_rule

logger = logging.getLogger(__name__)

UNKNOWN: ActionType = "unknown"


class ActionClassifier:
    """Ordered keyword-prefix classification of a single step."""

    def __init__(self, keyword_sets: Mapping[ActionType, Iterable[str]] | KeywordTable | None = None) -> None:
        if keyword_sets is None:
            keyword_sets = KeywordTable.default()
        if isinstance(keyword_sets, KeywordTable):
            keyword_sets = keyword_sets.actions
        rules: list[TriggerRule] = []
        for action_type, keywords in keyword_sets.items():
            words = [" ".join(word.split()).casefold() for word in keywords]
            words = [word for word in words if word]
            if not words:
                logger.warning("Action type has no trigger keywords; skipped", extra={"action_type": action_type})
                continue
            rules.append(keyword_rule(action_type, words))
        self._rules: tuple[TriggerRule, ...] = tuple(rules)

    @property
    def priority(self) -> tuple[str, ...]:
        return tuple(rule.label for rule in self._rules)

    def classify(self, step: str) -> ActionType:
        folded = " ".join(step.split()).casefold()
        action_type = first_match(self._rules, folded)
        if action_type is None:
            logger.info("No action trigger matched", extra={"step": step})
            return UNKNOWN
        return action_type  # type: ignore[return-value]

    __call__ = classify


_default_classifier = ActionClassifier()


def classify(step: str, keyword_sets: Mapping[ActionType, Iterable[str]] | KeywordTable | None = None) -> ActionType:
    if keyword_sets is None:
        return _default_classifier.classify(step)
    return ActionClassifier(keyword_sets).classify(step)
