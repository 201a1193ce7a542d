from __future__ import annotations

import re
from pathlib import Path
from typing import ClassVar, Iterable, Literal, Mapping

import orjson
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import KeywordTableError

ActionType = Literal[
    "navigate",
    "click",
    "type",
    "select",
    "wait",
    "scroll",
    "assert",
    "hover",
    "unknown",
]

FieldCategory = Literal[
    "username",
    "password",
    "email",
    "name",
    "phone",
    "address",
    "search",
    "text",
]

SelectorKind = Literal["css", "xpath", "id", "name", "text"]

FIELD_CATEGORY_ORDER: tuple[FieldCategory, ...] = (
    "username",
    "password",
    "email",
    "name",
    "phone",
    "address",
    "search",
)

DEFAULT_ACTION_KEYWORDS: dict[ActionType, tuple[str, ...]] = {
    "navigate": ("navigate", "go to", "open", "visit"),
    "click": ("click", "tap", "press"),
    "type": ("type", "enter", "input", "fill"),
    "wait": ("wait", "pause", "delay"),
    "assert": ("assert", "verify", "check", "expect", "should"),
    "select": ("select", "choose", "pick", "dropdown"),
    "scroll": ("scroll", "swipe"),
    "hover": ("hover", "mouseover"),
}

DEFAULT_FIELD_PATTERNS: tuple[str, ...] = (
    r"username|user|login",
    r"password|pass",
    r"email|mail",
    r"name|full.?name",
    r"phone|mobile",
    r"address",
    r"search|query",
)


class SelectorMatch(BaseModel):
    """Selector token together with the keyword that introduced it."""

    kind: SelectorKind
    value: str = Field(..., min_length=1)

    model_config = {"frozen": True, "extra": "forbid"}


class HintedSelector(BaseModel):
    kind: SelectorKind
    value: str = Field(..., min_length=1)
    remaining: str = ""

    model_config = {"frozen": True}


class DialogExpectation(BaseModel):
    type: Literal["alert", "confirm", "prompt"]
    action: Literal["accept", "dismiss"]
    prompt_text: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}


class ParsedAction(BaseModel):
    """Structured browser action assembled from one normalized step."""

    raw: str = Field(..., min_length=1)
    type: ActionType
    selector: SelectorMatch | None = None
    value: str | None = None
    url: str | None = None
    timeout_ms: int | None = Field(default=None, ge=0)
    input_field: str | None = None
    dropdown_field: str | None = None
    field_category: FieldCategory | None = None
    scroll_target: str | None = None
    dialog: DialogExpectation | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)

    def summary(self) -> str:
        parts = [self.type]
        if self.selector is not None:
            parts.append(f"selector={self.selector.kind}:{self.selector.value}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.url is not None:
            parts.append(f"url={self.url}")
        if self.timeout_ms is not None:
            parts.append(f"timeout={self.timeout_ms}ms")
        if self.input_field is not None:
            parts.append(f"input={self.input_field}")
        if self.dropdown_field is not None:
            parts.append(f"dropdown={self.dropdown_field}")
        if self.field_category is not None:
            parts.append(f"field={self.field_category}")
        if self.scroll_target is not None:
            parts.append(f"scroll={self.scroll_target}")
        if self.dialog is not None:
            parts.append(f"dialog={self.dialog.action}:{self.dialog.type}")
        return " ".join(parts)


class KeywordTable(BaseModel):
    """Trigger keywords and field patterns that drive classification.

    ``actions`` is ordered: the first action type whose trigger matches wins.
    Callers extend the table instead of touching the parser.
    """

    actions: dict[ActionType, tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_ACTION_KEYWORDS)
    )
    field_categories: tuple[FieldCategory, ...] = FIELD_CATEGORY_ORDER
    field_patterns: tuple[str, ...] = DEFAULT_FIELD_PATTERNS

    model_config = {"frozen": True, "extra": "forbid"}

    RESERVED_ACTIONS: ClassVar[frozenset[str]] = frozenset({"unknown"})

    @field_validator("actions")
    @classmethod
    def _clean_actions(
        cls, value: dict[ActionType, tuple[str, ...]]
    ) -> dict[ActionType, tuple[str, ...]]:
        cleaned: dict[ActionType, tuple[str, ...]] = {}
        for action_type, keywords in value.items():
            if action_type in cls.RESERVED_ACTIONS:
                raise ValueError(f"'{action_type}' cannot have trigger keywords")
            words = _clean_keywords(keywords)
            if not words:
                raise ValueError(f"action '{action_type}' has no trigger keywords")
            cleaned[action_type] = words
        return cleaned

    @field_validator("field_patterns")
    @classmethod
    def _check_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for pattern in value:
            if not pattern.strip():
                raise ValueError("field patterns must not be blank")
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid field pattern {pattern!r}: {exc}") from exc
        return value

    @classmethod
    def default(cls) -> "KeywordTable":
        return cls()

    @classmethod
    def from_json(cls, payload: str | bytes) -> "KeywordTable":
        try:
            data = orjson.loads(payload)
        except orjson.JSONDecodeError as exc:
            raise KeywordTableError(f"Keyword table is not valid JSON: {exc}") from exc
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: object) -> "KeywordTable":
        if not isinstance(data, dict):
            raise KeywordTableError("Keyword table must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise KeywordTableError(f"Invalid keyword table: {exc}") from exc

    @classmethod
    def load(cls, path: Path) -> "KeywordTable":
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise KeywordTableError(f"Cannot read keyword table {path}: {exc}") from exc
        return cls.from_json(payload)

    def extend(
        self,
        actions: Mapping[ActionType, Iterable[str]] | None = None,
        field_patterns: Iterable[str] = (),
    ) -> "KeywordTable":
        """Return a copy with extra triggers appended, priority order kept."""

        merged: dict[str, tuple[str, ...]] = dict(self.actions)
        for action_type, keywords in (actions or {}).items():
            existing = merged.get(action_type, ())
            extra = tuple(word for word in _clean_keywords(keywords) if word not in existing)
            merged[action_type] = existing + extra
        patterns = self.field_patterns + tuple(
            pattern for pattern in field_patterns if pattern not in self.field_patterns
        )
        return KeywordTable.from_mapping(
            {
                "actions": merged,
                "field_categories": self.field_categories,
                "field_patterns": patterns,
            }
        )


class LintProblem(BaseModel):
    step_number: int = Field(..., ge=0)
    error: str
    suggestion: str | None = None


def _clean_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    if isinstance(keywords, str):
        keywords = (keywords,)
    seen: list[str] = []
    for keyword in keywords:
        word = " ".join(str(keyword).split()).casefold()
        if word and word not in seen:
            seen.append(word)
    return tuple(seen)
