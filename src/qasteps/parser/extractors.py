from __future__ import annotations

import logging
import re

from ..types import DialogExpectation, HintedSelector, SelectorKind, SelectorMatch

logger = logging.getLogger(__name__)

SELECTOR_KINDS: tuple[SelectorKind, ...] = ("css", "xpath", "id", "name", "text")

_SELECTOR = re.compile(rf"\b({'|'.join(SELECTOR_KINDS)}):\s*([^,\s]+)", re.IGNORECASE)
_INPUT_FIELD = re.compile(r"\b(?:input|field):\s*([^,\s]+)", re.IGNORECASE)
_DROPDOWN_FIELD = re.compile(r"\b(?:dropdown|select):\s*([^,\s]+)", re.IGNORECASE)
_VALUE = re.compile(r"\b(?:value|text|content):\s*([^,\s]+)", re.IGNORECASE)
_TIMEOUT = re.compile(r"\b(?:timeout|wait):\s*(\d+)", re.IGNORECASE)
_URL = re.compile(r"https?://\S+", re.IGNORECASE)
_QUOTED = re.compile(r"""(["'])(.*?)\1""")

_HINT = re.compile(rf"\(\s*({'|'.join(SELECTOR_KINDS)})\s*:\s*(.+?)\s*\)", re.IGNORECASE)
_PREFIX_HINT = re.compile(r"^\s*(xpath|css)://(.+)$", re.IGNORECASE)
_SCROLL_TARGET = re.compile(r"\bscroll(?:\s+to)?:\s*([^,\s]+)", re.IGNORECASE)
_SCROLL_DIRECTION = re.compile(r"\b(top|bottom|up|down)\b", re.IGNORECASE)
_DURATION = re.compile(
    r"\b(\d+)\s*(milliseconds?|millis|ms|seconds?|secs?|s)\b",
    re.IGNORECASE,
)
# bare number only right after the wait keyword, and nothing but punctuation after it
_BARE_DURATION = re.compile(
    r"^\s*(?:wait|pause|delay)(?:\s+for)?\s+(\d+)\s*(?:[,.;]|$)",
    re.IGNORECASE,
)

# tried in order as (pattern, match outside quotes only);
# # and . must start a token so URLs and e-mails do not match
_CSS_SELECTORS: tuple[tuple[re.Pattern[str], bool], ...] = (
    (re.compile(r"(?:^|(?<=\s))(#[A-Za-z_][\w-]*)"), True),
    (re.compile(r"(?:^|(?<=\s))(\.[A-Za-z_][\w-]*)"), True),
    (re.compile(r"""(\[data-[\w-]+(?:=(?:"[^"]*"|'[^']*'|[^\]\s]+))?\])"""), False),
    (re.compile(r"""(input\[name=['"]?[\w-]+['"]?\])""", re.IGNORECASE), False),
    (re.compile(r"""(button\[name=['"]?[\w-]+['"]?\])""", re.IGNORECASE), False),
    (re.compile(r"<([A-Za-z][\w-]*)"), True),
)
_DIALOG = re.compile(
    r"\s+and\s+(accept|dismiss)\s+(alert|confirm|confirmation|prompt)"
    r"(?:\s+with\s+(['\"])(.*?)\3)?\s*$",
    re.IGNORECASE,
)


def _group(pattern: re.Pattern[str], step: str, index: int = 1) -> str | None:
    match = pattern.search(step)
    if match is None:
        return None
    token = match.group(index).strip()
    return token or None


def extract_general_selector(step: str) -> SelectorMatch | None:
    """Find ``css:``, ``xpath:``, ``id:``, ``name:`` or ``text:`` followed by a token."""

    match = _SELECTOR.search(step)
    if match is None:
        return None
    token = match.group(2).strip()
    if not token:
        return None
    return SelectorMatch(kind=match.group(1).lower(), value=token)


def extract_selector(step: str) -> str | None:
    match = extract_general_selector(step)
    return match.value if match is not None else None


def strip_quoted(step: str) -> str:
    """Return ``step`` with every quoted span removed and whitespace collapsed."""

    return " ".join(_QUOTED.sub(" ", step).split())


def extract_css_selector(step: str) -> str | None:
    """Find a CSS selector written directly in the step (``#id``, ``.class``, ``[data-x]``, ``<tag>``).

    URLs are ignored, and so is quoted text except inside an attribute selector.
    """

    text = _URL.sub(" ", step)
    unquoted = _URL.sub(" ", strip_quoted(step))
    for pattern, outside_quotes in _CSS_SELECTORS:
        match = pattern.search(unquoted if outside_quotes else text)
        if match is not None:
            return match.group(1)
    return None


def extract_input_field(step: str) -> str | None:
    return _group(_INPUT_FIELD, step)


def extract_dropdown_field(step: str) -> str | None:
    return _group(_DROPDOWN_FIELD, step)


def extract_value(step: str) -> str | None:
    return _group(_VALUE, step)


def extract_timeout(step: str) -> int | None:
    """Milliseconds from ``timeout: N`` or ``wait: N``; no unit handling."""

    digits = _group(_TIMEOUT, step)
    return int(digits) if digits is not None else None


def extract_url(step: str) -> str | None:
    match = _URL.search(step)
    return match.group(0) if match else None


def extract_quoted_text(step: str) -> str | None:
    """Inner text of the first quoted span; the opening quote picks the closing one."""

    return _group(_QUOTED, step, index=2)


def extract_hinted_selector(step: str) -> HintedSelector | None:
    """Find a ``(kind: value)`` hint or a whole-step ``xpath://`` / ``css://`` prefix."""

    prefix = _PREFIX_HINT.match(step)
    if prefix is not None:
        value = prefix.group(2).strip()
        if value:
            kind = prefix.group(1).lower()
            logger.debug("Prefix selector hint found", extra={"kind": kind, "selector": value})
            return HintedSelector(kind=kind, value=value, remaining="")

    match = _HINT.search(step)
    if match is None:
        return None
    kind = match.group(1).lower()
    value = match.group(2).strip()
    if not value:
        return None
    remaining = " ".join((step[: match.start()] + " " + step[match.end() :]).split())
    logger.debug("Parenthesised selector hint found", extra={"kind": kind, "selector": value})
    return HintedSelector(kind=kind, value=value, remaining=remaining)


def finalize_selector(kind: str | None, value: str | None) -> str | None:
    if not value:
        return None
    if kind == "xpath":
        if not value.startswith(("//", "./", "(")):
            logger.warning(
                "XPath selector %r is not anchored with //, ./ or (; it will be evaluated relative to the document",
                value,
            )
        return f"xpath:{value}"
    return value


def extract_scroll_target(step: str) -> str | None:
    explicit = _group(_SCROLL_TARGET, step)
    if explicit is not None:
        return explicit
    direction = _group(_SCROLL_DIRECTION, step)
    return direction.lower() if direction is not None else None


def extract_duration(step: str) -> int | None:
    """Free-form wait duration in milliseconds (``3 seconds``, ``500ms``, ``Wait 3000``).

    A number needs a unit, unless it directly follows ``wait``, ``pause``
    or ``delay`` and ends the step; that bare number is read as milliseconds.
    """

    match = _DURATION.search(step)
    if match is None:
        bare = _BARE_DURATION.match(step)
        return int(bare.group(1)) if bare is not None else None
    amount = int(match.group(1))
    unit = match.group(2).lower()
    if unit.startswith("m"):
        return amount
    return amount * 1000


def extract_dialog_expectation(step: str) -> DialogExpectation | None:
    match = _DIALOG.search(step)
    if match is None:
        return None
    action = match.group(1).lower()
    dialog_type = match.group(2).lower()
    if dialog_type == "confirmation":
        dialog_type = "confirm"
    prompt_text = None
    if dialog_type == "prompt" and action == "accept" and match.group(3) is not None:
        prompt_text = match.group(4)
    return DialogExpectation(type=dialog_type, action=action, prompt_text=prompt_text)
