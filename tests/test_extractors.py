from __future__ import annotations

import logging

import pytest

from qasteps.parser.extractors import (
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


def test_selector_stops_at_whitespace_or_comma() -> None:
    assert extract_selector("Click css: #login-button, then wait") == "#login-button"
    assert extract_selector("Click XPATH: //button[1] now") == "//button[1]"
    assert extract_selector("Click the login button") is None


def test_general_selector_reports_keyword() -> None:
    match = extract_general_selector("Verify ID: headline is shown")
    assert match is not None
    assert match.kind == "id"
    assert match.value == "headline"


def test_field_extractors() -> None:
    assert extract_input_field("Type 'bob' into field: username") == "username"
    assert extract_input_field("INPUT: email,password") == "email"
    assert extract_dropdown_field("dropdown: country") == "country"
    assert extract_dropdown_field("Select: size") == "size"
    assert extract_value("Select value: Large from size") == "Large"
    assert extract_value("Click the button") is None


def test_timeout_requires_digits() -> None:
    assert extract_timeout("wait: 2000") == 2000
    assert extract_timeout("Click 'Save' timeout: 500") == 500
    assert extract_timeout("wait: two seconds") is None
    assert extract_timeout("Wait 3000") is None


def test_url_is_returned_verbatim() -> None:
    assert extract_url("navigate to https://example.com/login") == "https://example.com/login"
    assert extract_url("Open HTTP://Example.com/a?b=1 and wait") == "HTTP://Example.com/a?b=1"
    assert extract_url("Open example.com") is None


def test_quoted_text_uses_matching_delimiter() -> None:
    assert extract_quoted_text("Click the 'Login' button") == "Login"
    assert extract_quoted_text('Type "it\'s me" into name') == "it's me"
    assert extract_quoted_text("Verify '  padded  ' text") == "padded"
    assert extract_quoted_text("Click 'first' then 'second'") == "first"


@pytest.mark.parametrize("step", ["Click ''", 'Type "   " into name', "Click the button"])
def test_quoted_text_absent(step: str) -> None:
    assert extract_quoted_text(step) is None


def test_hinted_selector_in_parentheses() -> None:
    hint = extract_hinted_selector("Click (css: #submit) on the form")
    assert hint is not None
    assert hint.kind == "css"
    assert hint.value == "#submit"
    assert hint.remaining == "Click on the form"


def test_hinted_selector_prefix() -> None:
    hint = extract_hinted_selector("xpath://div[@id='main']")
    assert hint is not None
    assert hint.kind == "xpath"
    assert hint.value == "//div[@id='main']"
    assert hint.remaining == ""
    assert extract_hinted_selector("Click the button") is None


def test_finalize_selector(caplog: pytest.LogCaptureFixture) -> None:
    assert finalize_selector("css", "#a") == "#a"
    assert finalize_selector("xpath", "//a") == "xpath://a"
    assert finalize_selector("xpath", None) is None
    with caplog.at_level(logging.WARNING):
        assert finalize_selector("xpath", "div/a") == "xpath:div/a"
    assert "not anchored" in caplog.text


def test_scroll_target() -> None:
    assert extract_scroll_target("scroll: #footer") == "#footer"
    assert extract_scroll_target("Scroll to: #pricing") == "#pricing"
    assert extract_scroll_target("Scroll to the Bottom of the page") == "bottom"
    assert extract_scroll_target("Open the dropdown") is None


@pytest.mark.parametrize(
    ("step", "expected"),
    [
        ("Wait 3000", 3000),
        ("wait 3 seconds", 3000),
        ("Pause for 500 ms", 500),
        ("delay 2s", 2000),
        ("Wait for the page", None),
        ("Wait for 1500", 1500),
        ("Wait until 3 items are visible", None),
        ("Wait 2 rows", None),
        ("Pause 750.", 750),
    ],
)
def test_duration(step: str, expected: int | None) -> None:
    assert extract_duration(step) == expected


def test_dialog_expectation() -> None:
    dialog = extract_dialog_expectation("Click 'Delete' and accept confirmation")
    assert dialog is not None
    assert dialog.type == "confirm"
    assert dialog.action == "accept"
    assert dialog.prompt_text is None

    prompt = extract_dialog_expectation("Click 'Rename' and accept prompt with 'new name'")
    assert prompt is not None
    assert prompt.prompt_text == "new name"

    dismissed = extract_dialog_expectation("Click 'Rename' and dismiss prompt with 'x'")
    assert dismissed is not None
    assert dismissed.prompt_text is None

    assert extract_dialog_expectation("Click 'OK'") is None


@pytest.mark.parametrize(
    "step",
    [
        "Click the 'Login' button",
        "css: ,",
        "value:   ",
        "Type '' into field: ",
        "",
    ],
)
def test_extractors_never_return_blank(step: str) -> None:
    for extractor in (
        extract_selector,
        extract_input_field,
        extract_dropdown_field,
        extract_value,
        extract_url,
        extract_quoted_text,
    ):
        result = extractor(step)
        assert result is None or (result and result == result.strip())


def test_hinted_selector_only_accepts_selector_kinds() -> None:
    assert extract_hinted_selector("Wait (timeout: 5000)") is None
    assert extract_hinted_selector("Click (step: 2) now") is None
    hint = extract_hinted_selector("Click (ID: main-menu)")
    assert hint is not None
    assert hint.kind == "id"


@pytest.mark.parametrize(
    ("step", "expected"),
    [
        ("Click #submit", "#submit"),
        ("Click .btn-primary then wait", ".btn-primary"),
        ("Click [data-test=login]", "[data-test=login]"),
        ('Click [data-qa="save button"]', '[data-qa="save button"]'),
        ("Type 'q' into input[name='query']", "input[name='query']"),
        ("Type 'x' into input[name=q]", "input[name=q]"),
        ("Click button[name=go]", "button[name=go]"),
        ("Click the <button> element", "button"),
        ("Navigate to https://example.com/#top", None),
        ("Type 'a@b.c' into email", None),
        ("Click 'Save #2' on user@mail.com", None),
        ("Click the button", None),
    ],
)
def test_css_selector_in_step_text(step: str, expected: str | None) -> None:
    assert extract_css_selector(step) == expected
