from __future__ import annotations

from typing import Sequence

from ..types import LintProblem, ParsedAction

TARGET_ACTIONS = frozenset({"click", "type", "select", "hover"})

SUPPORTED_ACTIONS_HINT = "Supported actions: navigate, click, type, select, wait, scroll, assert, hover"


def _has_target(action: ParsedAction) -> bool:
    return any(
        field is not None
        for field in (action.selector, action.value, action.input_field, action.dropdown_field)
    )


def lint_action(action: ParsedAction, step_number: int) -> list[LintProblem]:
    """Heuristic checks for a single parsed step, numbered from 1."""

    prefix = f"[Step {step_number}]"
    if action.type == "unknown":
        return [
            LintProblem(
                step_number=step_number,
                error=f"{prefix} Unrecognised action",
                suggestion=SUPPORTED_ACTIONS_HINT,
            )
        ]

    problems: list[LintProblem] = []
    if action.type in TARGET_ACTIONS and not _has_target(action):
        problems.append(
            LintProblem(
                step_number=step_number,
                error=f'{prefix} Action "{action.type}" missing target selector',
                suggestion='Add a selector hint, e.g. "Click (css: #submit)" or quote the visible text',
            )
        )
    if action.type == "type" and action.value is None:
        problems.append(
            LintProblem(
                step_number=step_number,
                error=f"{prefix} Type action missing value",
                suggestion='Quote the value to type, e.g. "Type \'john@example.com\' into email"',
            )
        )
    if action.type == "navigate" and action.url is None and action.value is None:
        problems.append(
            LintProblem(
                step_number=step_number,
                error=f"{prefix} Navigate action missing URL",
                suggestion='Include an absolute URL, e.g. "Navigate to https://example.com"',
            )
        )
    if action.type == "assert" and action.value is None and action.selector is None:
        problems.append(
            LintProblem(
                step_number=step_number,
                error=f"{prefix} Assert step lacks expected text",
                suggestion='Quote the expected text, e.g. "Verify \'Welcome back\' is shown"',
            )
        )
    return problems


def lint_actions(actions: Sequence[ParsedAction]) -> list[LintProblem]:
    if not actions:
        return [
            LintProblem(
                step_number=0,
                error="No steps defined",
                suggestion='Add at least one actionable step like "Navigate to https://example.com"',
            )
        ]
    problems: list[LintProblem] = []
    for number, action in enumerate(actions, start=1):
        problems.extend(lint_action(action, number))
    return problems
