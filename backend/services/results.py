"""Execution result model and verdict reconciliation.

Both engines are normalised into Judge0-shaped ``ExecutionResult`` objects so
the verdict logic never has to know which sandbox produced the output.
"""

import json
from typing import Awaitable, Callable

from pydantic import BaseModel

# ─── Judge0 status ids ─────────────────────────────────────────

IN_QUEUE = 1
PROCESSING = 2
ACCEPTED = 3
WRONG_ANSWER = 4
TIME_LIMIT_EXCEEDED = 5
COMPILATION_ERROR = 6
RUNTIME_ERROR = 11
INTERNAL_ERROR = 13

STATUS_DESCRIPTIONS = {
    IN_QUEUE: "In Queue",
    PROCESSING: "Processing",
    ACCEPTED: "Accepted",
    WRONG_ANSWER: "Wrong Answer",
    TIME_LIMIT_EXCEEDED: "Time Limit Exceeded",
    COMPILATION_ERROR: "Compilation Error",
    RUNTIME_ERROR: "Runtime Error (NZEC)",
    INTERNAL_ERROR: "Internal Error",
}

PENDING_STATUSES = (IN_QUEUE, PROCESSING)


class ExecutionStatus(BaseModel):
    id: int
    description: str

    @classmethod
    def of(cls, status_id: int, description: str | None = None) -> "ExecutionStatus":
        return cls(id=status_id, description=description or STATUS_DESCRIPTIONS.get(status_id, "Unknown"))

    @property
    def pending(self) -> bool:
        return self.id in PENDING_STATUSES


class ExecutionResult(BaseModel):
    stdout: str = ""
    stderr: str = ""
    compile_output: str | None = None
    status: ExecutionStatus
    time: str = "0"
    memory: int = 0
    token: str | None = None


# Called with (index, result) as each run finishes
ResultCallback = Callable[[int, ExecutionResult], Awaitable[None]]


class ReferenceValidationError(Exception):
    """A reference solution produced the wrong output or crashed."""

    def __init__(self, message: str, details: dict):
        super().__init__(message)
        self.message = message
        self.details = details


# ─── Verdicts ──────────────────────────────────────────────────

def reconcile_results(results: list[ExecutionResult], expected_outputs: list[str]) -> tuple[bool, list[dict]]:
    """Compare each result with its expected output.

    Returns ``(all_passed, test_cases)`` where every test case dict carries the
    combined stdout, expected value, error streams, status and the formatted
    time/memory figures.
    """
    all_passed = True
    test_cases = []
    for i, result in enumerate(results):
        stdout = (result.stdout or "").strip()
        if result.stderr:
            stdout += f"\nError: {result.stderr}"
        stdout = stdout.strip()

        expected = (expected_outputs[i] if i < len(expected_outputs) else "") or ""
        expected = expected.strip()
        passed = stdout == expected
        if not passed:
            all_passed = False

        test_cases.append({
            "testCase": i + 1,
            "passed": passed,
            "stdout": stdout,
            "expected": expected,
            "stderr": result.stderr or None,
            "compile_output": result.compile_output or None,
            "status": result.status.description,
            "memory": f"{result.memory} KB" if result.memory else None,
            "time": f"{result.time} s" if result.time else None,
        })
    return all_passed, test_cases


def _json_list_or_none(test_cases: list[dict], field: str) -> str | None:
    if not any(tc.get(field) for tc in test_cases):
        return None
    return json.dumps([tc.get(field) for tc in test_cases])


def summarize_submission(
    *,
    source_code: str,
    language: str,
    stdin: list[str],
    test_cases: list[dict],
    all_passed: bool,
    problem_id: str | None = None,
) -> dict:
    """Flatten per-case results into the submission summary shape."""
    return {
        "problemId": problem_id,
        "sourceCode": source_code,
        "language": language,
        "stdin": "\n".join(stdin),
        "stdout": json.dumps([tc["stdout"] for tc in test_cases]),
        "stderr": _json_list_or_none(test_cases, "stderr"),
        "compileOutput": _json_list_or_none(test_cases, "compile_output"),
        "status": "Accepted" if all_passed else "Wrong Answer",
        "memory": _json_list_or_none(test_cases, "memory"),
        "time": _json_list_or_none(test_cases, "time"),
        "testCases": test_cases,
    }


def check_reference_results(
    language: str,
    inputs: list[str],
    expected_outputs: list[str],
    results: list[ExecutionResult],
) -> None:
    """Raise ``ReferenceValidationError`` on the first failing test case."""
    for i, result in enumerate(results):
        expected = (expected_outputs[i] or "").strip()
        actual = (result.stdout or "").strip()

        if actual != expected:
            raise ReferenceValidationError(
                f"Validation failed for {language} on test case {i + 1}",
                {
                    "input": inputs[i],
                    "expected": expected,
                    "actual": actual,
                    "error": result.stderr or "",
                },
            )

        # Output matched but the program still exited abnormally
        if result.status.id != ACCEPTED:
            raise ReferenceValidationError(
                f"Runtime error for {language} on test case {i + 1}",
                {
                    "input": inputs[i],
                    "error": result.stderr or result.status.description,
                },
            )
