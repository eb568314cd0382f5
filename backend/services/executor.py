"""Test-case execution and reference-solution validation.

Glue between the driver-code injector, the two sandbox clients and the
verdict logic.  Routes call into this module; nothing here knows about HTTP
request bodies.
"""

from typing import Awaitable, Callable

import httpx

from config import settings
from services.driver_code import get_driver_code
from services.judge0 import execute_batch_with_judge0
from services.languages import get_judge0_language_id, get_language_name
from services.piston import execute_batch_with_piston
from services.results import (
    ExecutionResult,
    ResultCallback,
    check_reference_results,
    reconcile_results,
    summarize_submission,
)

ProgressCallback = Callable[[dict], Awaitable[None]]


class InvalidTestCasesError(ValueError):
    pass


class UnsupportedLanguageError(ValueError):
    def __init__(self, language: str):
        super().__init__(f"Unsupported language: {language}")
        self.language = language


async def execute_batch(
    source_code: str,
    language_id: int,
    stdin_list: list[str],
    *,
    backend: str | None = None,
    client: httpx.AsyncClient | None = None,
    on_result: ResultCallback | None = None,
) -> list[ExecutionResult]:
    """Run ``source_code`` once per stdin on the configured sandbox."""
    backend = backend or settings.EXECUTION_BACKEND
    if backend == "judge0":
        return await execute_batch_with_judge0(
            source_code, language_id, stdin_list, client=client, on_result=on_result,
        )
    return await execute_batch_with_piston(
        source_code, language_id, stdin_list, client=client, on_result=on_result,
    )


async def run_test_cases(
    source_code: str,
    language_id: int,
    stdin_list: list[str],
    expected_outputs: list[str],
    *,
    problem_id: str | None = None,
    problem_title: str | None = None,
    backend: str | None = None,
    client: httpx.AsyncClient | None = None,
    on_progress: ProgressCallback | None = None,
) -> dict:
    """Execute a user submission against its test cases and build the report."""
    if (
        not isinstance(stdin_list, list)
        or not stdin_list
        or not isinstance(expected_outputs, list)
        or len(expected_outputs) != len(stdin_list)
    ):
        raise InvalidTestCasesError("Invalid or missing test cases")

    language_name = get_language_name(language_id)
    print(f"[Execute] {language_name} (id {language_id}), {len(stdin_list)} test cases")

    # Problem code is written as a bare function / Solution class and needs a driver
    code_to_execute = source_code
    if problem_id or problem_title:
        code_to_execute = get_driver_code(problem_title or "", language_name.lower(), source_code)

    async def report(index: int, result: ExecutionResult) -> None:
        _, (tc,) = reconcile_results([result], [expected_outputs[index]])
        await on_progress({
            "testCase": index + 1,
            "total": len(stdin_list),
            "passed": tc["passed"],
            "status": tc["status"],
        })

    results = await execute_batch(
        code_to_execute, language_id, stdin_list,
        backend=backend, client=client,
        on_result=report if on_progress is not None else None,
    )
    all_passed, test_cases = reconcile_results(results, expected_outputs)

    print(f"[Execute] Results: {'all passed' if all_passed else 'some failed'}")
    return summarize_submission(
        source_code=source_code,
        language=language_name,
        stdin=stdin_list,
        test_cases=test_cases,
        all_passed=all_passed,
        problem_id=problem_id,
    )


async def validate_reference_solutions(
    reference_solutions: dict[str, str],
    test_cases: list[dict],
    *,
    backend: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> None:
    """Check every reference solution against every test case.

    Raises ``UnsupportedLanguageError`` for an unknown language and
    ``ReferenceValidationError`` on the first mismatch or crash.
    """
    backend = backend or settings.VALIDATION_BACKEND
    inputs = [tc.get("input", "") for tc in test_cases]
    outputs = [tc.get("output", "") for tc in test_cases]

    for language, solution_code in reference_solutions.items():
        language_id = get_judge0_language_id(language)
        if not language_id:
            raise UnsupportedLanguageError(language)

        results = await execute_batch(solution_code, language_id, inputs, backend=backend, client=client)
        check_reference_results(language, inputs, outputs, results)
        print(f"[Validate] {language}: {len(results)} test cases passed")
