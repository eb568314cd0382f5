import json

import pytest

from services.results import (
    ACCEPTED,
    RUNTIME_ERROR,
    ExecutionResult,
    ExecutionStatus,
    ReferenceValidationError,
    check_reference_results,
    reconcile_results,
    summarize_submission,
)


def _result(stdout="", stderr="", status=ACCEPTED, **kw):
    return ExecutionResult(stdout=stdout, stderr=stderr, status=ExecutionStatus.of(status), **kw)


def test_status_descriptions():
    assert ExecutionStatus.of(3).description == "Accepted"
    assert ExecutionStatus.of(11).description == "Runtime Error (NZEC)"
    assert ExecutionStatus.of(2).pending
    assert not ExecutionStatus.of(6).pending


def test_reconcile_trims_and_formats():
    results = [_result("3\n", time="0.012", memory=1024), _result("  [0,1] ")]

    all_passed, cases = reconcile_results(results, ["3", "[0,1]\n"])

    assert all_passed
    assert cases[0] == {
        "testCase": 1,
        "passed": True,
        "stdout": "3",
        "expected": "3",
        "stderr": None,
        "compile_output": None,
        "status": "Accepted",
        "memory": "1024 KB",
        "time": "0.012 s",
    }
    assert cases[1]["memory"] is None


def test_stderr_is_folded_into_stdout():
    results = [_result("", stderr="Traceback: boom", status=RUNTIME_ERROR)]

    all_passed, cases = reconcile_results(results, ["3"])

    assert not all_passed
    assert cases[0]["stdout"] == "Error: Traceback: boom"
    assert cases[0]["stderr"] == "Traceback: boom"
    assert cases[0]["status"] == "Runtime Error (NZEC)"


def test_summary_status_and_json_fields():
    all_passed, cases = reconcile_results([_result("1"), _result("2")], ["1", "3"])

    summary = summarize_submission(
        source_code="code",
        language="Python",
        stdin=["a", "b"],
        test_cases=cases,
        all_passed=all_passed,
        problem_id="p1",
    )

    assert summary["status"] == "Wrong Answer"
    assert summary["stdin"] == "a\nb"
    assert json.loads(summary["stdout"]) == ["1", "2"]
    assert summary["stderr"] is None
    assert summary["compileOutput"] is None
    assert json.loads(summary["time"]) == ["0 s", "0 s"]
    assert summary["problemId"] == "p1"
    assert summary["testCases"] is cases


def test_reference_mismatch_reports_case():
    results = [_result("1"), _result("5")]

    with pytest.raises(ReferenceValidationError) as exc:
        check_reference_results("PYTHON", ["a", "b"], ["1", "4"], results)

    assert exc.value.message == "Validation failed for PYTHON on test case 2"
    assert exc.value.details == {"input": "b", "expected": "4", "actual": "5", "error": ""}


def test_reference_runtime_error_after_matching_output():
    results = [_result("1", stderr="warning: leaked", status=RUNTIME_ERROR)]

    with pytest.raises(ReferenceValidationError, match="Runtime error for JAVA on test case 1"):
        check_reference_results("JAVA", ["a"], ["1"], results)


def test_reference_all_good():
    check_reference_results("C++", ["a"], ["ok"], [_result("ok\n")])
