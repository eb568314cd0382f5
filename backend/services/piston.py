"""Piston API client.

Piston has no batch endpoint, so a batch is a sequence of single runs with a
short pause between them to stay under the public instance's rate limit.
"""

import asyncio

import httpx

from config import settings
from services.languages import get_file_extension, get_piston_config
from services.results import (
    ACCEPTED,
    COMPILATION_ERROR,
    INTERNAL_ERROR,
    RUNTIME_ERROR,
    TIME_LIMIT_EXCEEDED,
    ExecutionResult,
    ExecutionStatus,
    ResultCallback,
)

# Language name → Piston (language, version) for free-form runs
LANGUAGE_MAP = {
    "javascript": ("javascript", "18.15.0"),
    "python": ("python", "3.10.0"),
    "java": ("java", "15.0.2"),
    "cpp": ("c++", "10.2.0"),
    "c": ("c", "10.2.0"),
    "typescript": ("typescript", "5.0.3"),
    "go": ("go", "1.16.2"),
    "rust": ("rust", "1.68.2"),
}


def _normalise(data: dict) -> ExecutionResult:
    """Map a Piston ``/execute`` response onto a Judge0-style result."""
    run = data.get("run") or {}
    compile_stage = data.get("compile") or {}

    if compile_stage and compile_stage.get("code") not in (0, None):
        status = ExecutionStatus.of(COMPILATION_ERROR)
    elif run.get("code") == 0:
        status = ExecutionStatus.of(ACCEPTED)
    elif run.get("signal") == "SIGKILL":
        status = ExecutionStatus.of(TIME_LIMIT_EXCEEDED)
    else:
        status = ExecutionStatus.of(RUNTIME_ERROR)

    return ExecutionResult(
        stdout=run.get("stdout") or "",
        stderr=run.get("stderr") or compile_stage.get("stderr") or "",
        compile_output=compile_stage.get("output") or None,
        status=status,
        time=str(run.get("time") or "0"),
        memory=int(run.get("memory") or 0),
    )


async def _post_execute(client: httpx.AsyncClient, payload: dict) -> dict:
    resp = await client.post(f"{settings.PISTON_API_URL}/execute", json=payload)
    resp.raise_for_status()
    return resp.json()


async def execute_with_piston(
    source_code: str,
    language_id: int,
    stdin: str = "",
    *,
    client: httpx.AsyncClient | None = None,
) -> ExecutionResult:
    """Run one program against one stdin.

    Request failures and malformed responses are reported as an Internal
    Error result instead of being raised, so one bad run never aborts a batch.
    """
    language, version = get_piston_config(language_id)
    payload = {
        "language": language,
        "version": version,
        "files": [{"name": f"main.{get_file_extension(language)}", "content": source_code}],
        "stdin": stdin or "",
        "args": [],
        "compile_timeout": settings.PISTON_COMPILE_TIMEOUT,
        "run_timeout": settings.PISTON_RUN_TIMEOUT,
        "compile_memory_limit": -1,
        "run_memory_limit": -1,
    }

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as own_client:
                data = await _post_execute(own_client, payload)
        else:
            data = await _post_execute(client, payload)
    except httpx.HTTPStatusError as exc:
        message = _error_message(exc.response) or str(exc)
        print(f"[Piston] API error ({exc.response.status_code}): {message}")
        return _internal_error(message)
    except httpx.HTTPError as exc:
        print(f"[Piston] Network error: {exc}")
        return _internal_error(str(exc) or "Execution failed")
    except ValueError:
        print("[Piston] Response was not JSON")
        return _internal_error("Invalid response from execution service")

    if not isinstance(data, dict):
        return _internal_error("Invalid response from execution service")

    return _normalise(data)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    return data.get("message", "") if isinstance(data, dict) else resp.text


def _internal_error(message: str) -> ExecutionResult:
    return ExecutionResult(stderr=message, status=ExecutionStatus.of(INTERNAL_ERROR))


async def execute_batch_with_piston(
    source_code: str,
    language_id: int,
    stdin_list: list[str],
    *,
    client: httpx.AsyncClient | None = None,
    delay: float | None = None,
    on_result: ResultCallback | None = None,
) -> list[ExecutionResult]:
    """Run every stdin sequentially, in order.

    ``on_result`` is awaited after each run, before the next one starts.
    """
    delay = settings.PISTON_REQUEST_DELAY if delay is None else delay
    results: list[ExecutionResult] = []
    for i, stdin in enumerate(stdin_list):
        if i and delay > 0:
            await asyncio.sleep(delay)
        result = await execute_with_piston(source_code, language_id, stdin, client=client)
        results.append(result)
        if on_result is not None:
            await on_result(i, result)
    return results


async def run_code(
    language: str,
    code: str,
    stdin: str | None = "",
    *,
    client: httpx.AsyncClient | None = None,
) -> dict:
    """Free-form run keyed by language name (playground / scratchpad)."""
    lang_lower = language.lower()
    piston_lang, version = LANGUAGE_MAP.get(lang_lower, (lang_lower, "*"))

    payload = {
        "language": piston_lang,
        "version": version,
        "files": [{"content": code}],
    }
    if stdin:
        payload["stdin"] = stdin

    if client is None:
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as own_client:
            data = await _post_execute(own_client, payload)
    else:
        data = await _post_execute(client, payload)

    if not isinstance(data, dict):
        raise ValueError("Piston returned an unexpected response")

    run_info = data.get("run", {})
    return {
        "output": run_info.get("output", ""),
        "error": run_info.get("stderr", ""),
        "exitCode": run_info.get("code", 0),
    }
