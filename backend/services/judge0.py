"""Judge0 API client: batch submission and status polling."""

import asyncio

import httpx

from config import settings
from services.results import ExecutionResult, ExecutionStatus, ResultCallback


class Judge0Error(RuntimeError):
    """Judge0 could not be reached or answered with an error."""


class Judge0TimeoutError(Judge0Error):
    """Submissions were still queued or processing after the last poll."""


def chunk_array(items: list, size: int = 20) -> list[list]:
    """Split ``items`` into consecutive chunks of at most ``size``."""
    return [items[i:i + size] for i in range(0, len(items), size)]


def _to_result(data: dict) -> ExecutionResult:
    status = data.get("status") or {}
    return ExecutionResult(
        stdout=data.get("stdout") or "",
        stderr=data.get("stderr") or "",
        compile_output=data.get("compile_output") or None,
        status=ExecutionStatus.of(int(status.get("id", 13)), status.get("description")),
        time=str(data.get("time") or "0"),
        memory=int(data.get("memory") or 0),
        token=data.get("token"),
    )


async def _request(client: httpx.AsyncClient | None, method: str, path: str, **kwargs) -> dict | list:
    url = f"{settings.JUDGE0_API_URL}{path}"
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as own_client:
                resp = await own_client.request(method, url, headers=settings.judge0_headers(), **kwargs)
        else:
            resp = await client.request(method, url, headers=settings.judge0_headers(), **kwargs)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise Judge0Error(f"Judge0 returned {exc.response.status_code}: {exc.response.text}") from exc
    except httpx.HTTPError as exc:
        raise Judge0Error(f"Judge0 service unreachable: {exc}") from exc
    try:
        return resp.json()
    except ValueError as exc:
        raise Judge0Error(f"Judge0 returned invalid JSON: {resp.text[:200]}") from exc


async def submit_batch(submissions: list[dict], *, client: httpx.AsyncClient | None = None) -> list[str]:
    """Submit up to one batch of submissions and return their tokens."""
    data = await _request(
        client, "POST", "/submissions/batch",
        params={"base64_encoded": "false"},
        json={"submissions": submissions},
    )
    tokens = [item.get("token") for item in data or []]
    if len(tokens) != len(submissions) or not all(tokens):
        raise Judge0Error(f"Judge0 rejected batch submission: {data}")
    print(f"[Judge0] Submitted batch of {len(tokens)}")
    return tokens


async def get_judge0_result(
    token: str,
    *,
    client: httpx.AsyncClient | None = None,
    poll_interval: float | None = None,
    max_polls: int | None = None,
) -> ExecutionResult:
    """Poll a single submission until it leaves In Queue / Processing."""
    poll_interval = settings.JUDGE0_POLL_INTERVAL if poll_interval is None else poll_interval
    max_polls = max_polls or settings.JUDGE0_MAX_POLLS

    for attempt in range(max_polls):
        data = await _request(client, "GET", f"/submissions/{token}", params={"base64_encoded": "false"})
        result = _to_result(data)
        if not result.status.pending:
            return result
        if attempt + 1 < max_polls:
            await asyncio.sleep(poll_interval)

    raise Judge0TimeoutError(f"Submission {token} still pending after {max_polls} polls")


async def poll_batch_results(
    tokens: list[str],
    *,
    client: httpx.AsyncClient | None = None,
    poll_interval: float | None = None,
    max_polls: int | None = None,
) -> list[ExecutionResult]:
    """Poll a batch of tokens until every submission has finished."""
    poll_interval = settings.JUDGE0_POLL_INTERVAL if poll_interval is None else poll_interval
    max_polls = max_polls or settings.JUDGE0_MAX_POLLS

    for attempt in range(max_polls):
        data = await _request(
            client, "GET", "/submissions/batch",
            params={"tokens": ",".join(tokens), "base64_encoded": "false"},
        )
        results = [_to_result(item) for item in data.get("submissions", [])]
        if len(results) == len(tokens) and all(not r.status.pending for r in results):
            return results
        if attempt + 1 < max_polls:
            await asyncio.sleep(poll_interval)

    raise Judge0TimeoutError(f"{len(tokens)} submissions still pending after {max_polls} polls")


async def execute_batch_with_judge0(
    source_code: str,
    language_id: int,
    stdin_list: list[str],
    *,
    client: httpx.AsyncClient | None = None,
    batch_size: int | None = None,
    poll_interval: float | None = None,
    on_result: ResultCallback | None = None,
) -> list[ExecutionResult]:
    """Run ``source_code`` once per stdin and return results in input order.

    ``on_result`` is awaited for every result of a chunk once that chunk is done.
    """
    batch_size = batch_size or settings.JUDGE0_BATCH_SIZE
    submissions = [
        {"source_code": source_code, "language_id": language_id, "stdin": stdin}
        for stdin in stdin_list
    ]

    results: list[ExecutionResult] = []
    for chunk in chunk_array(submissions, batch_size):
        tokens = await submit_batch(chunk, client=client)
        chunk_results = await poll_batch_results(tokens, client=client, poll_interval=poll_interval)
        if on_result is not None:
            for offset, result in enumerate(chunk_results):
                await on_result(len(results) + offset, result)
        results.extend(chunk_results)
    return results
