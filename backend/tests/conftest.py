"""Shared fixtures: deterministic settings and in-process fake sandboxes."""

import asyncio
import itertools
import json

import httpx
import pytest

from config import settings


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    monkeypatch.setattr(settings, "PISTON_API_URL", "https://piston.test/api/v2/piston")
    monkeypatch.setattr(settings, "JUDGE0_API_URL", "http://judge0.test")
    monkeypatch.setattr(settings, "JUDGE0_API_KEY", "")
    monkeypatch.setattr(settings, "JUDGE0_API_HOST", "")
    monkeypatch.setattr(settings, "PISTON_REQUEST_DELAY", 0.0)
    monkeypatch.setattr(settings, "JUDGE0_POLL_INTERVAL", 0.0)
    monkeypatch.setattr(settings, "JUDGE0_BATCH_SIZE", 20)
    monkeypatch.setattr(settings, "JUDGE0_MAX_POLLS", 5)
    monkeypatch.setattr(settings, "EXECUTION_BACKEND", "piston")
    monkeypatch.setattr(settings, "VALIDATION_BACKEND", "judge0")
    return settings


@pytest.fixture
def run_mocked():
    """Run ``fn(client)`` against an AsyncClient backed by ``handler``."""

    def _run(handler, fn):
        async def main():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                return await fn(client)

        return asyncio.run(main())

    return _run


def piston_json(stdout="", code=0, stderr="", signal=None, compile_stage=None):
    body = {
        "language": "python",
        "version": "3.10.0",
        "run": {
            "stdout": stdout,
            "stderr": stderr,
            "code": code,
            "signal": signal,
            "output": stdout + stderr,
            "time": "0.02",
            "memory": 2048,
        },
    }
    if compile_stage is not None:
        body["compile"] = compile_stage
    return body


class FakePiston:
    """Answers ``/execute`` by applying ``solve`` to the posted stdin."""

    def __init__(self, solve):
        self.solve = solve
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/execute")
        payload = json.loads(request.content)
        self.requests.append(payload)
        return httpx.Response(200, json=piston_json(stdout=self.solve(payload.get("stdin", ""))))


class FakeJudge0:
    """Minimal Judge0 batch API: every submission needs ``pending_polls`` polls."""

    def __init__(self, solve, pending_polls=0):
        self.solve = solve
        self.pending_polls = pending_polls
        self.submissions: dict[str, dict] = {}
        self.polls: dict[str, int] = {}
        self.batch_sizes: list[int] = []
        self._ids = itertools.count(1)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST" and request.url.path == "/submissions/batch":
            submissions = json.loads(request.content)["submissions"]
            self.batch_sizes.append(len(submissions))
            tokens = []
            for sub in submissions:
                token = f"tok-{next(self._ids)}"
                self.submissions[token] = sub
                self.polls[token] = 0
                tokens.append({"token": token})
            return httpx.Response(201, json=tokens)

        if request.method == "GET" and request.url.path == "/submissions/batch":
            tokens = request.url.params["tokens"].split(",")
            return httpx.Response(200, json={"submissions": [self._status(t) for t in tokens]})

        return httpx.Response(404, json={"error": "not found"})

    def _status(self, token: str) -> dict:
        self.polls[token] += 1
        if self.polls[token] <= self.pending_polls:
            return {"token": token, "status": {"id": 2, "description": "Processing"}, "stdout": None}
        sub = self.submissions[token]
        return {
            "token": token,
            "status": {"id": 3, "description": "Accepted"},
            "stdout": self.solve(sub["stdin"]),
            "stderr": None,
            "compile_output": None,
            "time": "0.005",
            "memory": 1024,
        }


@pytest.fixture
def fake_piston():
    return FakePiston


@pytest.fixture
def fake_judge0():
    return FakeJudge0
