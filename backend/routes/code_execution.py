"""Code execution routes (Piston / Judge0)."""

from functools import partial
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from config import settings
from services.executor import InvalidTestCasesError, run_test_cases
from services.judge0 import Judge0Error
from services.languages import list_languages
from services.piston import run_code as piston_run
from services.realtime import publish_completed, publish_progress

router = APIRouter(prefix="/api", tags=["code_execution"])


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound client per request, shared by every sandbox call it makes."""
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        yield client


# ─── Request Bodies ────────────────────────────────────────────

class RunRequest(BaseModel):
    language: str
    code: str
    input: str | None = ""


class ExecuteCodeRequest(BaseModel):
    source_code: str
    language_id: int
    stdin: list[str] | None = None
    expected_outputs: list[str] | None = None
    problemId: str | None = None
    problemTitle: str | None = None
    clientId: str | None = None


# ─── Routes ────────────────────────────────────────────────────

@router.get("/languages")
async def get_languages():
    return {"languages": list_languages()}


@router.post("/run")
async def run_code(body: RunRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    try:
        return await piston_run(body.language, body.code, body.input, client=client)
    except httpx.HTTPError as e:
        print(f"[Piston] Run failed: {e}")
        raise HTTPException(502, f"Execution service error: {e}")
    except ValueError:
        print("[Piston] Run returned a non-JSON response")
        raise HTTPException(502, "Execution service returned an invalid response")


@router.post("/execute-code")
async def execute_code(body: ExecuteCodeRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    on_progress = partial(publish_progress, body.clientId) if body.clientId else None

    try:
        submission = await run_test_cases(
            body.source_code,
            body.language_id,
            body.stdin or [],
            body.expected_outputs or [],
            problem_id=body.problemId,
            problem_title=body.problemTitle,
            client=client,
            on_progress=on_progress,
        )
    except InvalidTestCasesError as e:
        raise HTTPException(400, str(e))
    except Judge0Error as e:
        print(f"Error executing code: {e}")
        raise HTTPException(502, f"Failed to execute code: {e}")

    if body.clientId:
        await publish_completed(body.clientId, {"status": submission["status"]})

    return {
        "success": True,
        "message": "Code executed successfully",
        "submission": submission,
    }
