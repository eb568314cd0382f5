"""Problem reference-solution validation route."""

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from routes.code_execution import get_http_client
from services.executor import UnsupportedLanguageError, validate_reference_solutions
from services.judge0 import Judge0Error
from services.results import ReferenceValidationError

router = APIRouter(prefix="/api", tags=["problems"])


class TestCaseBody(BaseModel):
    input: str = ""
    output: str = ""


class ProblemValidation(BaseModel):
    testCases: list[TestCaseBody]
    referenceSolutions: dict[str, str]


@router.post("/problems/validate")
async def validate_problem(body: ProblemValidation, client: httpx.AsyncClient = Depends(get_http_client)):
    if not body.testCases:
        raise HTTPException(400, "At least one test case is required")
    if not body.referenceSolutions:
        raise HTTPException(400, "At least one reference solution is required")

    try:
        await validate_reference_solutions(
            body.referenceSolutions,
            [tc.model_dump() for tc in body.testCases],
            client=client,
        )
    except UnsupportedLanguageError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except ReferenceValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message, "details": e.details})
    except Judge0Error as e:
        print(f"Error validating problem: {e}")
        raise HTTPException(502, f"Failed to validate problem: {e}")

    return {
        "success": True,
        "message": f"Reference solutions passed {len(body.testCases)} test cases",
    }
