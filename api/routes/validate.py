"""Validate endpoint for static program checks."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List

from stackeval.program import ProgramFormatError, program_from_json
from stackeval.validator import validate_program

router = APIRouter()


class ValidateRequest(BaseModel):
    """Request body for program validation."""
    instructions: List[Dict[str, Any]]


class ValidateResponse(BaseModel):
    """Response body for program validation."""
    valid: bool
    instruction_count: int = 0
    loop_count: int = 0
    errors: List[str] = []
    warnings: List[str] = []


@router.post("/validate", response_model=ValidateResponse)
async def validate_program_endpoint(request: ValidateRequest):
    """Validate a program's structure without executing it."""
    try:
        program = program_from_json(request.instructions)
    except ProgramFormatError as e:
        # A document that fails the schema is reported, not rejected
        return ValidateResponse(
            valid=False,
            instruction_count=len(request.instructions),
            errors=[f"Schema validation failed: {e}"],
        )

    try:
        report = validate_program(program.instructions)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ValidateResponse(**report.to_dict())
