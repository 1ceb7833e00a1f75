"""Evaluate endpoint for bytecode submissions."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from stackeval.program import ProgramFormatError, program_from_json
from stackeval.runtime.executor import Executor, ExecutionConfig

router = APIRouter()

DEFAULT_MAX_STEPS = 100_000


class EvaluateOptions(BaseModel):
    """Per-request execution options."""
    max_steps: Optional[int] = Field(default=None, ge=1)


class EvaluateRequest(BaseModel):
    """Request body for program evaluation."""
    instructions: List[Dict[str, Any]]
    program_id: Optional[str] = None
    options: Optional[EvaluateOptions] = None


class EvaluationError(BaseModel):
    kind: str
    message: str
    index: Optional[int] = None


class EvaluateResponse(BaseModel):
    """Response body for program evaluation."""
    success: bool
    program_id: Optional[str] = None
    result: Optional[int] = None
    error: Optional[EvaluationError] = None
    steps: int = 0
    execution_time_ms: float
    program_digest: str


def build_config(options: Optional[EvaluateOptions]) -> ExecutionConfig:
    max_steps = DEFAULT_MAX_STEPS
    if options is not None and options.max_steps is not None:
        max_steps = options.max_steps
    return ExecutionConfig(max_steps=max_steps, include_bindings=False)


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_program(request: EvaluateRequest):
    """Evaluate a bytecode program and return its result or error."""
    try:
        program = program_from_json(request.instructions)
    except ProgramFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        executor = Executor(build_config(request.options))
        result = executor.execute(program.instructions)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return EvaluateResponse(
        success=result.success,
        program_id=request.program_id,
        result=result.value,
        error=EvaluationError(**result.error) if result.error else None,
        steps=result.steps,
        execution_time_ms=result.execution_time_ms,
        program_digest=result.program_digest,
    )
