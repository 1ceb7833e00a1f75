"""Liveness and readiness endpoints."""

import logging
from typing import Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from stackeval import __version__
from stackeval.bytecode import ByteCode, MULTIPLY
from stackeval.program import load_schema
from stackeval.runtime import Interpreter

logger = logging.getLogger(__name__)

router = APIRouter()

# 6 * 7, evaluated on every readiness request
READINESS_PROGRAM = [ByteCode.load_val(6), ByteCode.load_val(7), MULTIPLY]
READINESS_RESULT = 42


def check_schema() -> bool:
    """The request schema ships with the package and parses."""
    try:
        schema = load_schema()
    except (OSError, ValueError) as e:
        logger.error("Program schema unavailable: %s", e)
        return False
    return "definitions" in schema


def check_runtime() -> bool:
    """A fresh interpreter evaluates a known program to its known value."""
    try:
        value = Interpreter(max_steps=len(READINESS_PROGRAM)).evaluate(READINESS_PROGRAM)
    except Exception as e:
        logger.error("Runtime self-check failed: %s", e)
        return False
    return value == READINESS_RESULT


@router.get("/health")
async def health_check():
    """Liveness: the process is up and serving."""
    return {
        "status": "healthy",
        "version": __version__,
        "service": "stackeval-api",
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness: schema and runtime both pass their self-checks, else 503."""
    checks: Dict[str, bool] = {
        "schema": check_schema(),
        "runtime": check_runtime(),
    }
    ready = all(checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"ready": ready, "checks": checks},
    )
