# app/entrypoints/api/routers/submissions.py
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ....domain.errors import MalformedInput
from ....domain.types import RawSubmission
from ....schemas import SubmissionAck, SubmissionError
from ....service_layer.intake import IntakePipeline
from ..deps import get_pipeline

log = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=SubmissionError(error=message).model_dump())


def parse_event(raw_body: bytes) -> RawSubmission:
    try:
        text = raw_body.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise MalformedInput(f"body is not valid UTF-8: {e.reason}") from e
    try:
        body = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        raise MalformedInput(f"invalid JSON body: {e.msg}") from e
    return RawSubmission.from_event(body)


@router.post("/submission-created")
@router.post("/.netlify/functions/submission-created", include_in_schema=False)
async def submission_created(
    request: Request,
    pipeline: IntakePipeline = Depends(get_pipeline),
) -> JSONResponse:
    """
    Form platform webhook. Always 200 unless something actually broke,
    so the platform only retries genuine processing failures.
    """
    try:
        raw = parse_event(await request.body())
        result = await pipeline.run(raw)
    except MalformedInput as e:
        log.warning("submission.malformed error=%s", e)
        return _error(str(e))
    except Exception as e:
        log.exception("submission.crashed")
        return _error(str(e) or type(e).__name__)

    if not result.ok:
        log.error("submission.failed message=%s", result.message)
        return _error(result.message)

    return JSONResponse(status_code=200, content=SubmissionAck(message=result.message).model_dump())
