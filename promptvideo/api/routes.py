import logging
import re
from typing import Dict
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promptvideo.models.schemas import ErrorResponse, GenerationRequest, HealthResponse, VideoRequest
from promptvideo.services import workflow
from promptvideo.services.pixverse_service import PixverseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ENHANCED_PROMPT_HEADER = "x-enhanced-prompt"
ENHANCED_PROMPT_ENCODING_HEADER = "x-enhanced-prompt-encoding"

_WHITESPACE = re.compile(r"\s+")


def enhanced_prompt_headers(enhanced_prompt: str) -> Dict[str, str]:
    # header values must be a single line of printable latin-1
    value = _WHITESPACE.sub(" ", enhanced_prompt).strip()
    try:
        value.encode("latin-1")
        printable = value.isprintable()
    except UnicodeEncodeError:
        printable = False
    if not printable:
        return {
            ENHANCED_PROMPT_HEADER: quote(value, safe=" "),
            ENHANCED_PROMPT_ENCODING_HEADER: "url",
        }
    return {ENHANCED_PROMPT_HEADER: value}


@router.post(
    "/video",
    response_model=list[str],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate_video(payload: VideoRequest):
    prompt = (payload.prompt or "").strip()
    if not prompt:
        return JSONResponse(status_code=400, content={"error": "Prompt is required"})

    request = GenerationRequest(prompt=prompt)
    try:
        outcome = workflow.generate_video(request.prompt)
    except PixverseError as exc:
        logger.error("API Error: %s", exc.payload or exc)
        return JSONResponse(status_code=500, content={"error": exc.payload or str(exc)})
    except Exception as exc:
        logger.exception("Video generation failed")
        return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})

    return JSONResponse(content=[outcome.video_url], headers=enhanced_prompt_headers(outcome.enhanced_prompt))


@router.get("/health", response_model=HealthResponse)
def health_check():
    return {"status": "ok"}
