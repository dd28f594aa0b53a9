import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import requests

from promptvideo.config import settings
from promptvideo.services.http_clients import get_pixverse_session

logger = logging.getLogger(__name__)

# Pixverse result codes; everything else is reported as UNKNOWN
_STATUS_READY = 1
_STATUS_GENERATING = 5


class PixverseError(RuntimeError):
    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class VideoTimeoutError(PixverseError):
    pass


class VideoStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"
    UNKNOWN = "failed/unknown"


@dataclass(frozen=True)
class VideoJob:
    id: int


@dataclass(frozen=True)
class VideoStatusResult:
    job_id: int
    status: VideoStatus
    url: Optional[str] = None
    raw_status: Optional[int] = None


def _generation_params(prompt: str) -> Dict[str, Any]:
    return {
        "aspect_ratio": "16:9",
        "duration": 5,
        "model": settings.pixverse_model,
        "motion_mode": "normal",
        "negative_prompt": "",
        "prompt": prompt,
        "quality": "540p",
        "seed": 0,
        "water_mark": False,
    }


def _auth_headers() -> Dict[str, str]:
    return {"API-KEY": settings.pixverse_api_key or ""}


def _decode_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _request(method: str, url: str, action: str, **kwargs) -> Dict[str, Any]:
    session = get_pixverse_session()
    try:
        response = session.request(method, url, timeout=settings.request_timeout_seconds, **kwargs)
    except requests.RequestException as exc:
        logger.exception("Pixverse request failed while trying to %s", action)
        raise PixverseError(f"Unable to {action}: {exc}") from exc

    if response.status_code >= 400:
        body = _decode_body(response)
        logger.error("Pixverse returned HTTP %s while trying to %s: %s", response.status_code, action, body)
        raise PixverseError(f"Unable to {action}: HTTP {response.status_code}", payload=body)

    body = _decode_body(response)
    if not isinstance(body, dict):
        raise PixverseError(f"Unable to {action}: unexpected response from Pixverse", payload=body)
    return body


def _check_error_code(body: Dict[str, Any], fallback_message: str) -> Dict[str, Any]:
    if body.get("ErrCode") != 0:
        message = body.get("ErrMsg") or fallback_message
        logger.error("Pixverse error %s: %s", body.get("ErrCode"), message)
        raise PixverseError(message)
    return body.get("Resp") or {}


def submit_video(prompt: str) -> VideoJob:
    """Start a text-to-video generation and return the job Pixverse assigned."""
    body = _request(
        "POST",
        f"{settings.pixverse_base_url}/video/text/generate",
        "start video generation",
        json=_generation_params(prompt),
        headers={**_auth_headers(), "Ai-trace-id": str(uuid.uuid4())},
    )
    resp = _check_error_code(body, "Failed to generate video")

    video_id = resp.get("video_id")
    if video_id is None:
        raise PixverseError("Pixverse did not return a video id.", payload=body)

    job = VideoJob(id=int(video_id))
    logger.info("Started Pixverse video job %s", job.id)
    return job


def fetch_video_status(job_id: int) -> VideoStatusResult:
    body = _request(
        "GET",
        f"{settings.pixverse_base_url}/video/result/{job_id}",
        "check video status",
        headers=_auth_headers(),
    )
    resp = _check_error_code(body, "Failed to check video status")

    raw_status = resp.get("status")
    if raw_status == _STATUS_READY:
        status = VideoStatus.READY
    elif raw_status == _STATUS_GENERATING:
        status = VideoStatus.PENDING
    else:
        status = VideoStatus.UNKNOWN
    return VideoStatusResult(job_id=job_id, status=status, url=resp.get("url") or None, raw_status=raw_status)


def wait_for_video(
    job_id: int,
    *,
    max_attempts: Optional[int] = None,
    interval: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Poll the status of ``job_id`` until its video URL is available.

    Any status other than ready (including codes Pixverse may use for a
    failed render) keeps the loop waiting; only an error code in the
    response or an exhausted attempt budget ends it early.
    """
    max_attempts = settings.poll_max_attempts if max_attempts is None else max_attempts
    interval = settings.poll_interval_seconds if interval is None else interval

    attempts = 0
    while attempts < max_attempts:
        result = fetch_video_status(job_id)
        attempts += 1

        if result.status is VideoStatus.READY and result.url:
            logger.info("Video for job %s ready after %d attempt(s)", job_id, attempts)
            return result.url

        if result.status is VideoStatus.UNKNOWN:
            logger.warning("Job %s reported unrecognised status %r, still waiting", job_id, result.raw_status)
        else:
            logger.debug("Job %s pending (attempt %d/%d)", job_id, attempts, max_attempts)

        if attempts < max_attempts:
            sleep(interval)

    logger.error("Video job %s did not finish after %d attempts", job_id, max_attempts)
    raise VideoTimeoutError("Video generation timed out")
