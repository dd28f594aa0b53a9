import logging
import threading
from typing import Optional

import requests
from openai import OpenAI, OpenAIError

from promptvideo.config import settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()


class UpstreamClientError(RuntimeError):
    """Raised when an outbound API client cannot be created."""


def _create_openai_client() -> OpenAI:
    try:
        client = OpenAI(api_key=settings.openai_api_key, timeout=settings.request_timeout_seconds)
    except OpenAIError as exc:
        logger.error("Failed to create OpenAI client: %s", exc)
        raise UpstreamClientError("Unable to create OpenAI client. Check OPENAI_API_KEY.") from exc
    return client


def _create_pixverse_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Content-Type": "application/json"})
    return session


_openai_client: Optional[OpenAI] = None
_pixverse_session: Optional[requests.Session] = None


def get_openai_client() -> OpenAI:
    global _openai_client
    with _lock:
        if _openai_client is None:
            _openai_client = _create_openai_client()
        return _openai_client


def get_pixverse_session() -> requests.Session:
    global _pixverse_session
    with _lock:
        if _pixverse_session is None:
            _pixverse_session = _create_pixverse_session()
        return _pixverse_session


def reset_clients() -> None:
    global _openai_client, _pixverse_session
    with _lock:
        if _pixverse_session is not None:
            _pixverse_session.close()
        _openai_client = None
        _pixverse_session = None
