import argparse
import json
import logging
import sys
from enum import Enum
from typing import Callable, List, Optional
from urllib.parse import unquote

import requests

logger = logging.getLogger(__name__)


class FormStatus(str, Enum):
    IDLE = "idle"
    ENHANCING = "enhancing"
    GENERATING = "generating"
    DONE = "done"
    ERROR = "error"


Listener = Callable[["SubmissionForm"], None]


class SubmissionForm:
    """Single-field prompt form backed by the ``/api/video`` endpoint.

    Exactly one ``FormStatus`` is current at any time; listeners are called
    after every transition.
    """

    def __init__(self, base_url: str = "http://localhost:8000", session: Optional[requests.Session] = None,
                 timeout: float = 120.0):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.status = FormStatus.IDLE
        self.prompt = ""
        self.video_url: Optional[str] = None
        self.enhanced_prompt = ""
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _transition(self, status: FormStatus, **fields) -> None:
        for name, value in fields.items():
            setattr(self, name, value)
        self.status = status
        for listener in self._listeners:
            listener(self)

    def submit(self, prompt: str) -> FormStatus:
        self.prompt = prompt
        prompt = (prompt or "").strip()
        if not prompt:
            self._transition(FormStatus.ERROR, error="Prompt is required", video_url=None, enhanced_prompt="")
            return self.status

        self._transition(FormStatus.ENHANCING, error=None, video_url=None, enhanced_prompt="")
        # enhancement happens server-side inside the same request
        self._transition(FormStatus.GENERATING)

        try:
            response = self.session.post(f"{self.base_url}/api/video", json={"prompt": prompt}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", self.base_url, exc)
            self._transition(FormStatus.ERROR, error="Something went wrong.")
            return self.status

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            self._transition(FormStatus.ERROR, error=_error_message(body))
            return self.status

        if not (isinstance(body, list) and body):
            logger.error("Unexpected response body from %s: %r", self.base_url, body)
            self._transition(FormStatus.ERROR, error="Something went wrong.")
            return self.status

        self._transition(
            FormStatus.DONE,
            video_url=body[0],
            enhanced_prompt=_read_enhanced_prompt(response),
            prompt="",
        )
        return self.status


def _read_enhanced_prompt(response: requests.Response) -> str:
    value = response.headers.get("x-enhanced-prompt", "")
    if response.headers.get("x-enhanced-prompt-encoding") == "url":
        return unquote(value)
    return value


def _error_message(body) -> str:
    if isinstance(body, dict) and body.get("error"):
        error = body["error"]
        return error if isinstance(error, str) else json.dumps(error)
    return "Something went wrong."


def _print_status(form: SubmissionForm) -> None:
    if form.status is FormStatus.ENHANCING:
        print("Enhancing your prompt...")
    elif form.status is FormStatus.GENERATING:
        print("Generating your video with Pixverse AI...")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a video from a text prompt")
    parser.add_argument("--url", default="http://localhost:8000", help="API URL (default: http://localhost:8000)")
    parser.add_argument("--prompt", help="Video prompt")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    args = parser.parse_args(argv)

    prompt = args.prompt
    if prompt is None:
        print("Enter your video prompt:")
        prompt = input("> ")

    form = SubmissionForm(args.url, timeout=args.timeout)
    form.subscribe(_print_status)
    status = form.submit(prompt)

    if status is FormStatus.DONE:
        if form.enhanced_prompt:
            print(f"Enhanced Prompt: {form.enhanced_prompt}")
        print(f"Video URL: {form.video_url}")
        return 0

    print(f"Error: {form.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
