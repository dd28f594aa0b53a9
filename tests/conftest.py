"""Shared fakes for the OpenAI client and the Pixverse HTTP session."""
from types import SimpleNamespace

import pytest

from promptvideo.config import settings
from promptvideo.services import pixverse_service, prompt_enhancer


class FakeResponse:
    def __init__(self, body=None, status_code=200, text=None):
        self._body = body
        self.status_code = status_code
        self.text = text if text is not None else str(body)

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Records every request and replays queued responses in order."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, fragment):
        return [call for call in self.calls if fragment in call.url]


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content=content, error=error))

    @property
    def calls(self):
        return self.chat.completions.calls

    def reply(self, content):
        self.chat.completions.content = content

    def fail(self, error):
        self.chat.completions.error = error


def generate_ok(video_id):
    return FakeResponse({"ErrCode": 0, "ErrMsg": "success", "Resp": {"video_id": video_id}})


def status_pending():
    return FakeResponse({"ErrCode": 0, "ErrMsg": "success", "Resp": {"status": 5, "url": ""}})


def status_ready(url):
    return FakeResponse({"ErrCode": 0, "ErrMsg": "success", "Resp": {"status": 1, "url": url}})


@pytest.fixture
def pixverse(monkeypatch):
    session = FakeSession()
    monkeypatch.setattr(pixverse_service, "get_pixverse_session", lambda: session)
    monkeypatch.setattr(settings, "poll_interval_seconds", 0)
    return session


@pytest.fixture
def openai_fake(monkeypatch):
    """Install a fake OpenAI client; tests set ``content`` or ``error`` on it."""
    fake = FakeOpenAI(content="")
    monkeypatch.setattr(prompt_enhancer, "get_openai_client", lambda: fake)
    return fake
