import asyncio
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from duediligence import app as app_module
from duediligence.config import Settings
from duediligence.diligence import DueDiligenceAnalyst

from .helpers import message_response


class FakeResponses:
    """Stands in for ``AsyncOpenAI().responses``; records every create() call."""

    def __init__(self, handler: Optional[Callable[[str], Any]] = None, delays: Optional[Dict[str, float]] = None):
        self.calls: List[Dict[str, Any]] = []
        self.handler = handler or (lambda query: message_response(f"answer: {query}"))
        self.delays = delays or {}

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        query = kwargs["input"]
        for prefix, delay in self.delays.items():
            if query.startswith(prefix):
                await asyncio.sleep(delay)
        result = self.handler(query)
        if isinstance(result, BaseException):
            raise result
        return result


class FakeOpenAI:
    def __init__(self, **kwargs):
        self.responses = FakeResponses(**kwargs)


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def make_analyst(settings):
    def factory(**kwargs) -> DueDiligenceAnalyst:
        return DueDiligenceAnalyst(settings, client=FakeOpenAI(**kwargs))

    return factory


@pytest.fixture
def install_analyst(monkeypatch, make_analyst):
    """Swap the analyst behind the endpoint for one backed by a fake client."""

    def install(**kwargs) -> DueDiligenceAnalyst:
        analyst = make_analyst(**kwargs)
        monkeypatch.setattr(app_module, "analyst", analyst)
        return analyst

    return install


@pytest.fixture
def client():
    return TestClient(app_module.app)
