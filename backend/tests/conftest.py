"""
Shared pytest fixtures for backend tests.
The Claude client is replaced by a fake that replays canned completions.
"""
import json
import pytest
import sys
import os
from datetime import datetime
from types import SimpleNamespace

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from extraction import TaskExtractor


class FakeMessages:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)])


class FakeClient:
    """Stands in for anthropic.AsyncAnthropic; each reply is a dict, raw text or an exception."""

    def __init__(self, *replies):
        self.messages = FakeMessages(replies)


@pytest.fixture
def reference_now():
    """2025-01-01 00:00:00 in the fixed timezone."""
    return datetime(2025, 1, 1, 0, 0, 0, tzinfo=config.TIMEZONE)


@pytest.fixture
def make_extractor():
    def _make(*replies):
        client = FakeClient(*replies)
        return TaskExtractor(client=client), client
    return _make


@pytest.fixture
def app_client(monkeypatch):
    """
    Create a test client for the FastAPI app.
    Tests install their own extractor via the returned helper.
    """
    from fastapi.testclient import TestClient
    import main

    def use_replies(*replies):
        client = FakeClient(*replies)
        monkeypatch.setattr(main, "extractor", TaskExtractor(client=client))
        return client

    with TestClient(main.app) as client:
        client.use_replies = use_replies
        yield client
