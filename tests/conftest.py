"""Shared fixtures: no real LLM, fresh session store, temp upload dir."""
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_search_provider, get_session_store
from app.main import app as fastapi_app
from app.services import llm_client
from app.services.search_provider import MockSearchProvider
from app.services.session_store import InMemorySessionStore

FIXED_TODAY = date(2025, 1, 1)


@pytest.fixture(autouse=True)
def no_llm(monkeypatch: pytest.MonkeyPatch) -> None:
    """Force the fallback paths regardless of the environment."""
    monkeypatch.setattr(llm_client, "get_client", lambda: None)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr("app.services.file_storage.UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def client(store: InMemorySessionStore, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("app.routes.syllabus.today", lambda: FIXED_TODAY)

    fastapi_app.dependency_overrides[get_session_store] = lambda: store
    fastapi_app.dependency_overrides[get_search_provider] = lambda: MockSearchProvider()
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def fake_llm(monkeypatch: pytest.MonkeyPatch):
    """
    Pretend a model is configured. install(reply=..., error=...) returns
    the list of prompts the fake model receives.
    """
    def install(reply=None, error=None) -> list:
        prompts = []

        async def run_chat_completion(client, prompt, **kwargs):
            prompts.append(prompt)
            if error is not None:
                raise error
            return reply

        monkeypatch.setattr(llm_client, "get_client", lambda: object())
        monkeypatch.setattr(llm_client, "run_chat_completion", run_chat_completion)
        return prompts

    return install
