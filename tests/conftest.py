"""
Shared pytest fixtures for hookrelay tests.

This module provides fixtures for:
- Relay configurations (production-like and test mode)
- FastAPI test clients built from those configurations
- Sample GitHub and Trello webhook payloads
"""

from __future__ import annotations

import copy
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from hookrelay.integrations.discord import DiscordTransport, LiveDiscordTransport, SandboxDiscordTransport
from hookrelay.settings import RelayConfig

DISCORD_WEBHOOK_URL = "https://discord.com/api/webhooks/123456789/mocktoken"
TRELLO_API_URL = "https://api.trello.com/1"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def relay_config() -> RelayConfig:
    """Production-mode configuration without a GitHub secret."""
    return RelayConfig(
        discord_webhook_url=DISCORD_WEBHOOK_URL,
        trello_api_key="test-api-key",
        trello_api_url=TRELLO_API_URL,
        trello_auth_url="https://trello.com",
        test_mode=False,
    )


@pytest.fixture
def test_mode_config() -> RelayConfig:
    """Test-mode configuration pointing Discord at the mocked URL."""
    return RelayConfig(
        discord_webhook_url=DISCORD_WEBHOOK_URL,
        trello_api_key="test-api-key",
        trello_api_url="http://testserver/sandbox/trello",
        trello_auth_url="http://testserver/sandbox/trello",
        test_mode=True,
    )


# =============================================================================
# Client Fixtures
# =============================================================================


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Factory building a TestClient for a given configuration."""

    def _make(config: RelayConfig, transport: DiscordTransport | None = None) -> TestClient:
        if transport is None:
            transport = SandboxDiscordTransport() if config.test_mode else LiveDiscordTransport()
        return TestClient(create_app(config, transport))

    return _make


@pytest.fixture
def client(make_client, relay_config: RelayConfig) -> TestClient:
    """Client for the production-mode app."""
    return make_client(relay_config)


@pytest.fixture
def test_mode_client(make_client, test_mode_config: RelayConfig) -> TestClient:
    """Client for the test-mode app."""
    return make_client(test_mode_config)


# =============================================================================
# Payload Fixtures
# =============================================================================

SENDER = {
    "login": "testuser",
    "html_url": "https://github.com/testuser",
    "avatar_url": "https://avatars.githubusercontent.com/u/12345",
}

REPOSITORY = {
    "name": "test-repo",
    "full_name": "user/test-repo",
    "html_url": "https://github.com/user/test-repo",
}


def make_commit(index: int) -> dict[str, Any]:
    """Create a commit entry for push payloads."""
    return {
        "id": f"{index:07d}abcdef1234567890abcdef12345678",
        "message": f"Commit number {index}\n\nLonger body text",
        "url": f"https://github.com/user/test-repo/commit/{index:07d}",
        "author": {"name": "Test User", "email": "test@example.com"},
    }


@pytest.fixture
def push_payload() -> dict[str, Any]:
    return {
        "ref": "refs/heads/main",
        "repository": copy.deepcopy(REPOSITORY),
        "commits": [make_commit(1)],
        "sender": copy.deepcopy(SENDER),
        "compare": "https://github.com/user/test-repo/compare/abc...def",
    }


@pytest.fixture
def pull_request_payload() -> dict[str, Any]:
    return {
        "action": "opened",
        "repository": copy.deepcopy(REPOSITORY),
        "pull_request": {
            "number": 123,
            "html_url": "https://github.com/user/test-repo/pull/123",
            "title": "Test Pull Request",
            "body": "This is a test pull request",
            "state": "open",
            "merged": False,
        },
        "sender": copy.deepcopy(SENDER),
    }


@pytest.fixture
def issues_payload() -> dict[str, Any]:
    return {
        "action": "opened",
        "repository": copy.deepcopy(REPOSITORY),
        "issue": {
            "number": 42,
            "html_url": "https://github.com/user/test-repo/issues/42",
            "title": "Something is broken",
            "body": "Steps to reproduce",
        },
        "sender": copy.deepcopy(SENDER),
    }


@pytest.fixture
def issue_comment_payload(issues_payload: dict[str, Any]) -> dict[str, Any]:
    payload = copy.deepcopy(issues_payload)
    payload["action"] = "created"
    payload["comment"] = {
        "html_url": "https://github.com/user/test-repo/issues/42#issuecomment-1",
        "body": "I can reproduce this",
        "user": {"login": "commenter"},
    }
    return payload


def make_trello_payload(action_type: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create a Trello webhook payload for an action type."""
    action_data = {"card": {"name": "Test Card", "id": "card123"}}
    action_data.update(data or {})
    return {
        "action": {
            "type": action_type,
            "data": action_data,
            "memberCreator": {"fullName": "Test User"},
        },
        "model": {"url": "https://trello.com/b/abc123/test-board"},
    }


@pytest.fixture
def trello_payload() -> Callable[..., dict[str, Any]]:
    return make_trello_payload
