"""Tests for the GitHub webhook endpoint."""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest
from pytest_httpx import HTTPXMock

from conftest import DISCORD_WEBHOOK_URL
from hookrelay.integrations.discord import SandboxDiscordTransport

GITHUB_SECRET = "test-secret"


def sign(body: bytes, secret: str = GITHUB_SECRET) -> str:
    """Compute the X-Hub-Signature-256 header GitHub would send."""
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


@pytest.fixture
def signed_client(make_client, relay_config):
    """Production-mode client with a GitHub secret configured."""
    return make_client(relay_config.model_copy(update={"github_secret": GITHUB_SECRET}))


class TestRequestValidation:
    """Rejections that happen before anything is relayed."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    def test_non_post_is_rejected(self, client, method: str, httpx_mock: HTTPXMock) -> None:
        response = client.request(method, "/webhooks/github", headers={"X-GitHub-Event": "push"})

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert httpx_mock.get_requests() == []

    def test_missing_event_header(self, client, push_payload, httpx_mock: HTTPXMock) -> None:
        response = client.post("/webhooks/github", json=push_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "No event type specified"
        assert httpx_mock.get_requests() == []

    def test_invalid_signature(self, signed_client, push_payload, httpx_mock: HTTPXMock) -> None:
        body = json.dumps(push_payload).encode()
        response = signed_client.post(
            "/webhooks/github",
            content=body,
            headers={"X-GitHub-Event": "push", "X-Hub-Signature-256": sign(body, "wrong-secret")},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Invalid signature"
        assert httpx_mock.get_requests() == []

    def test_missing_signature_with_secret(self, signed_client, push_payload, httpx_mock: HTTPXMock) -> None:
        response = signed_client.post("/webhooks/github", json=push_payload, headers={"X-GitHub-Event": "push"})

        assert response.status_code == 403
        assert httpx_mock.get_requests() == []

    def test_signature_covers_exact_bytes(self, signed_client, push_payload, httpx_mock: HTTPXMock) -> None:
        body = json.dumps(push_payload).encode()
        signature = sign(body)
        reformatted = json.dumps(push_payload, indent=2).encode()

        response = signed_client.post(
            "/webhooks/github",
            content=reformatted,
            headers={"X-GitHub-Event": "push", "X-Hub-Signature-256": signature},
        )

        assert response.status_code == 403

    def test_invalid_json(self, client, httpx_mock: HTTPXMock) -> None:
        response = client.post("/webhooks/github", content=b"not json", headers={"X-GitHub-Event": "push"})

        assert response.status_code == 400
        assert httpx_mock.get_requests() == []


class TestRelay:
    """Events that reach Discord."""

    def test_valid_signature_is_relayed(self, signed_client, push_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", status_code=204)
        body = json.dumps(push_payload).encode()

        response = signed_client.post(
            "/webhooks/github",
            content=body,
            headers={"X-GitHub-Event": "push", "X-Hub-Signature-256": sign(body)},
        )

        assert response.status_code == 200
        assert response.text == "Webhook processed successfully"
        sent = json.loads(httpx_mock.get_request().content)
        assert sent["embeds"][0]["title"] == "[test-repo] Push to main"

    def test_unsigned_request_without_secret(self, client, issues_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", status_code=204)

        response = client.post("/webhooks/github", json=issues_payload, headers={"X-GitHub-Event": "issues"})

        assert response.status_code == 200
        sent = json.loads(httpx_mock.get_request().content)
        assert sent["embeds"][0]["title"] == "[test-repo] Issue opened"

    def test_unsupported_event_is_accepted(self, client, httpx_mock: HTTPXMock) -> None:
        response = client.post("/webhooks/github", json={"zen": "Keep it simple"}, headers={"X-GitHub-Event": "ping"})

        assert response.status_code == 202
        assert response.text == "Event type not processed"
        assert httpx_mock.get_requests() == []

    def test_discord_failure_is_internal_error(self, client, push_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", status_code=500)

        response = client.post("/webhooks/github", json=push_payload, headers={"X-GitHub-Event": "push"})

        assert response.status_code == 500
        assert "error" in response.json()

    def test_missing_discord_url_is_configuration_error(self, make_client, relay_config, push_payload) -> None:
        test_client = make_client(relay_config.model_copy(update={"discord_webhook_url": ""}))

        response = test_client.post("/webhooks/github", json=push_payload, headers={"X-GitHub-Event": "push"})

        assert response.status_code == 500
        assert response.json()["error"] == "Discord webhook URL not configured"
        assert "DISCORD_WEBHOOK_URL" in response.json()["message"]


class TestTestMode:
    """Behaviour with WEBHOOK_TEST_MODE enabled."""

    def test_signature_is_not_checked(self, make_client, test_mode_config, push_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", json={"id": "msg-1"})
        test_client = make_client(test_mode_config.model_copy(update={"github_secret": GITHUB_SECRET}))

        response = test_client.post(
            "/webhooks/github",
            json=push_payload,
            headers={"X-GitHub-Event": "push", "X-Hub-Signature-256": "sha256=bogus"},
        )

        assert response.status_code == 200

    def test_response_includes_discord_reply(self, test_mode_client, pull_request_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", json={"id": "msg-1"})

        response = test_mode_client.post(
            "/webhooks/github", json=pull_request_payload, headers={"X-GitHub-Event": "pull_request"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Webhook processed successfully", "discord_response": {"id": "msg-1"}}

    def test_discord_failure_is_mocked(self, make_client, test_mode_config, push_payload, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=DISCORD_WEBHOOK_URL, method="POST", status_code=404)
        transport = SandboxDiscordTransport()
        test_client = make_client(test_mode_config, transport)

        response = test_client.post("/webhooks/github", json=push_payload, headers={"X-GitHub-Event": "push"})

        assert response.status_code == 200
        discord_response = response.json()["discord_response"]
        assert discord_response["mocked"] is True
        assert discord_response["echo"] == transport.sent[0]
