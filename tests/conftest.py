import os

import pytest

# Keep tests independent of the operator's environment and any local .env.
for _name in (
    "RELAY_HOST",
    "RELAY_PORT",
    "UPSTREAM_UPLOAD_URL",
    "MAX_UPLOAD_BYTES",
    "UPSTREAM_TIMEOUT_SECONDS",
    "UPSTREAM_AUTHORIZATION",
):
    os.environ.pop(_name, None)
os.environ["LOG_JSON"] = "false"

from upload_relay.adapter.client.http import UpstreamResponse  # noqa: E402


class FakeUpstream:
    """Stands in for post_bytes and records every outbound call."""

    def __init__(self, response: UpstreamResponse | None = None, error: Exception | None = None):
        self.response = response or UpstreamResponse(status_code=200, content=b"ok")
        self.error = error
        self.calls: list[dict] = []

    async def __call__(self, url, content, headers, timeout=None, transport=None):
        self.calls.append({"url": url, "content": content, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_upstream(monkeypatch) -> FakeUpstream:
    fake = FakeUpstream()
    monkeypatch.setattr("upload_relay.service.proxy.post_bytes", fake)
    return fake
