"""
tests/integration/test_invoker_gateway_flow.py

Full path: ResilientInvoker → HttpGatewayTransport → gateway app (ASGI,
in-process) → mocked upstream.

Verifies:
✔ Scenario A: first-try success
✔ Scenario B: 503, 503, 200 → Success after 3 attempts, 2 sleeps
✔ Scenario C: 429 ×3 → Failure after exactly 3 upstream calls
✔ Scenario E: {data: []} ×3 → retried like any failure, kind upstream_shape
✔ Credential never reaches the invoker's terminal result
"""

import httpx
import pytest

from infra import GatewayConfig
from invoker import Failure, HttpGatewayTransport, ResilientInvoker, Success
from main import create_app

API_KEY = "sk-integration-secret"


class ScriptedUpstream:
    """
    Upstream stand-in replaying one (status, body kwargs) pair per call.

    The last pair repeats once the script is exhausted.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    def __call__(self, request):
        index = min(self.calls, len(self.responses) - 1)
        self.calls += 1
        status_code, body = self.responses[index]
        return httpx.Response(status_code, **body)


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_stack(upstream):
    config = GatewayConfig(api_key=API_KEY, upstream_url="https://upstream.example.com/gen")
    app = create_app(config, upstream_transport=httpx.MockTransport(upstream))
    transport = HttpGatewayTransport(
        base_url="http://gateway",
        transport=httpx.ASGITransport(app=app),
    )
    sleep = RecordingSleep()
    return ResilientInvoker(transport, sleep=sleep), sleep


def ok(url="http://x/img.png"):
    return (200, {"json": {"data": [{"url": url}]}})


class TestInvokerThroughGateway:
    @pytest.mark.asyncio
    async def test_scenario_a(self):
        upstream = ScriptedUpstream([ok()])
        invoker, sleep = make_stack(upstream)

        result = await invoker.generate("a red fox", "img3")

        assert result == Success(url="http://x/img.png", attempts=1)
        assert upstream.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_scenario_b(self):
        upstream = ScriptedUpstream([
            (503, {"text": "unavailable"}),
            (503, {"text": "unavailable"}),
            ok(),
        ])
        invoker, sleep = make_stack(upstream)

        result = await invoker.generate("a red fox", "img3")

        assert isinstance(result, Success)
        assert result.attempts == 3
        assert upstream.calls == 3
        assert len(sleep.delays) == 2
        assert 2.0 <= sleep.delays[0] <= 2.5
        assert 4.0 <= sleep.delays[1] <= 4.5

    @pytest.mark.asyncio
    async def test_scenario_c(self):
        upstream = ScriptedUpstream([(429, {"text": "Too Many Requests"})])
        invoker, sleep = make_stack(upstream)

        result = await invoker.generate("a red fox", "img3")

        assert isinstance(result, Failure)
        assert result.kind == "upstream_http"
        assert "429" in result.message
        assert "Too Many Requests" in result.message
        assert upstream.calls == 3

    @pytest.mark.asyncio
    async def test_scenario_d_blank_prompt_makes_no_calls(self):
        upstream = ScriptedUpstream([ok()])
        invoker, _ = make_stack(upstream)

        result = await invoker.generate("   ", "img3")

        assert result.kind == "validation"
        assert upstream.calls == 0

    @pytest.mark.asyncio
    async def test_scenario_e(self):
        upstream = ScriptedUpstream([(200, {"json": {"data": []}})])
        invoker, sleep = make_stack(upstream)

        result = await invoker.generate("a red fox", "img3")

        assert isinstance(result, Failure)
        assert result.kind == "upstream_shape"
        assert upstream.calls == 3
        assert len(sleep.delays) == 2

    @pytest.mark.asyncio
    async def test_credential_never_reaches_result(self):
        upstream = ScriptedUpstream([(401, {"text": f"bad key {API_KEY}"})])
        invoker, _ = make_stack(upstream)

        result = await invoker.generate("a red fox", "img3")

        assert isinstance(result, Failure)
        assert API_KEY not in result.message
        assert "[REDACTED]" in result.message
