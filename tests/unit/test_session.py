"""
tests/unit/test_session.py

Tests for GenerationSession (UI state container).

Verifies:
✔ Empty prompt → error state, zero network calls
✔ Rejected input shows the validation message, not "try again"
✔ Loading → success state transitions
✔ Terminal failure shows the generic UI message
✔ Newer action supersedes a stale one; stale action gets exactly one
  Failure(kind="superseded") and never overwrites newer state
✔ Listeners can unsubscribe
"""

import asyncio

import pytest

from invoker import (
    GenerationSession,
    MAX_PROMPT_LENGTH,
    NetworkError,
    ResilientInvoker,
    StubGatewayTransport,
)
from invoker.session import EMPTY_PROMPT_MESSAGE, GENERIC_FAILURE_MESSAGE


async def no_sleep(_delay):
    return None


def make_session(script):
    transport = StubGatewayTransport(script)
    invoker = ResilientInvoker(transport, sleep=no_sleep)
    session = GenerationSession(invoker)
    states = []
    session.subscribe(states.append)
    return session, transport, states


class TestSessionInput:
    @pytest.mark.asyncio
    async def test_empty_prompt_sets_error_without_calls(self):
        session, transport, _ = make_session(["http://x/img.png"])
        session.set_prompt("   ")

        result = await session.generate()

        assert result.kind == "validation"
        assert session.state.error == EMPTY_PROMPT_MESSAGE
        assert session.state.is_loading is False
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_overlong_prompt_shows_validation_message(self):
        session, transport, _ = make_session(["http://x/img.png"])
        session.set_prompt("x" * (MAX_PROMPT_LENGTH + 1))

        result = await session.generate()

        assert result.kind == "validation"
        assert transport.call_count == 0
        assert session.state.error == f"Prompt must be at most {MAX_PROMPT_LENGTH} characters"
        assert session.state.error != GENERIC_FAILURE_MESSAGE
        assert session.state.is_loading is False

    def test_select_model(self):
        session, _, _ = make_session(["http://x/img.png"])
        session.select_model("qwen")
        assert session.state.model == "qwen"

    def test_select_unknown_model_rejected(self):
        session, _, _ = make_session(["http://x/img.png"])
        with pytest.raises(ValueError):
            session.select_model("unknown")

    def test_unsubscribe(self):
        session, _, states = make_session(["http://x/img.png"])
        extra = []
        unsubscribe = session.subscribe(extra.append)
        session.set_prompt("one")
        unsubscribe()
        session.set_prompt("two")
        assert len(extra) == 1
        assert states[-1].prompt == "two"


class TestSessionTransitions:
    @pytest.mark.asyncio
    async def test_success_flow(self):
        session, _, states = make_session(["http://x/img.png"])
        session.set_prompt("a red fox")

        result = await session.generate()

        assert result.ok
        loading = [s for s in states if s.is_loading]
        assert loading and loading[0].image_url == "" and loading[0].error is None
        assert session.state.is_loading is False
        assert session.state.image_url == "http://x/img.png"
        assert session.state.error is None

    @pytest.mark.asyncio
    async def test_failure_flow(self):
        session, transport, _ = make_session([NetworkError("refused")])
        session.set_prompt("a red fox")

        result = await session.generate()

        assert not result.ok
        assert transport.call_count == 3
        assert session.state.error == GENERIC_FAILURE_MESSAGE
        assert session.state.image_url == ""
        assert session.state.is_loading is False


class TestSupersede:
    @pytest.mark.asyncio
    async def test_newer_action_supersedes_stale_one(self):
        session, transport, states = make_session([1.0, "http://x/new.png"])
        session.set_prompt("old prompt")

        stale = asyncio.ensure_future(session.generate())
        await asyncio.sleep(0.05)
        assert transport.call_count == 1

        session.set_prompt("new prompt")
        fresh_result = await session.generate()
        stale_result = await stale

        assert stale_result.kind == "superseded"
        assert fresh_result.ok
        assert fresh_result.url == "http://x/new.png"
        assert session.state.image_url == "http://x/new.png"
        assert session.state.action_id == 2
        assert transport.call_count == 2
        assert all(s.error != GENERIC_FAILURE_MESSAGE for s in states)

    @pytest.mark.asyncio
    async def test_each_action_resolves_exactly_once(self):
        session, _, _ = make_session(["http://x/img.png"])
        session.set_prompt("a red fox")

        results = [await session.generate() for _ in range(3)]

        assert all(r.ok for r in results)
        assert session.state.action_id == 3
