"""Unit tests for the chat correlation channel."""
import asyncio

import pytest

from conftest import make_channel, wait_for_sent
from smartkissan.chat import ChannelState, ChatContext
from smartkissan.errors import ChannelClosedError


def context() -> ChatContext:
    return ChatContext(current_season="Kharif")


class TestChannelLifecycle:
    """Tests for connecting and closing."""

    @pytest.mark.asyncio
    async def test_connect_opens_channel(self):
        channel, transports = make_channel()

        assert channel.state is ChannelState.CLOSED
        assert await channel.connect() is True
        assert channel.state is ChannelState.OPEN
        assert transports[0].connected

        await channel.close()
        assert channel.state is ChannelState.CLOSED
        assert transports[0].closed

    @pytest.mark.asyncio
    async def test_single_connect_attempt_in_flight(self):
        """Test that repeated connect requests share one attempt."""
        gate = asyncio.Event()
        channel, transports = make_channel(gate=gate)

        channel.start_connect()
        channel.start_connect()
        assert channel.state is ChannelState.CONNECTING

        gate.set()
        await channel.connect()

        assert len(transports) == 1
        assert channel.is_open
        await channel.close()

    @pytest.mark.asyncio
    async def test_failed_connect_returns_to_closed(self):
        channel, transports = make_channel(fail_connect=True)

        assert await channel.connect() is False
        assert channel.state is ChannelState.CLOSED

        # A later attempt creates a fresh transport
        await channel.connect()
        assert len(transports) == 2

    @pytest.mark.asyncio
    async def test_wait_until_open_times_out(self):
        gate = asyncio.Event()
        channel, _ = make_channel(gate=gate)
        channel.start_connect()

        assert await channel.wait_until_open(0.01) is False
        assert channel.state is ChannelState.CONNECTING

        gate.set()
        assert await channel.wait_until_open(1.0) is True
        await channel.close()

    @pytest.mark.asyncio
    async def test_remote_close_marks_channel_closed(self):
        channel, transports = make_channel()
        await channel.connect()

        await transports[0].close()
        for _ in range(10):
            await asyncio.sleep(0)

        assert channel.state is ChannelState.CLOSED


class TestChannelRequests:
    """Tests for correlation and the reply timeout."""

    @pytest.mark.asyncio
    async def test_request_when_closed_raises(self):
        channel, _ = make_channel()

        with pytest.raises(ChannelClosedError):
            await channel.request("hello", context())

    @pytest.mark.asyncio
    async def test_outbound_frame(self):
        channel, transports = make_channel(auto_reply=lambda frame: "ok")
        await channel.connect()

        await channel.request("Will it rain?", context())

        frame = transports[0].sent[0]
        assert set(frame) == {"id", "message", "context"}
        assert frame["message"] == "Will it rain?"
        assert frame["context"]["domain"] == "agriculture"
        assert frame["context"]["current_season"] == "Kharif"
        assert frame["context"]["include_local_knowledge"] is True
        await channel.close()

    @pytest.mark.asyncio
    async def test_reply_before_timeout(self):
        channel, transports = make_channel(reply_timeout=1.0)
        await channel.connect()

        task = asyncio.create_task(channel.request("hi", context()))
        frame = await wait_for_sent(transports[0])
        assert channel.pending_count == 1

        transports[0].push({"id": frame["id"], "response": "Namaste"})

        assert await task == "Namaste"
        assert channel.pending_count == 0
        await channel.close()

    @pytest.mark.asyncio
    async def test_message_field_accepted(self):
        channel, transports = make_channel()
        await channel.connect()

        task = asyncio.create_task(channel.request("hi", context()))
        frame = await wait_for_sent(transports[0])
        transports[0].push({"id": frame["id"], "message": "from message field"})

        assert await task == "from message field"
        await channel.close()

    @pytest.mark.asyncio
    async def test_timeout_resolves_none(self):
        channel, _ = make_channel(reply_timeout=0.02)
        await channel.connect()

        assert await channel.request("hi", context()) is None
        assert channel.pending_count == 0
        await channel.close()

    @pytest.mark.asyncio
    async def test_late_reply_is_dropped(self):
        """Test that a reply arriving after the timeout changes nothing."""
        channel, transports = make_channel(reply_timeout=0.02)
        await channel.connect()

        assert await channel.request("hi", context()) is None
        late_id = transports[0].sent[0]["id"]

        transports[0].push({"id": late_id, "response": "too late"})
        for _ in range(10):
            await asyncio.sleep(0)

        assert channel.pending_count == 0
        assert channel.is_open
        await channel.close()

    @pytest.mark.asyncio
    async def test_replies_matched_by_id_out_of_order(self):
        channel, transports = make_channel()
        await channel.connect()

        first = asyncio.create_task(channel.request("first", context()))
        await wait_for_sent(transports[0], 1)
        second = asyncio.create_task(channel.request("second", context()))
        await wait_for_sent(transports[0], 2)

        first_id, second_id = (f["id"] for f in transports[0].sent)
        assert first_id != second_id
        transports[0].push({"id": second_id, "response": "answer two"})
        transports[0].push({"id": first_id, "response": "answer one"})

        assert await first == "answer one"
        assert await second == "answer two"
        await channel.close()

    @pytest.mark.asyncio
    async def test_malformed_and_unknown_frames_ignored(self):
        channel, transports = make_channel()
        await channel.connect()

        task = asyncio.create_task(channel.request("hi", context()))
        frame = await wait_for_sent(transports[0])
        transports[0].inbox.put_nowait("not json")
        transports[0].push({"id": frame["id"]})
        transports[0].push({"id": "someone-else", "response": "?"})
        transports[0].push({"id": frame["id"], "response": "real"})

        assert await task == "real"
        await channel.close()

    @pytest.mark.asyncio
    async def test_send_failure_closes_channel(self):
        channel, transports = make_channel()
        await channel.connect()
        transports[0].closed = True

        with pytest.raises(ChannelClosedError):
            await channel.request("hi", context())

        assert channel.state is ChannelState.CLOSED
        assert channel.pending_count == 0
