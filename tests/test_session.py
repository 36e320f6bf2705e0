"""Unit tests for the chat transcript."""
import asyncio

import pytest

from conftest import make_channel
from smartkissan.chat import (
    ChatReply,
    ChatSession,
    IntentCategory,
    MessageSender,
    MessageStatus,
    MessageType,
    ReplySource,
    greeting,
)
from smartkissan.chat.responder import NO_LOCATION_REPLIES
from smartkissan.dispatcher import RequestDispatcher
from smartkissan.storage import CHAT_MESSAGES_KEY
from smartkissan.storage.sqlite import SQLiteKeyValueStore


def answering(text: str = "Sure"):
    calls = []

    async def ask(message, language, location):
        calls.append((message, language, location))
        return ChatReply(text=f"{text}: {message}", category=IntentCategory.GENERAL, source=ReplySource.LIVE)

    ask.calls = calls
    return ask


async def silent(message, language, location):
    return None


class TestChatSession:
    """Tests for send, retry, clear and persistence."""

    def test_starts_with_greeting(self):
        session = ChatSession(answering(), language="kn")

        assert len(session.messages) == 1
        assert session.messages[0].sender is MessageSender.ASSISTANT
        assert session.messages[0].text == greeting("kn")

    @pytest.mark.asyncio
    async def test_send_appends_in_order(self):
        session = ChatSession(answering())

        await session.send("first")
        await session.send("second")

        texts = [m.text for m in session.messages[1:]]
        assert texts == ["first", "Sure: first", "second", "Sure: second"]
        assert session.messages[1].status is MessageStatus.SENT

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self):
        ask = answering()
        session = ChatSession(ask)

        assert await session.send("   ") is None
        assert len(session.messages) == 1
        assert ask.calls == []

    @pytest.mark.asyncio
    async def test_language_passed_through(self):
        ask = answering()
        session = ChatSession(ask, language="hi")

        await session.send("नमस्ते")

        assert ask.calls[0][1] == "hi"

    @pytest.mark.asyncio
    async def test_no_reply_marks_failed(self):
        session = ChatSession(silent)

        assert await session.send("hello") is None

        assert len(session.messages) == 2
        assert session.messages[-1].status is MessageStatus.FAILED

    @pytest.mark.asyncio
    async def test_retry_reuses_failed_message(self):
        session = ChatSession(silent)
        await session.send("hello")
        failed = session.messages[-1]

        session._ask = answering()
        answer = await session.retry(failed.id)

        assert answer.text == "Sure: hello"
        assert [m.id for m in session.messages[1:2]] == [failed.id]
        assert failed.status is MessageStatus.SENT
        assert session.messages[-1] is answer

    @pytest.mark.asyncio
    async def test_retry_rejects_other_messages(self):
        session = ChatSession(answering())
        await session.send("hello")

        with pytest.raises(ValueError):
            await session.retry(session.messages[1].id)
        with pytest.raises(ValueError):
            await session.retry("missing")

    @pytest.mark.asyncio
    async def test_clear(self, memory_store):
        session = ChatSession(answering(), store=memory_store)
        await session.send("hello")

        await session.clear()

        assert len(session.messages) == 1
        assert len(await memory_store.get(CHAT_MESSAGES_KEY)) == 1

    @pytest.mark.asyncio
    async def test_persisted_transcript_is_capped(self, memory_store):
        session = ChatSession(answering(), store=memory_store, limit=50)
        for i in range(30):
            await session.send(f"question {i}")

        stored = await memory_store.get(CHAT_MESSAGES_KEY)

        assert len(session.messages) == 61
        assert len(stored) == 50
        assert stored[-1]["text"] == "Sure: question 29"
        assert stored[0]["id"] == session.messages[11].id

    @pytest.mark.asyncio
    async def test_load_restores_transcript(self, memory_store):
        first = ChatSession(answering(), store=memory_store)
        await first.send("hello")

        second = ChatSession(answering(), store=memory_store)
        await second.load()

        assert [m.id for m in second.messages] == [m.id for m in first.messages]
        assert second.messages[1].status is MessageStatus.SENT

    @pytest.mark.asyncio
    async def test_load_ignores_corrupt_history(self, memory_store):
        await memory_store.set(CHAT_MESSAGES_KEY, [{"text": 5}])
        session = ChatSession(answering(), store=memory_store)

        await session.load()

        assert len(session.messages) == 1

    @pytest.mark.asyncio
    async def test_unwritable_store_does_not_break_send(self, tmp_path):
        store = SQLiteKeyValueStore(tmp_path / "chat.db")
        session = ChatSession(answering(), store=store)

        answer = await session.send("hello")

        assert answer.text == "Sure: hello"
        assert session.messages[1].status is MessageStatus.SENT

    @pytest.mark.asyncio
    async def test_unwritable_store_still_marks_failed(self, tmp_path):
        session = ChatSession(silent, store=SQLiteKeyValueStore(tmp_path / "chat.db"))

        assert await session.send("hello") is None

        assert session.messages[-1].status is MessageStatus.FAILED


class TestSessionThroughDispatcher:
    """Tests for a transcript backed by the dispatcher's chat channel."""

    @pytest.mark.asyncio
    async def test_weather_question_while_disconnected(self):
        channel, transports = make_channel(gate=asyncio.Event())
        async with RequestDispatcher(chat_channel=channel, connect_grace=0.05) as dispatcher:
            session = dispatcher.open_chat_session(language="hi")
            answer = await session.send("What is the weather today?")

        replies = [m for m in session.messages[1:] if m.sender is MessageSender.ASSISTANT]
        assert len(replies) == 1
        assert replies[0] is answer
        assert answer.type is None
        assert answer.text == NO_LOCATION_REPLIES["hi"]
        assert session.messages[1].status is MessageStatus.SENT
        assert transports[0].sent == []

    @pytest.mark.asyncio
    async def test_live_reply_appended_once(self):
        channel, transports = make_channel(auto_reply=lambda frame: "Clear skies")
        async with RequestDispatcher(chat_channel=channel) as dispatcher:
            session = dispatcher.open_chat_session()
            answer = await session.send("What is the weather today?")

        replies = [m for m in session.messages[1:] if m.sender is MessageSender.ASSISTANT]
        assert len(replies) == 1
        assert answer.text == "Clear skies"
        assert answer.type is MessageType.WEATHER
        assert len(transports[0].sent) == 1
