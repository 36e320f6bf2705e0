"""Unit tests for the storage module."""
import pytest

from smartkissan.errors import StorageError
from smartkissan.storage import (
    PREFERENCES_KEY,
    AssistantSettings,
    KeyValueStore,
    Language,
    PreferencesRepository,
    UserPreferences,
    create_key_value_store,
)
from smartkissan.storage.in_memory import InMemoryKeyValueStore
from smartkissan.storage.sqlite import SQLiteKeyValueStore


class TestKeyValueStore:
    """Tests for the store interface and factory."""

    def test_store_is_abstract(self):
        """Test that KeyValueStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            KeyValueStore()  # type: ignore

    def test_factory(self, tmp_path):
        assert isinstance(create_key_value_store("memory"), InMemoryKeyValueStore)
        store = create_key_value_store("sqlite", path=tmp_path / "kv.db")
        assert isinstance(store, SQLiteKeyValueStore)
        assert store.backend_type == "sqlite"

    def test_factory_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unsupported store backend"):
            create_key_value_store("redis")


class TestInMemoryStore:
    """Tests for the in-memory backend."""

    @pytest.mark.asyncio
    async def test_round_trip(self, memory_store):
        await memory_store.set("b", {"x": [1, 2]})
        await memory_store.set("a", "value")

        assert await memory_store.get("b") == {"x": [1, 2]}
        assert await memory_store.keys() == ["a", "b"]

        await memory_store.delete("a")
        assert await memory_store.get("a") is None
        await memory_store.delete("a")

    @pytest.mark.asyncio
    async def test_corrupt_value(self, memory_store):
        memory_store._data["bad"] = "{not json"

        with pytest.raises(StorageError):
            await memory_store.get("bad")


class TestSQLiteStore:
    """Tests for the SQLite backend."""

    @pytest.mark.asyncio
    async def test_values_persist_across_connections(self, tmp_path):
        path = tmp_path / "state" / "kv.db"

        async with SQLiteKeyValueStore(path) as store:
            await store.set("chatMessages", [{"text": "hi"}])
            await store.set("chatMessages", [{"text": "hello"}])

        async with SQLiteKeyValueStore(path) as store:
            assert await store.get("chatMessages") == [{"text": "hello"}]
            assert await store.keys() == ["chatMessages"]
            await store.delete("chatMessages")
            assert await store.get("chatMessages") is None

    @pytest.mark.asyncio
    async def test_requires_connection(self, tmp_path):
        store = SQLiteKeyValueStore(tmp_path / "kv.db")

        with pytest.raises(StorageError):
            await store.get("anything")


class TestPreferencesRepository:
    """Tests for typed preference access."""

    @pytest.mark.asyncio
    async def test_defaults_on_miss(self, memory_store):
        preferences = await PreferencesRepository(memory_store).load_preferences()

        assert preferences.language is Language.ENGLISH
        assert preferences.dark_mode is False
        assert preferences.default_location == (31.1471, 75.3412)

    @pytest.mark.asyncio
    async def test_defaults_on_invalid_value(self, memory_store):
        await memory_store.set(PREFERENCES_KEY, {"language": "fr"})

        preferences = await PreferencesRepository(memory_store).load_preferences()

        assert preferences.model_dump() == UserPreferences().model_dump()

    @pytest.mark.asyncio
    async def test_saved_with_camel_case_keys(self, memory_store):
        repository = PreferencesRepository(memory_store)
        await repository.save_preferences(UserPreferences(dark_mode=True))

        raw = await memory_store.get(PREFERENCES_KEY)

        assert raw["darkMode"] is True
        assert raw["defaultLocation"] == [31.1471, 75.3412]

    @pytest.mark.asyncio
    async def test_partial_update(self, memory_store):
        repository = PreferencesRepository(memory_store)
        await repository.update_preferences(language="hi")

        updated = await repository.update_preferences(dark_mode=True, notificationsEnabled=False)

        assert updated.language is Language.HINDI
        assert updated.dark_mode is True
        assert updated.notifications_enabled is False
        assert (await repository.load_preferences()).model_dump() == updated.model_dump()

    @pytest.mark.asyncio
    async def test_assistant_settings(self, memory_store):
        repository = PreferencesRepository(memory_store)
        assert (await repository.load_assistant_settings()).voice_mode is False

        await repository.save_assistant_settings(AssistantSettings(voice_mode=True))

        assert (await repository.load_assistant_settings()).voice_mode is True
