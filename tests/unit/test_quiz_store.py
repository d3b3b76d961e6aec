# =============================================================================
# TESTES - Session Store Module
# =============================================================================
# Testes unitários para persistência de snapshots e backends KV
# =============================================================================

import json

import pytest


class TestSessionStoreSave:
    """Testes para salvar snapshot."""

    @pytest.mark.asyncio
    async def test_save_writes_json_text(self, memory_kv, session_store):
        """Snapshot é gravado como texto JSON na chave versionada."""
        await session_store.save({"current_index": 1, "answers": {"q1": 0}})

        raw = await memory_kv.get("quiz.state.v1")

        assert isinstance(raw, str)
        assert json.loads(raw) == {"current_index": 1, "answers": {"q1": 0}}

    @pytest.mark.asyncio
    async def test_custom_key(self, memory_kv):
        from quiz_runner.storage.session_store import SessionStore

        store = SessionStore(memory_kv, key="quiz.state.v2")
        await store.save({"current_index": 0})

        assert await memory_kv.get("quiz.state.v2") is not None
        assert await memory_kv.get("quiz.state.v1") is None

    @pytest.mark.asyncio
    async def test_save_backend_failure(self, failing_kv):
        """Falha do backend vira PersistenceError."""
        from quiz_runner.exceptions import PersistenceError
        from quiz_runner.storage.session_store import SessionStore

        store = SessionStore(failing_kv)

        with pytest.raises(PersistenceError) as exc_info:
            await store.save({"current_index": 0})

        assert exc_info.value.details["key"] == "quiz.state.v1"

    @pytest.mark.asyncio
    async def test_save_not_serializable(self, session_store):
        from quiz_runner.exceptions import PersistenceError

        with pytest.raises(PersistenceError):
            await session_store.save({"answers": object()})


class TestSessionStoreLoad:
    """Testes para carregar snapshot."""

    @pytest.mark.asyncio
    async def test_load_not_found(self, session_store):
        """Retorna None quando nada foi salvo."""
        assert await session_store.load() is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, session_store):
        snapshot = {"current_index": 2, "answers": {"q1": 1}, "remaining_sec": 5, "is_finished": False}

        await session_store.save(snapshot)

        assert await session_store.load() == snapshot

    @pytest.mark.asyncio
    async def test_load_corrupted(self, memory_kv, session_store):
        """Texto que não é JSON vira PersistenceError."""
        from quiz_runner.exceptions import PersistenceError

        await memory_kv.set("quiz.state.v1", "{não é json")

        with pytest.raises(PersistenceError):
            await session_store.load()

    @pytest.mark.asyncio
    async def test_load_non_object(self, memory_kv, session_store, capture_logs):
        """JSON válido mas não-objeto é tratado como ausente."""
        await memory_kv.set("quiz.state.v1", "[1, 2, 3]")

        assert await session_store.load() is None
        assert "não é um objeto JSON" in capture_logs.text

    @pytest.mark.asyncio
    async def test_load_backend_failure(self, failing_kv):
        from quiz_runner.exceptions import PersistenceError
        from quiz_runner.storage.session_store import SessionStore

        with pytest.raises(PersistenceError):
            await SessionStore(failing_kv).load()


class TestSessionStoreClear:
    """Testes para remover snapshot."""

    @pytest.mark.asyncio
    async def test_clear(self, session_store):
        await session_store.save({"current_index": 0})

        await session_store.clear()

        assert await session_store.load() is None

    @pytest.mark.asyncio
    async def test_clear_when_empty(self, session_store):
        """clear sem snapshot não falha."""
        await session_store.clear()

        assert await session_store.load() is None

    @pytest.mark.asyncio
    async def test_clear_backend_failure(self, failing_kv):
        from quiz_runner.exceptions import PersistenceError
        from quiz_runner.storage.session_store import SessionStore

        with pytest.raises(PersistenceError):
            await SessionStore(failing_kv).clear()


class TestSessionStoreUnexpectedErrors:
    """Qualquer exceção do backend vira PersistenceError."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["save", "load", "clear"])
    async def test_generic_backend_error_is_wrapped(self, broken_kv, operation):
        from quiz_runner.exceptions import PersistenceError
        from quiz_runner.storage.session_store import SessionStore

        store = SessionStore(broken_kv)
        args = ({"current_index": 0},) if operation == "save" else ()

        with pytest.raises(PersistenceError) as exc_info:
            await getattr(store, operation)(*args)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.details["error"] == "backend down"


class TestJsonFileKV:
    """Testes para o backend em disco."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, tmp_path):
        from quiz_runner.storage.kv import JsonFileKV

        kv = JsonFileKV(tmp_path / "state")
        await kv.set("quiz.state.v1", '{"a": 1}')

        assert await kv.get("quiz.state.v1") == '{"a": 1}'
        assert (tmp_path / "state" / "quiz.state.v1.json").exists()

    @pytest.mark.asyncio
    async def test_get_missing(self, tmp_path):
        from quiz_runner.storage.kv import JsonFileKV

        assert await JsonFileKV(tmp_path).get("quiz.state.v1") is None

    @pytest.mark.asyncio
    async def test_overwrite_leaves_no_temp_files(self, tmp_path):
        from quiz_runner.storage.kv import JsonFileKV

        kv = JsonFileKV(tmp_path)
        await kv.set("k", "1")
        await kv.set("k", "2")

        assert await kv.get("k") == "2"
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path):
        from quiz_runner.storage.kv import JsonFileKV

        kv = JsonFileKV(tmp_path)
        await kv.set("k", "1")
        await kv.delete("k")
        await kv.delete("k")

        assert await kv.get("k") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    async def test_invalid_keys(self, tmp_path, key):
        """Chaves com path traversal são rejeitadas."""
        from quiz_runner.storage.kv import JsonFileKV

        with pytest.raises(ValueError):
            await JsonFileKV(tmp_path).set(key, "x")

    @pytest.mark.asyncio
    async def test_store_over_file_backend(self, tmp_path):
        """SessionStore + JsonFileKV sobrevive a um novo processo (nova instância)."""
        from quiz_runner.storage.kv import JsonFileKV
        from quiz_runner.storage.session_store import SessionStore

        await SessionStore(JsonFileKV(tmp_path)).save({"current_index": 1})

        assert await SessionStore(JsonFileKV(tmp_path)).load() == {"current_index": 1}

    @pytest.mark.asyncio
    async def test_file_io_runs_off_event_loop(self, tmp_path):
        """get/set/delete delegam o I/O de disco para asyncio.to_thread."""
        import asyncio
        from unittest.mock import patch

        from quiz_runner.storage.kv import JsonFileKV

        kv = JsonFileKV(tmp_path)

        with patch(
            "quiz_runner.storage.kv.asyncio.to_thread", wraps=asyncio.to_thread
        ) as to_thread:
            await kv.set("k", "1")
            assert await kv.get("k") == "1"
            await kv.delete("k")

        assert to_thread.call_count == 3
        assert not (tmp_path / "k.json").exists()
