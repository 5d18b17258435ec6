"""Tests for resolving persistence effects."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from terminaltask.messages import (
    ClearStatusEffect,
    DeleteEffect,
    DeleteFailed,
    LoadEffect,
    Loaded,
    LoadFailed,
    QuitEffect,
    Saved,
    SaveEffect,
    SaveFailed,
)
from terminaltask.effects import EffectRunner, resolve
from terminaltask.service import FileTaskService
from terminaltask.store import DEFAULT_NAME, FileTaskStore

from fakes import FakeStore, failing_store, fake_service, task_with_id


class TestResolveLoad:
    def test_loaded(self) -> None:
        tasks = [task_with_id("a"), task_with_id("b")]
        service, _ = fake_service(tasks)

        msg = resolve(LoadEffect(), service)

        assert msg == Loaded(tasks=tuple(tasks))

    def test_load_failed_names_store(self) -> None:
        service = FileTaskService(failing_store(load=True))

        msg = resolve(LoadEffect(), service)

        assert isinstance(msg, LoadFailed)
        assert msg.store == "Fake Store"
        assert "load failed" in str(msg.error)


class TestResolveSave:
    def test_saved(self) -> None:
        service, store = fake_service([task_with_id("old")])
        tasks = (task_with_id("a"),)

        msg = resolve(SaveEffect(tasks=tasks, status_text='Created new task: "a"'), service)

        assert msg == Saved(status_text='Created new task: "a"')
        assert store.tasks == list(tasks)

    def test_save_failed(self) -> None:
        service = FileTaskService(failing_store(save=True))

        msg = resolve(SaveEffect(tasks=(), status_text="x"), service)

        assert isinstance(msg, SaveFailed)
        assert msg.store == "Fake Store"

    def test_os_error_becomes_failure(self) -> None:
        store = FakeStore()
        store.save_error = PermissionError("read-only")

        msg = resolve(SaveEffect(tasks=(), status_text="x"), FileTaskService(store))

        assert isinstance(msg, SaveFailed)


class TestResolveDelete:
    def test_deletes_by_id(self) -> None:
        a1, a2 = task_with_id("a"), task_with_id("a")
        service, store = fake_service([a1, a2])

        msg = resolve(DeleteEffect(tasks=(a1,), status_text='Deleted: "a"', task=a2, index=1), service)

        assert msg == Saved(status_text='Deleted: "a"')
        assert store.tasks == [a1]

    def test_delete_failed_carries_task(self) -> None:
        a = task_with_id("a")
        service = FileTaskService(failing_store([a], save=True))

        msg = resolve(DeleteEffect(tasks=(), status_text="x", task=a, index=0), service)

        assert isinstance(msg, DeleteFailed)
        assert msg.task == a
        assert msg.index == 0


class TestResolveOther:
    @pytest.mark.parametrize("effect", [QuitEffect(), ClearStatusEffect(token=1, delay=1.0)])
    def test_non_persistence_effect(self, effect) -> None:
        service, _ = fake_service()

        with pytest.raises(TypeError):
            resolve(effect, service)


class TestEffectRunner:
    """EffectRunner resolves effects off the event loop, in order."""

    def test_run_returns_message(self) -> None:
        service, _ = fake_service([task_with_id("a")])
        runner = EffectRunner(service)

        try:
            msg = asyncio.run(runner.run(LoadEffect()))
        finally:
            runner.shutdown()

        assert isinstance(msg, Loaded)
        assert len(msg.tasks) == 1

    def test_saves_apply_in_issue_order(self) -> None:
        service, store = fake_service()
        runner = EffectRunner(service)
        snapshots = [tuple(task_with_id(str(j)) for j in range(i)) for i in range(1, 6)]

        async def run_all():
            return await asyncio.gather(
                *(runner.run(SaveEffect(tasks=s, status_text=str(i))) for i, s in enumerate(snapshots))
            )

        try:
            messages = asyncio.run(run_all())
        finally:
            runner.shutdown()

        assert [m.status_text for m in messages] == ["0", "1", "2", "3", "4"]
        assert store.saved == [list(s) for s in snapshots]
        assert store.tasks == list(snapshots[-1])


class TestResolveFileStore:
    """Failures of the real file store come back as messages."""

    def test_undecodable_file_is_load_failed(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_bytes(b'[{"TitleStr": "\xff"}]')
        service = FileTaskService(FileTaskStore(path))

        msg = resolve(LoadEffect(), service)

        assert isinstance(msg, LoadFailed)
        assert msg.store == DEFAULT_NAME
