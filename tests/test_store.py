"""Tests for the JSON file task store."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from terminaltask.providers import TaskStoreError
from terminaltask.store import (
    DEFAULT_NAME,
    ZERO_TIME,
    FileTaskStore,
    format_due_date,
    parse_due_date,
    task_from_record,
    task_to_record,
)
from terminaltask.task import Task


def _record(title: str = "t", **overrides) -> dict:
    record = {
        "TitleStr": title,
        "DescStr": f"{title} description",
        "DueDate": ZERO_TIME,
        "Done": False,
    }
    record.update(overrides)
    return record


class TestDueDates:
    """Tests for RFC3339 parsing and formatting."""

    def test_zero_time_is_unset(self) -> None:
        assert parse_due_date(ZERO_TIME) is None
        assert format_due_date(None) == ZERO_TIME

    def test_empty_is_unset(self) -> None:
        assert parse_due_date("") is None
        assert parse_due_date(None) is None

    def test_parse_utc_suffix(self) -> None:
        dt = parse_due_date("2025-03-01T09:00:00Z")

        assert dt == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_parse_keeps_offset(self) -> None:
        dt = parse_due_date("2025-03-01T09:00:00+01:00")

        assert dt is not None
        assert dt.utcoffset() == timedelta(hours=1)

    def test_parse_truncates_nanoseconds(self) -> None:
        dt = parse_due_date("2025-03-01T09:00:00.123456789+01:00")

        assert dt is not None
        assert dt.microsecond == 123456

    @pytest.mark.parametrize(
        "raw,micro",
        [
            ("2025-03-01T09:00:00.5+00:00", 500000),
            ("2025-03-01T09:00:00.12345+01:00", 123450),
            ("2025-03-01T09:00:00.1Z", 100000),
        ],
    )
    def test_parse_pads_trimmed_fractions(self, raw: str, micro: int) -> None:
        dt = parse_due_date(raw)

        assert dt is not None
        assert dt.microsecond == micro

    def test_parse_invalid(self) -> None:
        with pytest.raises(TaskStoreError):
            parse_due_date("next tuesday")

    def test_format_round_trips(self) -> None:
        dt = datetime(2025, 3, 1, 9, 0, tzinfo=timezone(timedelta(hours=-5)))

        assert parse_due_date(format_due_date(dt)) == dt


class TestRecords:
    """Tests for Task <-> JSON object conversion."""

    def test_record_field_names(self) -> None:
        task = Task(title="Write report", description="numbers", done=True)

        record = task_to_record(task)

        assert record == {
            "ID": str(task.id),
            "TitleStr": "Write report",
            "DescStr": "numbers",
            "DueDate": ZERO_TIME,
            "Done": True,
        }

    def test_record_without_id_gets_fresh_id(self) -> None:
        a = task_from_record(_record("a"))
        b = task_from_record(_record("a"))

        assert isinstance(a.id, uuid.UUID)
        assert a.id != b.id

    def test_invalid_id_rejected(self) -> None:
        with pytest.raises(TaskStoreError, match="invalid task id"):
            task_from_record(_record(ID="not-a-uuid"))


class TestFileTaskStoreLoad:
    """Tests for FileTaskStore.load."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "missing.json")

        assert store.load() == []

    def test_blank_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text("  \n")

        assert FileTaskStore(path).load() == []

    def test_empty_array(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text("[]")

        assert FileTaskStore(path).load() == []

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text("{not json")

        with pytest.raises(TaskStoreError, match="decode"):
            FileTaskStore(path).load()

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_bytes(b"\xff\xfe")

        with pytest.raises(TaskStoreError, match="read"):
            FileTaskStore(path).load()

    def test_schema_violation(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"TitleStr": "x", "DescStr": "y", "DueDate": ZERO_TIME, "Done": "yes"}]))

        with pytest.raises(TaskStoreError, match="Validation error at '0 -> Done'"):
            FileTaskStore(path).load()

    def test_not_an_array(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"TitleStr": "x"}))

        with pytest.raises(TaskStoreError, match="Validation error at 'root'"):
            FileTaskStore(path).load()

    def test_missing_field(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"TitleStr": "x"}]))

        with pytest.raises(TaskStoreError):
            FileTaskStore(path).load()

    def test_legacy_records_get_distinct_ids(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([_record("a"), _record("a")]))

        tasks = FileTaskStore(path).load()

        assert len(tasks) == 2
        assert tasks[0].id != tasks[1].id
        assert [t.title for t in tasks] == ["a", "a"]

    def test_duplicate_ids_reassigned(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        shared = str(uuid.uuid4())
        path.write_text(json.dumps([_record("a", ID=shared), _record("b", ID=shared)]))

        tasks = FileTaskStore(path).load()

        assert str(tasks[0].id) == shared
        assert tasks[1].id != tasks[0].id
        assert tasks[1].title == "b"

    def test_zero_due_date_loads_as_none(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([_record("a")]))

        (task,) = FileTaskStore(path).load()

        assert task.due_date is None


class TestFileTaskStoreSave:
    """Tests for FileTaskStore.save."""

    def test_round_trip(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "tasks.json")
        tasks = [
            Task(title="a", description="first"),
            Task(
                title="b",
                description="second",
                due_date=datetime(2030, 5, 1, 12, 0, tzinfo=timezone.utc),
                done=True,
            ),
        ]

        store.save(tasks)

        assert store.load() == tasks

    def test_preserves_order(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "tasks.json")
        tasks = [Task(title=str(i)) for i in range(10)]

        store.save(tasks)

        assert [t.title for t in store.load()] == [str(i) for i in range(10)]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "tasks.json"
        store = FileTaskStore(path)

        store.save([Task(title="a")])

        assert path.exists()

    def test_no_temp_file_left(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "tasks.json")

        store.save([Task(title="a")])

        assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]

    def test_overwrites_previous_contents(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "tasks.json")
        store.save([Task(title="a"), Task(title="b")])

        store.save([])

        assert store.load() == []

    def test_writes_field_names(self, tmp_path: Path) -> None:
        path = tmp_path / "tasks.json"
        task = Task(title="a", description="d")

        FileTaskStore(path).save([task])

        data = json.loads(path.read_text())
        assert data == [task_to_record(task)]

    def test_write_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = FileTaskStore(blocker / "tasks.json")

        with pytest.raises(TaskStoreError, match="write"):
            store.save([Task(title="a")])


class TestFileTaskStoreName:
    """Tests for store naming."""

    def test_default_name(self, tmp_path: Path) -> None:
        assert FileTaskStore(tmp_path / "t.json").name() == DEFAULT_NAME

    def test_custom_name(self, tmp_path: Path) -> None:
        store = FileTaskStore(tmp_path / "t.json", name="Work")

        assert store.name() == "Work"
