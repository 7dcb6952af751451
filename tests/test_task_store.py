# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasknote.tasks.task_models import Task
from tasknote.tasks.task_store import TaskStore, TaskStoreError

TS = "2025-01-02T03:04:05Z"


def _task(desc: str, **kw) -> Task:
    return Task(description=desc, created_at=TS, **kw)


def test_missing_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(path)
    store.load()

    assert len(store) == 0
    assert not path.exists()


def test_mutations_are_persisted_immediately(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.txt"
    store = TaskStore(path)

    store.append(_task("one", priority=1, tags=["a"]))
    store.append(_task("two\twith tab"))

    assert path.read_text("utf-8") == (f"0\t{TS}\t1\ta\tone\n" f"0\t{TS}\t0\t\ttwo\\twith tab\n")

    fresh = TaskStore(path)
    fresh.load()
    assert fresh.tasks == store.tasks


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        f"1\t{TS}\t0\t\tfirst\n" "\n" "   \n" "legacy free text\n" f"0\t{TS}\t2\tx\tthird",
        "utf-8",
    )

    store = TaskStore(path)
    store.load()

    assert [t.description for t in store] == ["first", "legacy free text", "third"]
    assert store.get(1).done is True
    assert store.get(3).priority == 2
    assert store.get(3).tags == ["x"]


def test_load_tolerates_crlf_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_bytes(f"1\t{TS}\t0\t\tfirst\r\n\r\n0\t{TS}\t0\ta\tsecond\r\n".encode("utf-8"))

    store = TaskStore(path)
    store.load()

    assert [t.description for t in store] == ["first", "second"]
    assert store.get(2).tags == ["a"]


def test_trailing_cr_in_description_survives_reload(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(path)
    store.append(_task("abc\r"))
    store.append(_task("plain"))

    fresh = TaskStore(path)
    fresh.load()

    assert [t.description for t in fresh] == ["abc\r", "plain"]


def test_over_long_file_name_is_a_load_error(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / ("x" * 300))
    store._tasks.append(_task("in memory"))

    with pytest.raises(TaskStoreError) as exc:
        store.load()

    assert str(exc.value).startswith("Failed to load tasks:")
    assert [t.description for t in store] == ["in memory"]


def test_load_replaces_in_memory_list(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(path)
    store.append(_task("saved"))

    other = TaskStore(path)
    other.append(_task("will be replaced"))
    other.append(_task("and this"))
    other.load()

    # `other` overwrote the file with two tasks on its own appends.
    assert [t.description for t in other] == ["will be replaced", "and this"]

    path.write_text(f"0\t{TS}\t0\t\tonly\n", "utf-8")
    other.load()
    assert [t.description for t in other] == ["only"]


def test_mark_done_is_one_way_and_reports_noop(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(path)
    store.append(_task("a"))
    store.append(_task("b"))

    assert store.mark_done(2) is True
    assert path.read_text("utf-8").splitlines()[1].startswith("1\t")

    assert store.mark_done(2) is False
    assert store.get(2).done is True
    assert store.get(1).done is False


def test_remove_at_shifts_positions(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.txt")
    for desc in ("a", "b", "c"):
        store.append(_task(desc))

    removed = store.remove_at(2)

    assert removed.description == "b"
    assert [t.description for t in store] == ["a", "c"]
    assert store.get(2).description == "c"


@pytest.mark.parametrize("index", [0, -1, 2, 99])
def test_out_of_range_index_is_rejected_before_mutation(tmp_path: Path, index: int) -> None:
    path = tmp_path / "tasks.txt"
    store = TaskStore(path)
    store.append(_task("only"))
    before = path.read_text("utf-8")

    assert store.is_valid_index(index) is False
    with pytest.raises(IndexError):
        store.mark_done(index)
    with pytest.raises(IndexError):
        store.remove_at(index)
    with pytest.raises(IndexError):
        store.get(index)

    assert len(store) == 1
    assert store.get(1).done is False
    assert path.read_text("utf-8") == before


def test_load_failure_keeps_current_list(tmp_path: Path) -> None:
    # A directory where the file should be makes open() fail.
    path = tmp_path / "tasks.txt"
    path.mkdir()
    store = TaskStore(path)
    store._tasks.append(_task("in memory"))

    with pytest.raises(TaskStoreError) as exc:
        store.load()

    assert str(exc.value).startswith("Failed to load tasks:")
    assert [t.description for t in store] == ["in memory"]


def test_undecodable_file_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    path.write_bytes(b"0\tts\t0\t\t\xff\xfe\n")
    store = TaskStore(path)

    with pytest.raises(TaskStoreError):
        store.load()
    assert len(store) == 0


def test_save_failure_keeps_mutation_in_memory(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", "utf-8")
    store = TaskStore(blocker / "tasks.txt")

    with pytest.raises(TaskStoreError) as exc:
        store.append(_task("kept"))

    assert str(exc.value).startswith("Failed to save tasks:")
    assert [t.description for t in store] == ["kept"]
