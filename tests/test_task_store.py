# tests/test_task_store.py

from __future__ import annotations

import json

from pocket_todo.tasks.task_models import Task
from pocket_todo.tasks.task_store import TaskStore

from .fakes import FailingKV, InMemoryKV, RecordingNotifier


def make_store(kv=None, notifier=None, **kwargs) -> tuple[TaskStore, InMemoryKV, RecordingNotifier]:
    kv = InMemoryKV() if kv is None else kv
    notifier = RecordingNotifier() if notifier is None else notifier
    store = TaskStore(kv, notifier, **kwargs)
    store.load()
    return store, kv, notifier


def test_create_prepends_and_persists() -> None:
    store, kv, notifier = make_store()

    first = store.create("Buy milk", "2%")
    second = store.create("Call Bob", "")

    assert first is not None and second is not None
    assert [t.title for t in store.tasks] == ["Call Bob", "Buy milk"]
    assert store.tasks[0].id == second.id
    assert notifier.last == ("Task added successfully!", "success")

    stored = json.loads(kv.data["todos"])
    assert [item["title"] for item in stored] == ["Call Bob", "Buy milk"]
    assert set(stored[0]) == {"id", "title", "description", "createdAt", "completed"}
    assert stored[0]["completed"] is False


def test_create_trims_title_and_description() -> None:
    store, _, _ = make_store()
    task = store.create("  Water plants  ", "  balcony  ")
    assert task is not None
    assert task.title == "Water plants"
    assert task.description == "balcony"


def test_create_rejects_blank_title() -> None:
    store, kv, notifier = make_store()
    store.create("Keep me")
    writes = kv.writes

    assert store.create("") is None
    assert store.create("   \t ") is None

    assert store.count == 1
    assert kv.writes == writes
    assert notifier.last == ("Task title cannot be empty!", "error")


def test_create_enforces_title_length() -> None:
    store, _, notifier = make_store()

    assert store.create("x" * 100) is not None
    assert store.create("y" * 101) is None

    assert store.count == 1
    assert notifier.last == ("Task title must be at most 100 characters.", "error")


def test_ids_are_unique_even_within_one_millisecond() -> None:
    store, _, _ = make_store(clock=lambda: 1000.0)

    ids = [store.create(f"task {i}").id for i in range(3)]  # type: ignore[union-attr]

    assert ids == ["1000000", "1000001", "1000002"]


def test_ids_continue_after_loaded_tasks() -> None:
    blob = json.dumps([{"id": "5000000", "title": "old", "description": "", "createdAt": "", "completed": False}])
    store, _, _ = make_store(kv=InMemoryKV({"todos": blob}), clock=lambda: 1.0)

    task = store.create("new")

    assert task is not None
    assert task.id == "5000001"


def test_delete_present_and_absent() -> None:
    store, kv, notifier = make_store()
    keep = store.create("Keep")
    drop = store.create("Drop")
    assert keep is not None and drop is not None

    removed = store.delete(drop.id)
    assert removed == drop
    assert [t.id for t in store.tasks] == [keep.id]
    assert notifier.last == ('Task "Drop" deleted', "success")

    shown = len(notifier.shown)
    writes = kv.writes
    assert store.delete("no-such-id") is None
    assert [t.id for t in store.tasks] == [keep.id]
    assert len(notifier.shown) == shown
    assert kv.writes == writes


def test_clear_all_empties_and_persists() -> None:
    store, kv, notifier = make_store()
    store.create("a")
    store.create("b")

    store.clear_all()

    assert store.tasks == ()
    assert store.view == ()
    assert json.loads(kv.data["todos"]) == []
    assert notifier.last == ("All tasks have been cleared!", "success")


def test_search_filters_view_not_canonical_list() -> None:
    store, _, _ = make_store()
    store.create("Buy milk", "2%")
    store.create("Call Bob", "")

    view = store.search("milk")

    assert [t.title for t in view] == ["Buy milk"]
    assert store.count == 2
    assert [t.title for t in store.search("")] == ["Call Bob", "Buy milk"]


def test_view_tracks_mutations_under_active_search() -> None:
    store, _, _ = make_store()
    store.create("Buy milk")
    store.search("MILK")

    store.create("Milk run")
    store.create("Something else")
    assert [t.title for t in store.view] == ["Milk run", "Buy milk"]

    victim = store.view[0]
    store.delete(victim.id)
    assert [t.title for t in store.view] == ["Buy milk"]


def test_load_missing_key_is_quiet() -> None:
    store, _, notifier = make_store()
    assert store.tasks == ()
    assert notifier.shown == []


def test_load_empty_blob_is_treated_as_no_data() -> None:
    store, _, notifier = make_store(kv=InMemoryKV({"todos": ""}))

    assert store.load() is True
    assert store.tasks == ()
    assert notifier.shown == []


def test_load_not_json_yields_empty_list_and_notification() -> None:
    kv = InMemoryKV({"todos": "not json"})
    notifier = RecordingNotifier()
    store = TaskStore(kv, notifier)

    assert store.load() is False
    assert store.tasks == ()
    assert notifier.last == ("Failed to load tasks and theme.", "error")


def test_load_rejects_wrong_shapes() -> None:
    bad_blobs = [
        json.dumps({"id": "1", "title": "x"}),
        json.dumps([{"id": "1"}]),
        json.dumps([{"id": "1", "title": "   "}]),
        json.dumps([{"id": "1", "title": "a"}, {"id": "1", "title": "b"}]),
        json.dumps(["just a string"]),
    ]
    for blob in bad_blobs:
        store, _, notifier = make_store(kv=InMemoryKV({"todos": blob}))
        assert store.tasks == (), blob
        assert notifier.last == ("Failed to load tasks and theme.", "error")


def test_load_read_failure_is_not_fatal() -> None:
    store, _, notifier = make_store(kv=FailingKV(fail_reads=True))
    assert store.tasks == ()
    assert notifier.last == ("Failed to load tasks and theme.", "error")


def test_round_trip_through_storage() -> None:
    store, kv, _ = make_store()
    store.create("Buy milk", "2%")
    store.create("Call Bob")
    store.create("Ünïcödé ✓", "multi\nline")

    reloaded, _, _ = make_store(kv=kv)

    assert reloaded.tasks == store.tasks


def test_load_accepts_original_blob_format() -> None:
    blob = json.dumps(
        [
            {
                "id": "1714550000000",
                "title": "Buy milk",
                "description": "2%",
                "createdAt": "2024-05-01T09:53:20.000Z",
                "completed": False,
                "extra": "ignored",
            }
        ]
    )
    store, _, _ = make_store(kv=InMemoryKV({"todos": blob}))

    assert store.tasks == (
        Task(id="1714550000000", title="Buy milk", description="2%", created_at="2024-05-01T09:53:20.000Z"),
    )


def test_write_failure_keeps_memory_state() -> None:
    store, _, notifier = make_store(kv=FailingKV(fail_writes=True))

    task = store.create("Unsaved")

    assert task is not None
    assert store.count == 1
    assert notifier.last == ("Failed to save tasks. Your changes may not persist.", "error")

    store.delete(task.id)
    assert store.count == 0


def test_resolve_by_id_or_view_position() -> None:
    store, _, _ = make_store()
    milk = store.create("Buy milk")
    bob = store.create("Call Bob")
    assert milk is not None and bob is not None

    assert store.resolve(milk.id) == milk.id
    assert store.resolve("1") == bob.id
    assert store.resolve("2") == milk.id
    assert store.resolve("3") is None
    assert store.resolve("") is None

    store.search("milk")
    assert store.resolve("1") == milk.id


def test_export_json_lists_canonical_tasks() -> None:
    store, _, _ = make_store()
    store.create("a")
    store.create("b")
    store.search("a")

    exported = json.loads(store.export_json())

    assert [item["title"] for item in exported] == ["b", "a"]
