# tests/test_task_codec.py

from __future__ import annotations

import json

import pytest

from tasklist.core.errors import TaskDecodeError
from tasklist.tasks.task_codec import decode_tasks, encode_tasks
from tasklist.tasks.task_models import SAMPLE_TASKS, Task


def test_encode_writes_ordered_records_with_four_fields() -> None:
    blob = encode_tasks([Task(id="2", text="Café", timestamp="just now", completed=True)])

    data = json.loads(blob)
    assert data == [{"id": "2", "text": "Café", "timestamp": "just now", "completed": True}]
    assert list(data[0]) == ["id", "text", "timestamp", "completed"]
    assert "Café" in blob  # not escaped


def test_sample_tasks_survive_encoding() -> None:
    assert decode_tasks(encode_tasks(SAMPLE_TASKS)) == list(SAMPLE_TASKS)


@pytest.mark.parametrize("blob", ["", "not json", "{\"id\": 1}", "42", "null"])
def test_decode_rejects_non_list_blobs(blob: str) -> None:
    with pytest.raises(TaskDecodeError):
        decode_tasks(blob)


def test_decode_skips_bad_records_and_duplicate_ids() -> None:
    blob = json.dumps(
        [
            {"id": "a", "text": "keep", "timestamp": "1 day ago", "completed": False},
            "not a record",
            {"text": "no id"},
            {"id": "b", "text": "   "},
            {"id": "a", "text": "duplicate of a"},
            {"id": "c", "text": "also keep", "completed": True},
        ]
    )

    tasks = decode_tasks(blob)

    assert [t.id for t in tasks] == ["a", "c"]
    assert tasks[0].text == "keep"
    assert tasks[1].completed is True
    assert tasks[1].timestamp == ""


def test_decode_coerces_loose_field_types() -> None:
    blob = json.dumps([{"id": 17, "text": " padded ", "timestamp": None, "completed": "true"}])

    (task,) = decode_tasks(blob)

    assert task == Task(id="17", text=" padded ", timestamp="", completed=True)


def test_decode_keeps_stored_text_exactly() -> None:
    task = Task(id="a", text="  padded  ", timestamp="x")

    assert decode_tasks(encode_tasks([task])) == [task]


def test_decode_rejects_deeply_nested_blob() -> None:
    with pytest.raises(TaskDecodeError):
        decode_tasks("[" * 200000 + "]" * 200000)
