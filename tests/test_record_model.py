"""Tests for the Record value type and its id/timestamp helpers."""

import re
from datetime import datetime

import pytest

from recordstore.models.record import Record, generate_record_id, utc_timestamp


def test_generate_record_id_format():
    assert re.fullmatch(r"record_\d{13,}", generate_record_id())


def test_utc_timestamp_is_iso_with_millis():
    stamp = utc_timestamp()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", stamp)
    assert datetime.fromisoformat(stamp.replace("Z", "+00:00")).tzinfo is not None


def test_reserved_fields_read_from_wire_names():
    record = Record.from_document(
        {"id": "r1", "createdAt": "2024-01-01T00:00:00.000Z", "color": "red"}
    )

    assert record.id == "r1"
    assert record.created_at == "2024-01-01T00:00:00.000Z"
    assert record.updated_at is None
    assert record.extra_fields == {"color": "red"}


def test_to_document_omits_unset_reserved_fields():
    record = Record.from_document({"id": "r1", "color": "red"})

    assert record.to_document() == {"id": "r1", "color": "red"}


def test_null_values_are_kept():
    record = Record.from_document({"id": "r1", "note": None})

    assert record.to_document() == {"id": "r1", "note": None}


def test_explicit_null_reserved_keys_are_kept():
    document = {"id": "r1", "createdAt": None, "updatedAt": None}

    assert Record.from_document(document).to_document() == document


def test_non_string_reserved_values_are_accepted():
    record = Record.from_document({"id": 7, "updatedAt": 5, "name": "legacy"})

    assert record.id == 7
    assert record.updated_at == 5
    assert record.to_document() == {"id": 7, "updatedAt": 5, "name": "legacy"}


def test_to_document_keeps_key_order():
    document = {"name": "Alice", "id": "r1", "createdAt": "t0", "age": 3}

    keys = list(Record.from_document(document).to_document())

    assert keys == ["name", "id", "createdAt", "age"]


@pytest.mark.parametrize("document", [1, "record", ["id", "r1"], None])
def test_from_document_rejects_non_objects(document):
    with pytest.raises(ValueError):
        Record.from_document(document)
