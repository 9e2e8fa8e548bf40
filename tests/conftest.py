"""Pytest fixtures for egomap tests."""

import pytest

from egomap.records import RecordStore, StakeholderRecord


def make_record(record_id: str, name: str, category: str = "Work", **kwargs) -> StakeholderRecord:
    """Record with predictable id and mid-range values unless overridden."""
    values = {"importance": 50, "proximity": 50, "strength": 5, "notes": ""}
    values.update(kwargs)
    return StakeholderRecord(id=record_id, name=name, category=category, **values)


@pytest.fixture
def single_category() -> list[StakeholderRecord]:
    """Two records sharing one category."""
    return [
        make_record("a", "Ada", "Work", proximity=0),
        make_record("b", "Bob", "Work", proximity=100),
    ]


@pytest.fixture
def mixed_categories() -> list[StakeholderRecord]:
    """Records across three categories, interleaved in store order."""
    return [
        make_record("a", "Ada", "Work"),
        make_record("f", "Fay", "Family"),
        make_record("b", "Bob", "Work"),
        make_record("c", "Cy", "Community"),
        make_record("g", "Gus", "Family"),
        make_record("d", "Dee", "Work"),
    ]


@pytest.fixture
def store(mixed_categories) -> RecordStore:
    """Store pre-filled with mixed_categories."""
    store = RecordStore()
    for record in mixed_categories:
        store.upsert(record)
    return store
