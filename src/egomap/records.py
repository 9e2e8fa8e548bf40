"""Stakeholder records, the in-memory store and the record form."""

import math
import uuid
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass, field

DEFAULT_CATEGORY = "Uncategorized"


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def new_id() -> str:
    """Return a fresh opaque record id."""
    return uuid.uuid4().hex


def _as_number(value, default: float = 0) -> float:
    """Best-effort numeric coercion used for permissive loads."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
        return value
    if isinstance(value, float):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return int(number) if number.is_integer() else number


@dataclass
class StakeholderRecord:
    """A single stakeholder on the map."""

    name: str
    id: str = field(default_factory=new_id)
    category: str = DEFAULT_CATEGORY
    importance: int = 0  # 0-100, drives node size
    proximity: int = 0  # 0-100, drives radial distance
    strength: float = 0  # 0-10, drives stalk width
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "StakeholderRecord":
        """Build a record from a decoded JSON object without validating it.

        Missing keys take their defaults and numbers that cannot be parsed
        become 0. Values are not clamped and ids are kept as given.
        """
        record_id = data.get("id")
        return cls(
            id=str(record_id) if record_id is not None else new_id(),
            name=str(data.get("name", "")),
            category=str(data.get("category", DEFAULT_CATEGORY)),
            importance=_as_number(data.get("importance", 0)),
            proximity=_as_number(data.get("proximity", 0)),
            strength=_as_number(data.get("strength", 0)),
            notes=str(data.get("notes", "")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "importance": self.importance,
            "proximity": self.proximity,
            "strength": self.strength,
            "notes": self.notes,
        }


def normalize(record: StakeholderRecord) -> StakeholderRecord | None:
    """Return a trimmed, clamped copy of record, or None if its name is empty."""
    name = record.name.strip()
    if not name:
        return None
    strength = clamp(_as_number(record.strength), 0, 10)
    return StakeholderRecord(
        id=record.id,
        name=name,
        category=record.category.strip() or DEFAULT_CATEGORY,
        importance=int(clamp(_as_number(record.importance), 0, 100)),
        proximity=int(clamp(_as_number(record.proximity), 0, 100)),
        strength=int(strength) if float(strength).is_integer() else strength,
        notes=record.notes.strip(),
    )


class RecordStore:
    """Ordered sequence of stakeholder records plus the current edit target.

    The store is the only owner of records. Layout and rendering work on
    derived copies and never write back.
    """

    def __init__(self, records: Sequence[StakeholderRecord] | None = None):
        self._records: list[StakeholderRecord] = list(records or [])
        self.editing_id: str | None = None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StakeholderRecord]:
        return iter(list(self._records))

    def to_json_list(self) -> list[dict]:
        return [r.to_dict() for r in self._records]

    def list(self) -> list[StakeholderRecord]:
        """Return the records in insertion order."""
        return list(self._records)

    def get(self, record_id: str) -> StakeholderRecord | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def upsert(self, record: StakeholderRecord) -> bool:
        """Validate, clamp and store a record.

        A record whose id is already present replaces the existing entry in
        place; otherwise it is appended.

        Args:
            record: The record to write.

        Returns:
            False if the write was rejected because the name is empty.
        """
        clean = normalize(record)
        if clean is None:
            return False

        for i, existing in enumerate(self._records):
            if existing.id == clean.id:
                self._records[i] = clean
                return True
        self._records.append(clean)
        return True

    def remove(self, record_id: str) -> None:
        """Remove the record with record_id, if any."""
        self._records = [r for r in self._records if r.id != record_id]
        if self.editing_id == record_id:
            self.editing_id = None

    def replace_all(self, records: Sequence) -> int:
        """Replace every record at once (used by load and import).

        Entries are not validated: ids are kept even when duplicated and
        numeric fields are not clamped. Mappings are coerced into records;
        entries that are neither records nor mappings are skipped.
        Integers too large for a float load as infinity.

        Records sharing an id are all kept, but only the first of them is
        drawn, so dragging, hovering and `get` all resolve to it.

        Args:
            records: Sequence of StakeholderRecord or decoded JSON objects.

        Returns:
            Number of entries skipped.

        Raises:
            TypeError: If records is not a sequence.
        """
        if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
            raise TypeError(f"Expected a sequence of records, got {type(records).__name__}")

        loaded: list[StakeholderRecord] = []
        skipped = 0
        for entry in records:
            if isinstance(entry, StakeholderRecord):
                loaded.append(entry)
            elif isinstance(entry, Mapping):
                loaded.append(StakeholderRecord.from_dict(entry))
            else:
                skipped += 1

        self._records = loaded
        self.editing_id = None
        return skipped


@dataclass
class StakeholderForm:
    """Field values of the record form."""

    name: str = ""
    category: str = ""
    importance: int = 60
    proximity: int = 40
    strength: float = 6
    notes: str = ""

    def reset(self, store: RecordStore) -> None:
        """Clear every field back to its default and drop the edit target."""
        for key, value in asdict(StakeholderForm()).items():
            setattr(self, key, value)
        store.editing_id = None

    def begin_edit(self, store: RecordStore, record_id: str) -> bool:
        """Load an existing record into the form and make it the edit target."""
        record = store.get(record_id)
        if record is None:
            return False
        store.editing_id = record.id
        self.name = record.name
        self.category = record.category
        self.importance = record.importance
        self.proximity = record.proximity
        self.strength = record.strength
        self.notes = record.notes
        return True

    def submit(self, store: RecordStore) -> StakeholderRecord | None:
        """Write the form into the store.

        The form keeps its values when the write is rejected and is reset
        after a successful one.

        Returns:
            The stored record, or None if the name was empty.
        """
        record = StakeholderRecord(
            id=store.editing_id or new_id(),
            name=self.name,
            category=self.category,
            importance=self.importance,
            proximity=self.proximity,
            strength=self.strength,
            notes=self.notes,
        )
        if not store.upsert(record):
            return None
        stored = store.get(record.id)
        self.reset(store)
        return stored
