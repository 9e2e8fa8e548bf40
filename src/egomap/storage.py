"""Local slot persistence and JSON export/import of the record list."""

import json
from pathlib import Path

from .records import RecordStore

# Name of the single persistence slot
SLOT_NAME = "egomap_items"
DEFAULT_SLOT_PATH = Path.home() / ".egomap" / f"{SLOT_NAME}.json"

DEFAULT_EXPORT_NAME = "stakeholders.json"


class ImportParseError(ValueError):
    """The imported file is not valid JSON."""


class ImportShapeError(ValueError):
    """The imported JSON is valid but its top-level value is not an array."""


class LocalSlot:
    """A single named slot on local disk holding the record list as JSON."""

    def __init__(self, path: Path = DEFAULT_SLOT_PATH):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, store: RecordStore) -> None:
        """Write every record to the slot, replacing what was there."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(store.to_json_list(), f)

    def load(self, store: RecordStore) -> bool:
        """Replace the store contents with the saved records.

        A slot that cannot be parsed, or whose value is not an array, loads as
        an empty list.

        Args:
            store: Store to load into.

        Returns:
            False if nothing has been saved yet; the store is left untouched.
        """
        if not self.exists():
            return False

        with open(self.path, "rb") as f:
            raw = f.read()

        # Undecodable bytes count as malformed data
        try:
            text = raw.decode("utf-8")
            items = json.loads(text) if text.strip() else []
        except ValueError:
            items = []
        if not isinstance(items, list):
            items = []

        store.replace_all(items)
        return True


def export_json(store: RecordStore, output_path: Path) -> None:
    """Write the record list as a pretty-printed JSON array.

    Args:
        store: Store to export.
        output_path: Destination file, conventionally stakeholders.json.
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(store.to_json_list(), f, indent=2)
        f.write("\n")


def import_json(store: RecordStore, input_path: Path) -> int:
    """Replace the record list with the contents of a JSON file.

    Records are not validated individually. The store is left unchanged on
    any failure.

    Args:
        store: Store to import into.
        input_path: JSON file holding an array of records.

    Returns:
        Number of records imported.

    Raises:
        ImportParseError: If the file is not valid JSON.
        ImportShapeError: If the top-level value is not an array.
    """
    with open(input_path, "rb") as f:
        raw = f.read()

    try:
        incoming = json.loads(raw.decode("utf-8"))
    except ValueError as err:
        raise ImportParseError(f"Couldn't parse JSON: {err}") from err

    if not isinstance(incoming, list):
        raise ImportShapeError(
            f"Invalid JSON format: expected an array, got {type(incoming).__name__}"
        )

    store.replace_all(incoming)
    return len(store)
