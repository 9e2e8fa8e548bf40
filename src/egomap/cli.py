"""CLI for egomap."""

import argparse
import sys
from pathlib import Path

from .export import DEFAULT_PNG_NAME, ExportError
from .layout import DragStateError
from .records import RecordStore, StakeholderForm, StakeholderRecord
from .storage import (
    DEFAULT_EXPORT_NAME,
    DEFAULT_SLOT_PATH,
    ImportParseError,
    ImportShapeError,
    LocalSlot,
    export_json,
    import_json,
)
from .visualize import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    format_table,
    generate_html,
    generate_png,
    generate_svg,
)

FORM_FIELDS = ("name", "category", "importance", "proximity", "strength", "notes")


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("--slot", type=Path, help=f"Save slot file (default: {DEFAULT_SLOT_PATH})")
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def add_record_args(parser: argparse.ArgumentParser, name_required: bool) -> None:
    """Add the record form fields."""
    parser.add_argument("--name", required=name_required, help="Stakeholder name")
    parser.add_argument("--category", help="Category (default: Uncategorized)")
    parser.add_argument("--importance", type=float, help="Importance 0-100 (default: 60)")
    parser.add_argument("--proximity", type=float, help="Proximity 0-100 (default: 40)")
    parser.add_argument("--strength", type=float, help="Relationship strength 0-10 (default: 6)")
    parser.add_argument("--notes", help="Free-form notes")


def resolve_common_args(args: argparse.Namespace) -> None:
    """Load config and fill in anything not given on the command line."""
    config = load_config(args.config) if args.config else {}

    if not args.slot:
        args.slot = Path(config["slot"]) if "slot" in config else DEFAULT_SLOT_PATH
    args.slot = args.slot.expanduser().resolve()

    if hasattr(args, "width"):
        if args.width is None:
            args.width = float(config.get("width", DEFAULT_WIDTH))
        if args.height is None:
            args.height = float(config.get("height", DEFAULT_HEIGHT))


def open_store(args: argparse.Namespace, quiet: bool = False) -> tuple[RecordStore, LocalSlot]:
    """Load the saved records into a fresh store."""
    store = RecordStore()
    slot = LocalSlot(args.slot)
    if not slot.load(store) and not quiet:
        print("Nothing saved yet.")
    return store, slot


def save_store(slot: LocalSlot, store: RecordStore) -> bool:
    """Write the store to its slot, printing a notice if the write fails."""
    try:
        slot.save(store)
    except OSError as e:
        print(f"Error: Couldn't save to {slot.path}: {e}")
        return False
    return True


def find_matching_record(store: RecordStore, pattern: str) -> StakeholderRecord | None:
    """Find the record whose id starts with pattern, or whose name equals it."""
    matches = [r for r in store if r.id.startswith(pattern)]
    if not matches:
        matches = [r for r in store if r.name == pattern]
    if len(matches) == 0:
        print(f"Error: No stakeholder matching '{pattern}'")
        return None
    if len(matches) > 1:
        print(f"Error: Ambiguous pattern '{pattern}' matches:")
        for r in matches[:10]:
            print(f"  {r.id}  {r.name}")
        if len(matches) > 10:
            print(f"  ... and {len(matches) - 10} more")
        return None
    return matches[0]


def parse_move(value: str) -> tuple[str, float, float]:
    """Parse an ID=X,Y drag target."""
    try:
        key, coords = value.rsplit("=", 1)
        x, y = (float(c) for c in coords.split(","))
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Expected ID=X,Y, got '{value}'") from err
    return key, x, y


def apply_form_args(form: StakeholderForm, args: argparse.Namespace) -> None:
    for field_name in FORM_FIELDS:
        value = getattr(args, field_name)
        if value is not None:
            setattr(form, field_name, value)


def cmd_add(args: argparse.Namespace) -> int:
    """Add a stakeholder."""
    store, slot = open_store(args, quiet=True)
    form = StakeholderForm()
    apply_form_args(form, args)

    record = form.submit(store)
    if record is None:
        print("Nothing added: name is empty.")
        return 1

    if not save_store(slot, store):
        return 1
    print(f"Added {record.name} ({record.id})")
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit an existing stakeholder in place."""
    store, slot = open_store(args)
    record = find_matching_record(store, args.record)
    if record is None:
        return 1

    form = StakeholderForm()
    form.begin_edit(store, record.id)
    apply_form_args(form, args)

    updated = form.submit(store)
    if updated is None:
        print("Nothing changed: name is empty.")
        return 1

    if not save_store(slot, store):
        return 1
    print(f"Updated {updated.name} ({updated.id})")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    """Delete a stakeholder."""
    store, slot = open_store(args)
    record = find_matching_record(store, args.record)
    if record is None:
        return 1

    store.remove(record.id)
    if not save_store(slot, store):
        return 1
    print(f"Removed {record.name}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print the stakeholders as a table."""
    store, _ = open_store(args)
    if len(store):
        print(format_table(store))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export the saved records to a JSON file."""
    store, _ = open_store(args)
    try:
        export_json(store, args.output)
    except OSError as e:
        print(f"Error: Couldn't write {args.output}: {e}")
        return 1
    print(f"Wrote {len(store)} stakeholders to {args.output}")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Replace the saved records with the contents of a JSON file."""
    store, slot = open_store(args, quiet=True)
    try:
        count = import_json(store, args.input)
    except (ImportParseError, ImportShapeError) as e:
        print(e)
        return 1
    except OSError as e:
        print(f"Error: Couldn't read {args.input}: {e}")
        return 1

    if not save_store(slot, store):
        return 1
    print(f"Imported {count} stakeholders from {args.input}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Draw the map as SVG, PNG or interactive HTML."""
    store, _ = open_store(args)

    moves: dict[str, tuple[float, float]] = {}
    for pattern, x, y in args.move or []:
        record = find_matching_record(store, pattern)
        if record is None:
            return 1
        moves[record.id] = (x, y)

    output = args.output
    if output is None:
        output = Path(DEFAULT_PNG_NAME if args.format == "png" else f"stakeholder-map.{args.format}")

    print(f"Drawing {len(store)} stakeholders at {args.width:.0f}x{args.height:.0f}...")
    try:
        if args.format == "svg":
            generate_svg(store, output, args.width, args.height, moves)
        elif args.format == "png":
            generate_png(store, output, args.width, args.height, moves)
        else:
            if moves:
                print("Note: --move is ignored for html; drag nodes in the browser instead.")
            generate_html(store, output, args.width, args.height)
    except (ExportError, DragStateError) as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: Couldn't write {output}: {e}")
        return 1

    print(f"Wrote {output}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for egomap CLI."""
    parser = argparse.ArgumentParser(
        description="Catalogue stakeholders and draw them as a radial map centred on you"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser("add", help="Add a stakeholder")
    add_common_args(add_parser)
    add_record_args(add_parser, name_required=True)
    add_parser.set_defaults(func=cmd_add)

    edit_parser = subparsers.add_parser("edit", help="Edit a stakeholder")
    add_common_args(edit_parser)
    edit_parser.add_argument("record", help="Record id (prefix) or exact name")
    add_record_args(edit_parser, name_required=False)
    edit_parser.set_defaults(func=cmd_edit)

    remove_parser = subparsers.add_parser("remove", help="Delete a stakeholder")
    add_common_args(remove_parser)
    remove_parser.add_argument("record", help="Record id (prefix) or exact name")
    remove_parser.set_defaults(func=cmd_remove)

    list_parser = subparsers.add_parser("list", help="List stakeholders")
    add_common_args(list_parser)
    list_parser.set_defaults(func=cmd_list)

    export_parser = subparsers.add_parser("export", help="Export stakeholders to JSON")
    add_common_args(export_parser)
    export_parser.add_argument(
        "--output",
        type=Path,
        default=Path(DEFAULT_EXPORT_NAME),
        help=f"Output file (default: {DEFAULT_EXPORT_NAME})",
    )
    export_parser.set_defaults(func=cmd_export)

    import_parser = subparsers.add_parser("import", help="Replace stakeholders from JSON")
    add_common_args(import_parser)
    import_parser.add_argument("input", type=Path, help="JSON file holding an array of records")
    import_parser.set_defaults(func=cmd_import)

    render_parser = subparsers.add_parser("render", help="Draw the stakeholder map")
    add_common_args(render_parser)
    render_parser.add_argument(
        "--format",
        choices=("svg", "png", "html"),
        default="svg",
        help="Output format (default: svg)",
    )
    render_parser.add_argument("--output", type=Path, help="Output file")
    render_parser.add_argument("--width", type=float, help=f"Viewport width (default: {DEFAULT_WIDTH})")
    render_parser.add_argument("--height", type=float, help=f"Viewport height (default: {DEFAULT_HEIGHT})")
    render_parser.add_argument(
        "--move",
        type=parse_move,
        action="append",
        metavar="ID=X,Y",
        help="Drag a node to X,Y before drawing (can be repeated)",
    )
    render_parser.set_defaults(func=cmd_render)

    args = parser.parse_args(argv)

    if not args.command:
        # No subcommand provided - show help
        parser.print_help()
        return

    resolve_common_args(args)
    code = args.func(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
