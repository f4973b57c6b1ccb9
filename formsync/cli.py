# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Drive the sync layer by hand: replay a submission, preview a
#   field's pre-populated value, inspect a profile, or backfill
#   a whole form from the forms REST API.
#
# COMMANDS:
# ---------
# 1. Store a submission's sync-enabled fields:
#    python -m formsync.cli submit --form form.json --entry entry.json --user 42
#
# 2. Show what a field would be pre-populated with:
#    python -m formsync.cli populate --form form.json --field 4 --param company --user 42
#
# 3. Dump a user's stored attributes:
#    python -m formsync.cli show --user 42
#
# 4. Replay every entry of a form from the REST API:
#    python -m formsync.cli backfill --form-id 3
#
# NOTES:
# ------
#   The backend comes from PROFILE_STORE. With "memory", nothing
#   outlives the command; --seed profiles.json preloads it.
#
# ==============================================

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from formsync.app import build_mediator
from formsync.config import AppConfig, configure_logging, get_config
from formsync.errors import FormSyncError
from formsync.fields.descriptor import FormDefinition
from formsync.sources.forms_api import FormsApiSource, backfill
from formsync.storage.base import ProfileStore
from formsync.storage.factory import create_store
from formsync.storage.memory_store import MemoryProfileStore


def _load_json(path: str) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FormSyncError(f"File not found: {path}")
    with open(file_path, "r") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise FormSyncError(f"{path} is not valid JSON: {e}") from e


def _open_store(config: AppConfig, seed: Optional[str]) -> ProfileStore:
    if config.sync.store_backend == "memory":
        return MemoryProfileStore(_load_json(seed) if seed else None)
    return create_store(config)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def cmd_submit(args, config: AppConfig, store: ProfileStore) -> int:
    mediator = build_mediator(config, store=store)
    form = FormDefinition.coerce(_load_json(args.form))
    entry = _load_json(args.entry)
    result = mediator.on_submission(entry, form, user_id=args.user)
    _print_json({
        "user_id": result.user_id,
        "fields_synced": result.fields_synced,
        "writes": result.writes,
        "skipped": result.skipped,
        "errors": result.errors,
    })
    return 0 if result.ok else 1


def cmd_populate(args, config: AppConfig, store: ProfileStore) -> int:
    mediator = build_mediator(config, store=store)
    form = FormDefinition.coerce(_load_json(args.form))
    form_field = form.get_field(args.field)
    if form_field is None:
        print(f"Field {args.field} not found in {args.form}", file=sys.stderr)
        return 1
    value = mediator.populate_field(args.default, form_field, args.param, user_id=args.user)
    _print_json({"field": form_field.id, "param": args.param, "value": value})
    return 0


def cmd_show(args, config: AppConfig, store: ProfileStore) -> int:
    _print_json(store.read_all(args.user))
    return 0


def cmd_backfill(args, config: AppConfig, store: ProfileStore) -> int:
    mediator = build_mediator(config, store=store)
    source = FormsApiSource.from_config(config.source, page_size=args.page_size)
    result = backfill(mediator, source, args.form_id)
    _print_json({
        "fields_synced": result.fields_synced,
        "writes": result.writes,
        "skipped": result.skipped,
        "errors": result.errors,
    })
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formsync",
        description="Sync form fields with stored user profile attributes.",
    )
    parser.add_argument("--seed", help="JSON {user_id: {key: value}} to preload the memory store")
    sub = parser.add_subparsers(dest="command", required=True)

    submit = sub.add_parser("submit", help="store a submission's sync-enabled fields")
    submit.add_argument("--form", required=True, help="form definition JSON file")
    submit.add_argument("--entry", required=True, help="submitted entry JSON file")
    submit.add_argument("--user", required=True, help="acting user id")
    submit.set_defaults(handler=cmd_submit)

    populate = sub.add_parser("populate", help="preview a field's pre-populated value")
    populate.add_argument("--form", required=True, help="form definition JSON file")
    populate.add_argument("--field", required=True, help="field id")
    populate.add_argument("--param", required=True, help="parameter name (profile key)")
    populate.add_argument("--user", required=True, help="acting user id")
    populate.add_argument("--default", default="", help="host default value")
    populate.set_defaults(handler=cmd_populate)

    show = sub.add_parser("show", help="print a user's stored attributes")
    show.add_argument("--user", required=True, help="user id")
    show.set_defaults(handler=cmd_show)

    backfill_cmd = sub.add_parser("backfill", help="replay a form's entries from the REST API")
    backfill_cmd.add_argument("--form-id", required=True, help="form id")
    backfill_cmd.add_argument("--page-size", type=int, default=50)
    backfill_cmd.set_defaults(handler=cmd_backfill)

    return parser


def main(argv: Optional[Sequence[str]] = None, config: Optional[AppConfig] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config or get_config()
        configure_logging(config.sync.log_level)
        store = _open_store(config, args.seed)
        try:
            return args.handler(args, config, store)
        finally:
            disconnect = getattr(store, "disconnect", None)
            if disconnect is not None:
                disconnect()
    except FormSyncError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
