"""CLI entry point for the trainer search engine."""

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any

import yaml

from trainer_search.core.config import Settings
from trainer_search.core.db import init_db, upsert_trainer
from trainer_search.core.schemas import SearchPage
from trainer_search.pipeline.intent_parser import parse_intent
from trainer_search.pipeline.orchestrator import export_results_json, run_deep_search
from trainer_search.sources.records import build_candidate
from trainer_search.sources.sqlite import SqliteTrainerSource


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Trainer search engine - rank trainers against a free-text request",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- search subcommand ---
    search_parser = subparsers.add_parser("search", help="Search and rank trainers")
    search_parser.add_argument("query", help='Free-text request, e.g. "yoga near London"')
    search_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    search_parser.add_argument("--page", default=None, help="1-based result page")
    search_parser.add_argument("--per-page", default=None, help="Results per page")
    search_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    search_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- parse subcommand ---
    parse_parser = subparsers.add_parser("parse", help="Show the intent parsed from a query")
    parse_parser.add_argument("query", help="Free-text request")
    parse_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- import-trainers subcommand ---
    import_parser = subparsers.add_parser(
        "import-trainers",
        help="Load trainer profiles from a YAML or JSON file into the store",
    )
    import_parser.add_argument("file", help="YAML/JSON file containing a list of trainers")
    import_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    import_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_trainer_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read a list of trainer rows from a YAML or JSON file."""
    path = Path(path)
    if not path.exists():
        msg = f"Trainer file not found: {path}"
        raise FileNotFoundError(msg)
    text = path.read_text()
    raw = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    if isinstance(raw, dict):
        raw = raw.get("trainers")
    if not isinstance(raw, list):
        msg = f"{path} must contain a list of trainers"
        raise ValueError(msg)
    return [row for row in raw if isinstance(row, dict)]


def print_results(result: SearchPage) -> None:
    intent = result.intent.to_response()
    facets = {k: v for k, v in intent.items() if v not in (None, [])}
    print(f"Intent: {json.dumps(facets)}")
    print(f"{result.count} matching trainers (page {result.page}, {result.per_page} per page)")

    offset = (result.page - 1) * result.per_page
    for rank, s in enumerate(result.results, start=offset + 1):
        b = s.breakdown
        print(
            f"  {rank:>3}. {s.candidate.display_name} - {s.score} "
            f"(goal {b.goal_score}, style {b.style_score}, "
            f"level {b.level_score}, location {b.location_score})"
        )


def cmd_search(args: argparse.Namespace, settings: Settings) -> None:
    """Handle search subcommand."""
    conn = init_db(settings.database.path)
    try:
        source = SqliteTrainerSource(
            conn,
            only_available=settings.search.only_available,
            prefilter_max_rate=settings.search.prefilter_max_rate,
        )
        result = run_deep_search(
            args.query, source, settings, page=args.page, per_page=args.per_page, conn=conn,
        )
    finally:
        conn.close()

    if args.export == "json":
        print(export_results_json(result))
    else:
        print_results(result)


def cmd_parse(args: argparse.Namespace) -> None:
    """Handle parse subcommand."""
    intent = parse_intent(args.query)
    print(json.dumps(intent.to_response(), indent=2))


def cmd_import_trainers(args: argparse.Namespace, settings: Settings) -> None:
    """Handle import-trainers subcommand."""
    rows = load_trainer_rows(args.file)
    conn = init_db(settings.database.path)
    inserted = replaced = rejected = 0
    try:
        for row in rows:
            try:
                candidate = build_candidate(row)
            except ValueError as e:
                print(f"  Rejected: {e}", file=sys.stderr)
                rejected += 1
                continue
            if upsert_trainer(conn, candidate.model_dump()):
                inserted += 1
            else:
                replaced += 1
    finally:
        conn.close()
    print(f"Imported {inserted} new, {replaced} replaced, {rejected} rejected "
          f"into {settings.database.path}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "parse":
        cmd_parse(args)
        return

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "import-trainers":
            cmd_import_trainers(args, settings)
        else:
            cmd_search(args, settings)
    except (FileNotFoundError, ValueError, yaml.YAMLError, sqlite3.Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
