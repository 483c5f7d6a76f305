"""Command-line interface for orchestrating the pipeline.

Provides subcommands: `download`, `transform`, and `all`. Each command
is implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from scorecard_pipeline.config import Settings, get_settings
from scorecard_pipeline.logging_config import configure_logging
from scorecard_pipeline.db import get_client, get_db

# RAW / CLEAN
from scorecard_pipeline.ingest.fetch_schools import fetch_all_schools
from scorecard_pipeline.clean.transform import clean_schools, degrees_to_frame, flatten_degrees

# GOLD
from scorecard_pipeline.aggregate.weighted_median import aggregate
from scorecard_pipeline.aggregate.load_gold import load_gold, load_raw_schools

from scorecard_pipeline.storage import load_schools, save_results, save_schools

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _data_dir(args: argparse.Namespace, s: Settings) -> Path:
    return Path(args.data_dir) if args.data_dir else s.data_dir


def _mongo_db(s: Settings):
    """Return the configured Mongo database.

    Raises:
        RuntimeError: if `--mongo` was requested without `MONGO_URI`.
    """
    if not s.mongo_uri:
        raise RuntimeError("--mongo requires MONGO_URI to be set in .env.")
    return get_db(get_client(s.mongo_uri), s.mongo_db)


# --------------------------------------------------
# DOWNLOAD
# --------------------------------------------------
def cmd_download(args: argparse.Namespace) -> None:
    """Fetch every page of schools, clean them and write `schoolData.json`.

    Args:
        args: argparse namespace with `data_dir` and `mongo`.
    """
    s = get_settings()
    db = _mongo_db(s) if args.mongo else None
    raw = fetch_all_schools(s)

    if db is not None:
        load_raw_schools(db, raw)

    save_schools(clean_schools(raw), _data_dir(args, s))
    log.info("Done downloading data")


# --------------------------------------------------
# TRANSFORM
# --------------------------------------------------
def cmd_transform(args: argparse.Namespace) -> None:
    """Compute weighted medians from `schoolData.json` into `degreeData.json`.

    Args:
        args: argparse namespace with `data_dir` and `mongo`.
    """
    s = get_settings(require_api_key=False)
    data_dir = _data_dir(args, s)
    db = _mongo_db(s) if args.mongo else None

    schools = load_schools(data_dir)
    degrees = degrees_to_frame(flatten_degrees(schools))

    log.info("Calculating median income and median debt by degree and overall")
    results = aggregate(degrees)
    log.info("Done performing calculations")

    save_results(results, data_dir)

    if db is not None:
        load_gold(db, results)


# --------------------------------------------------
# ALL
# --------------------------------------------------
def cmd_all(args: argparse.Namespace) -> None:
    """Convenience: run download → transform with the provided args."""
    cmd_download(args)
    cmd_transform(args)


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data-dir", default=None, help="overrides SCORECARD_DATA_DIR")
    common.add_argument("--mongo", action="store_true", help="also upsert into MongoDB")

    p = argparse.ArgumentParser(prog="scorecard_pipeline")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("download", parents=[common])
    sub.add_parser("transform", parents=[common])
    sub.add_parser("all", parents=[common])

    return p


COMMANDS = {
    "download": cmd_download,
    "transform": cmd_transform,
    "all": cmd_all,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    configure_logging(Path("logs/pipeline.log"))

    args = build_parser().parse_args(argv)
    COMMANDS[args.cmd](args)


if __name__ == "__main__":
    main()
