from __future__ import annotations

import argparse
import sys
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

from lotlister.config.loader import ConfigError, load_config
from lotlister.logging.init import log_summary, set_debug, setup_logging
from lotlister.services.errors import (
    EmptyDataFileError,
    MissingDataFileError,
    MissingInputLocationError,
    ProcessingError,
    UnreadableDataFileError,
    UnreadableTemplateError,
)
from lotlister.services.orchestrator import run
from lotlister.services.summary import render_summary_line

"""CLI entrypoint.

Exit codes:
- 0: run completed (skipped rows do not fail the run)
- 1: fatal condition (config, input directory, template, data file)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

_ERROR_LABELS = {
    MissingInputLocationError: "input",
    UnreadableTemplateError: "template",
    MissingDataFileError: "data",
    EmptyDataFileError: "data",
    UnreadableDataFileError: "data",
}


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so LOTLISTER_* variables take part in config resolution."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="lotlister",
        description="Render marketplace listings from an inventory spreadsheet",
    )
    p.add_argument("--input", "-i", dest="input_directory", help="Directory holding the data file and template")
    p.add_argument("--output", "-o", dest="output_directory", help="Output directory (default: <input>/listings)")
    p.add_argument("--photos", "-p", dest="photos_directory", help="Photo directory (default: input directory)")
    p.add_argument("--data-file", dest="data_file", help="Inventory file name (default: inventory.csv)")
    p.add_argument("--template", dest="template_file", help="Template file name (default: template.txt)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file (default: config/listings.yml if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--open-preview", action="store_true", help="Open the preview in a browser when done")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no list was given; [] means "no arguments"
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    overrides = {
        "input_directory": args.input_directory,
        "output_directory": args.output_directory,
        "photos_directory": args.photos_directory,
        "data_file": args.data_file,
        "template_file": args.template_file,
    }
    try:
        cfg = load_config(args.config, overrides=overrides)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    logger.info(f"Processing inventory from: {cfg.input_path}")

    try:
        summary = run(cfg)
    except ProcessingError as e:
        label = _ERROR_LABELS.get(type(e), "processing")
        logger.error(f"{label}: {e}")
        if isinstance(e, MissingDataFileError) and e.example_path is not None:
            logger.info(f"Fill in {e.example_path.name} and save it as {cfg.data_path.name}, then run again")
        return EXIT_FATAL

    logger.info(
        f"Created {summary.listings_created} listings in {summary.output_directory} "
        f"({summary.skipped_rows} rows skipped, {summary.photos_matched} photos matched)"
    )
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(summary)[len("SUMMARY "):])

    if args.open_preview and summary.preview_path is not None:
        webbrowser.open(summary.preview_path.resolve().as_uri())

    return EXIT_SUCCESS
