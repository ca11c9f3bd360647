"""Command-line reader for key=value config files.

Loads a file and prints the example values ``int_val``, ``string_val``,
``float_val`` and ``double_val``, or every entry with ``--dump``.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config.errors import ConfigLoadError
from .config.settings import ParserSettings, SettingsLoader
from .config.store import ConfigStore
from .utils.logging_setup import setup_logging, shutdown_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvconf",
        description="Read a key=value config file and print typed values.",
    )
    parser.add_argument("config", type=Path, help="Path to the config file")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML file with parser settings (line/value limits, comment marker)",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="List every entry as key, kind and value",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Also write rotating log files to this directory",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="With --log-dir, also write a JSON-lines log file",
    )
    return parser


def format_summary(store: ConfigStore) -> str:
    """One-line summary of the well-known example keys."""
    ival = store.get_int("int_val", 0)
    sval = store.get_string("string_val", "")
    fval = store.get_float("float_val", 0.0)
    dval = store.get_double("double_val", 0.0)
    return f"ival={ival}, sval={sval}, fval={fval:f}, dval={dval:f}"


def format_dump(store: ConfigStore) -> str:
    return "\n".join(f"{entry.key}\t{entry.kind.value}\t{entry.value}" for entry in store)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        log_dir=str(args.log_dir) if args.log_dir else None,
        log_level=args.log_level,
        enable_json=args.log_json,
    )

    try:
        settings = SettingsLoader(args.settings).load_settings() if args.settings else ParserSettings()
        with ConfigStore.load(args.config, settings) as store:
            output = format_dump(store) if args.dump else format_summary(store)
    except ConfigLoadError as e:
        print(f"Error: Could not parse configuration file: {e}", file=sys.stderr)
        return 1
    finally:
        shutdown_logging()

    if output:
        print(output)
    return 0
