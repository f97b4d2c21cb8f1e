"""Command line interface for aureate."""
from __future__ import annotations

import argparse
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import List, Optional

from aureate import __version__, bootstrap, registry
from aureate.core import ConversionContext, ConversionRunner
from aureate.errors import ConfigError, ConversionError
from aureate.export import open_sink
from aureate.ingestion import DialectConfig, resolve_sources
from aureate.settings import Settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def load_environment() -> None:
    candidates = []
    if env_file := os.getenv("ENV_FILE"):
        candidates.append(Path(env_file))
    candidates.append(Path(".env"))

    for path in candidates:
        if not path.exists():
            continue
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"')
                os.environ.setdefault(key, value)


def configure_logging(settings: Settings, *, verbosity: int = 0, quiet: bool = False) -> None:
    """Configure logging from an INI file or a basic stderr configuration."""

    config_candidates = []
    if settings.logging_config is not None:
        config_candidates.append(settings.logging_config)
    config_candidates.append(Path("logging.ini"))

    if not quiet and not verbosity:
        for config_path in config_candidates:
            if not config_path.exists():
                continue
            if config_path.suffix.lower() not in {".ini", ".cfg"}:
                print(
                    f"Skipping unsupported logging config {config_path}. Using default logging configuration.",
                    file=sys.stderr,
                )
                continue
            try:
                logging.config.fileConfig(config_path, disable_existing_loggers=False)
                return
            except Exception as exc:  # pragma: no cover - safety net for config errors
                print(
                    f"Failed to load logging config {config_path}: {exc}. Falling back to basic logging.",
                    file=sys.stderr,
                )
                break

    if quiet:
        level = logging.CRITICAL + 1
    elif verbosity:
        level = logging.DEBUG
    else:
        level = settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _split_inputs(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aureate",
        description="Utility for converting CSV to JSON/YAML.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        dest="verbose",
        action="count",
        default=0,
        help="Sets level of debug output",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Silences error messages")
    parser.add_argument(
        "-a",
        "--append",
        action="store_true",
        help="Append to output file, instead of overwriting (no effect on stdout)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=registry.names(),
        default=settings.output_format,
        help="Set output data format (default: %(default)s)",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        metavar="FILE",
        action="extend",
        type=_split_inputs,
        help="Input file path(s) separated by commas, with a '-' representing stdin",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Specify an output file path, defaults to stdout",
    )

    csv_group = parser.add_argument_group(
        "csv",
        "Settings related to fine-tuning the CSV reader. Options taking <CHAR> "
        "accept exactly one character; '\\t' means tab.",
    )
    csv_group.add_argument("-s", "--delimiter", metavar="CHAR", default=",", help="CSV delimiter")
    csv_group.add_argument("--quote", metavar="CHAR", default='"', help="CSV quote character")
    csv_group.add_argument("-e", "--escape", metavar="CHAR", help="CSV escape character")
    csv_group.add_argument("-c", "--comment", metavar="CHAR", help="CSV comment character")
    csv_group.add_argument(
        "-t",
        "--trim",
        metavar="SETTING",
        default="0",
        help="Whitespace trimming: 0|none, 1|leading, 2|trailing, 3|both",
    )
    csv_group.add_argument(
        "--disable-quotes",
        choices=("double", "all"),
        help="Disable quote handling, either for doubled quotes only or for all quotes",
    )
    csv_group.add_argument(
        "--flexible",
        action="store_true",
        help="Tolerate rows whose field count differs from the header",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_environment()
    settings = Settings.load()
    bootstrap()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(settings, verbosity=args.verbose, quiet=args.quiet)
    logger.info("CLI options loaded and logger started")

    runner = ConversionRunner(registry)
    try:
        output_format = runner.resolve(args.format)
        dialect = DialectConfig.from_options(
            delimiter=args.delimiter,
            quote=args.quote,
            escape=args.escape,
            comment=args.comment,
            trim=args.trim,
            disable_quotes=args.disable_quotes,
            flexible=args.flexible,
        )
        sources = resolve_sources(args.inputs)
        with open_sink(args.output, append=args.append, encoding=settings.encoding) as sink:
            context = ConversionContext(
                sources=sources,
                sink=sink,
                output_format=output_format,
                dialect=dialect,
                encoding=settings.encoding,
            )
            summary = runner.run(context)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG
    except ConversionError as exc:
        logger.error("Program exited with error: %s", exc)
        return EXIT_FAILURE

    logger.info(
        "Converted %d record(s) from %d source(s)",
        summary.records,
        len(summary.sources),
    )
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - entry point for CLI usage
    raise SystemExit(main())
