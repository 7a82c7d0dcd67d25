"""CLI entrypoints for modmap commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .converter import Converter
from .logging import configure_logging, get_logger
from .plugins import discover_plugins
from .plugins.module_map import OPTION_PATTERN, OPTION_README_NAME
from .serialization import TreeFormatError, dump_tree, load_declarations, write_tree


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modmap",
        description="Map source folders onto logical modules in a reflection tree.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    map_parser = subparsers.add_parser(
        "map",
        help="Rename, merge and annotate modules of a reflection tree.",
    )
    _add_verbose_option(map_parser, suppress_default=True)
    map_parser.add_argument("tree", help="Path to the reflection tree JSON document.")
    map_parser.add_argument(
        "--pattern",
        default=None,
        help="Regular expression whose first capture group names the module.",
    )
    map_parser.add_argument(
        "--config",
        default=".",
        help="Path to .modmap.yml or the directory containing it (defaults to current directory).",
    )
    map_parser.add_argument(
        "--readme-name",
        default=None,
        help="File name of the package description document (defaults to README.md).",
    )
    map_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors (ignored with --verbose).",
    )
    map_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records, with timestamps, to this file.",
    )
    map_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the reconciled tree here instead of stdout.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for modmap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        name, declarations = load_declarations(Path(args.tree))
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except TreeFormatError as exc:
        parser.exit(1, f"modmap {args.command} failed: {exc}\n")

    if args.command == "map":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"modmap map failed: {exc}\n")
        options = config.options()
        if args.pattern is not None:
            options[OPTION_PATTERN] = args.pattern
        if args.readme_name:
            options[OPTION_README_NAME] = args.readme_name
        try:
            converter = Converter(discover_plugins(config.plugins.enabled))
            project = converter.convert(declarations, options, name=name)
        except ValueError as exc:
            parser.exit(1, f"modmap map failed: {exc}\n")
        for problem in project.check_links():
            get_logger("cli").warning("Inconsistent tree link: %s", problem)
        if args.output:
            write_tree(project, Path(args.output))
            print(f"Reconciled tree written to {args.output}")
        else:
            print(json.dumps(dump_tree(project), indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
