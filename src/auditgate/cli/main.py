"""CLI entrypoint for auditgate."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from auditgate import __version__
from auditgate.cli.handlers import handle_gate
from auditgate.constants.branding import CLI_DESCRIPTION
from auditgate.constants.config import STDIN_MARKER
from auditgate.constants.reporting import VALID_OUTPUT_FORMATS
from auditgate.constants.severity import SEVERITY_LEVELS


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="auditgate",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Path to `npm audit --json` output, or - for standard input (default: -)",
    )
    parser.add_argument(
        "-i",
        "--input",
        dest="input_flag",
        default=None,
        help="Same as the positional INPUT",
    )
    parser.add_argument(
        "-s",
        "--min-severity",
        choices=SEVERITY_LEVELS,
        default=None,
        help="Lowest severity that blocks the build (default: high)",
    )
    parser.add_argument(
        "-a",
        "--allow",
        action="append",
        default=[],
        help="Accepted advisory id (repeat flag for multiple values)",
    )
    parser.add_argument(
        "-A",
        "--allowlist-file",
        type=Path,
        default=None,
        help="JSON or YAML allowlist file (default: .audit-allowlist.json when present)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(VALID_OUTPUT_FORMATS),
        default=None,
        help="Report format: human (default), json, or sarif",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Render the report but always exit 0 for the verdict",
    )
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file (default: ./auditgate.yaml)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Also write the report to this file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics on stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.input is not None and args.input_flag is not None:
        parser.error("give the input either positionally or with --input, not both")
    args.source = args.input_flag or args.input or STDIN_MARKER

    return handle_gate(args)


if __name__ == "__main__":
    raise SystemExit(main())
