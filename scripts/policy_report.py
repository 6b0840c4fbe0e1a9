"""
Manual report runner for a policy catalog.

Loads a JSON catalog, optionally applies a compatibility range and
explicit values, then prints every policy's info block (or its fields
as JSON). Lifecycle diagnostics go to stderr through logging.

Usage:
    python scripts/policy_report.py policies.json
    python scripts/policy_report.py policies.json --minimum 2.5
    python scripts/policy_report.py policies.json --minimum 1.0 --maximum 3.1 --json
    python scripts/policy_report.py policies.json --set CMP0002=OLD --get CMP0002
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from policykit.config import EngineSettings
from policykit.policy import (
    PolicyEngine,
    PolicyError,
    read_catalog_entries,
    register_catalog,
)

EXIT_OK = 0
EXIT_POLICY_ERROR = 2


def _parse_assignment(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(
            f"expected NAME=VALUE, got '{text}'"
        )
    return name, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("catalog", help="JSON policy catalog")
    parser.add_argument("--minimum", help="bulk-activate up to this version")
    parser.add_argument("--maximum", help="force OLD above this version")
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        type=_parse_assignment,
        metavar="NAME=VALUE",
        help="explicit value, applied after --minimum/--maximum",
    )
    parser.add_argument(
        "--get",
        dest="reads",
        action="append",
        default=[],
        metavar="NAME",
        help="read a policy (emits its lifecycle diagnostic)",
    )
    parser.add_argument(
        "--json", action="store_true", help="print fields as JSON"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="log engine activity"
    )
    return parser


def run(args: argparse.Namespace) -> str:
    if args.maximum and not args.minimum:
        raise argparse.ArgumentTypeError("--maximum requires --minimum")

    engine = PolicyEngine(settings=EngineSettings.from_environ())
    register_catalog(engine, read_catalog_entries(args.catalog))

    if args.minimum:
        engine.version(args.minimum, args.maximum)

    for name, value in args.assignments:
        engine.set(name, value)

    reads = {name: engine.get(name) for name in args.reads}

    if args.json:
        return json.dumps(
            {
                "policies": [
                    engine.get_fields(name).to_dict()
                    for name in engine.policies()
                ],
                "reads": reads,
            },
            indent=2,
            sort_keys=True,
        )

    blocks = [engine.info(name) for name in engine.policies()]
    blocks.extend(f"{name}: {value}" for name, value in reads.items())
    return "\n\n".join(blocks)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        output = run(args)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except (PolicyError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_POLICY_ERROR

    print(output)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
