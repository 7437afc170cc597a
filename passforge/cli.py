"""PassForge command-line interface.

Usage examples:
    python -m passforge generate -n 20 -c 5
    python -m passforge generate --no-symbols --analyze
    python -m passforge analyze 'Tr0ub4dor&3'
"""

import argparse
import asyncio
import sys

from passforge import (
    DEFAULT_LENGTH,
    AnalysisError,
    GenerationConfig,
    ValidationError,
    analyze_strength,
    generate_password,
)
from passforge.config import get_settings
from passforge.log import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="Generate strong passwords and get an AI strength analysis.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── generate ───────────────────────────────────────────────────────
    gen_p = sub.add_parser("generate", help="Generate secure passwords")
    gen_p.add_argument(
        "-n", "--length", type=int, default=DEFAULT_LENGTH,
        help=f"Password length, 8-64 (default: {DEFAULT_LENGTH})",
    )
    gen_p.add_argument("--no-uppercase", action="store_true")
    gen_p.add_argument("--no-lowercase", action="store_true")
    gen_p.add_argument("--no-numbers", action="store_true")
    gen_p.add_argument("--no-symbols", action="store_true")
    gen_p.add_argument(
        "-c", "--count", type=int, default=1,
        help="Number of passwords to generate (default: 1)",
    )
    gen_p.add_argument(
        "-a", "--analyze",
        action="store_true",
        help="Include AI strength analysis in output",
    )

    # ── analyze ────────────────────────────────────────────────────────
    an_p = sub.add_parser("analyze", help="Analyze password strength with AI")
    an_p.add_argument("passwords", nargs="+", help="Passwords to analyze")

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "analyze":
        return _cmd_analyze(args)

    parser.print_help()
    return 0


def _print_result(pwd: str) -> bool:
    try:
        result = asyncio.run(analyze_strength(pwd))
    except AnalysisError as exc:
        print(f"            ! Analysis failed: {exc}", file=sys.stderr)
        return False

    filled = round(result.strength_score * 10)
    bar = "#" * filled + "-" * (10 - filled)
    print(f"            Strength: [{bar}] {result.label} ({result.percent}%)")
    for line in result.analysis.splitlines():
        if line.strip():
            print(f"            {line.strip()}")
    return True


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        config = GenerationConfig(
            length=args.length,
            include_uppercase=not args.no_uppercase,
            include_lowercase=not args.no_lowercase,
            include_numbers=not args.no_numbers,
            include_symbols=not args.no_symbols,
        )
        passwords = [generate_password(config) for _ in range(args.count)]
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    failed = False
    for pwd in passwords:
        print(f"  {pwd}")
        if args.analyze and not _print_result(pwd):
            failed = True

    return 1 if failed else 0


def _cmd_analyze(args: argparse.Namespace) -> int:
    passwords = [p for p in args.passwords if p]
    if not passwords:
        print("Error: provide at least one non-empty password", file=sys.stderr)
        return 1

    failed = False
    for pwd in passwords:
        print(f"  '{pwd}'")
        if not _print_result(pwd):
            failed = True

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
