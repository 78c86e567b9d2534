"""Command-line entry point.

Usage::

    nuxt-starter                  # asks for a project name
    nuxt-starter ./my-app
    nuxt-starter ./my-app --force
    python -m nuxt_starter ./my-app
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from .config import StarterConfig
from .prompts import Prompter
from .session import StarterSession, ask_target
from .utils import StarterError, log, print_error, print_warning, resolve_target, set_color

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nuxt-starter",
        description="Scaffold a Nuxt 3 project and install its dependencies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nuxt-starter\n"
            "  nuxt-starter ./my-app\n"
            "  nuxt-starter ./my-app --force\n"
        ),
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Target directory (asks for a project name if omitted)",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        default=None,
        help="Install even if the target directory is not empty",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable coloured output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the scaffolder and return the process exit status.

    ``0`` on success or when the user declines, ``1`` on any reported
    failure, ``130`` on Ctrl+C.
    """
    args = build_arg_parser().parse_args(argv)
    if args.color is False:
        set_color(False)

    prompter = Prompter()
    try:
        target = resolve_target(args.path) if args.path else ask_target(prompter)
        settings = StarterConfig.from_env(target, force=args.force, color=args.color)
        if not settings.color:
            set_color(False)

        asyncio.run(StarterSession(settings, prompter).run())
    except KeyboardInterrupt:
        log("")
        return EXIT_INTERRUPTED
    except StarterError as exc:
        log("")
        print_error(f"FATAL: {exc}")
        hint = getattr(exc, "hint", None)
        if hint:
            print_warning(hint)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
