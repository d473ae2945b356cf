import argparse
import logging
import signal
import sys
from pathlib import Path
from textwrap import dedent

from .config import AppConfig, parse_branch_candidates
from .errors import UsageError
from .models import RunStatus, WarningKind
from .pipeline import run_extraction, validate_arguments

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

_WARNING_TEXT = {
    WarningKind.BRANCH_RESOLUTION: "no branch could be checked out",
    WarningKind.SUBDIRECTORY_MISSING: "the subdirectory was not found in the repository",
}

logger = logging.getLogger(__name__)


class _ExtractArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ExtractArgumentParser(
        prog="git-subdir-extract",
        usage="%(prog)s [options] <repository-url> <subdirectory>",
        description="Extract one subdirectory of a remote git repository into the current directory.",
        epilog="Example: git-subdir-extract https://github.com/user/infra.git services/backend/api",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="ARG",
        help="Repository URL followed by the subdirectory path to extract.",
    )
    parser.add_argument(
        "--git-binary",
        help="git executable to invoke (overrides GIT_BINARY).",
    )
    parser.add_argument(
        "--branches",
        help="Comma-separated branch names to try before the default branch "
        "(overrides SPARSE_BRANCH_CANDIDATES, default: main,master).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when nothing was extracted (overrides STRICT_EXTRACTION).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log git commands and their output.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    return parser


def _raise_system_exit(signum, _frame) -> None:
    raise SystemExit(128 + signum)


def install_signal_handlers() -> None:
    """Turn termination signals into SystemExit so workspace cleanup still runs."""
    for name in ("SIGTERM", "SIGHUP"):
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(signum, _raise_system_exit)


def _log_level(args: argparse.Namespace, config: AppConfig) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    return getattr(logging, config.log_level, logging.INFO)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = AppConfig()
    if args.git_binary:
        config.git_binary = args.git_binary
    if args.branches is not None:
        config.branch_candidates = parse_branch_candidates(args.branches)
    if args.strict:
        config.strict = True

    logging.basicConfig(
        level=_log_level(args, config),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config.validate()
        request = validate_arguments(args.inputs)
    except (UsageError, ValueError) as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        print(parser.epilog, file=sys.stderr)
        return EXIT_FAILURE

    install_signal_handlers()
    try:
        outcome = run_extraction(request, config, working_dir=Path.cwd())
    except KeyboardInterrupt:
        logger.error("Interrupted; temporary workspace removed.")
        return EXIT_INTERRUPTED

    if outcome.status == RunStatus.FAILURE:
        return EXIT_FAILURE

    if outcome.destination is not None:
        ref = f"branch {outcome.branch}" if outcome.branch else "default branch"
        summary = dedent(
            f"""\
            Extracted '{request.subdirectory_path}' from {request.repository_url} ({ref})
              - {outcome.destination}
            """
        ).rstrip()
    else:
        summary = f"Nothing extracted for '{request.subdirectory_path}'."
    for warning in outcome.warnings:
        summary += f"\n(warning) {_WARNING_TEXT[warning]}"
    print(summary)

    if config.strict and not outcome.extracted:
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
