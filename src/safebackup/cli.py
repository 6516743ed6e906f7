"""Command line interface for safebackup."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .actionlog import ActionLog
from .config import REPORTERS, Settings, load_settings
from .errors import ConfigError
from .logging import configure_logging, get_logger
from .operations import CONFIRM_TOKEN, FileOperations
from .outcome import Action, Status
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)
from .session import Session
from .shell import InteractiveShell

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _exit_code(status: Status) -> int:
    return EXIT_FAILED if status is Status.FAILURE else EXIT_OK


def _backup_cmd(args: argparse.Namespace, session: Session) -> int:
    return _exit_code(session.run(Action.BACKUP, args.file).status)


def _restore_cmd(args: argparse.Namespace, session: Session) -> int:
    return _exit_code(session.run(Action.RESTORE, args.file).status)


def _delete_cmd(args: argparse.Namespace, session: Session) -> int:
    if args.yes:
        confirm = lambda _name: CONFIRM_TOKEN  # noqa: E731
    else:
        confirm = InteractiveShell(session).confirm_delete
    return _exit_code(session.run(Action.DELETE, args.file, confirm).status)


def _shell_cmd(args: argparse.Namespace, session: Session) -> int:
    return InteractiveShell(session).run()


def _install_reporter(name: str) -> None:
    if name == "json":
        set_reporter(JsonLinesReporter())
    elif name == "silent":
        set_reporter(SilentReporter())
    elif name == "rich":
        if sys.stderr.isatty():
            set_reporter(RichReporter())
        else:
            set_reporter(PlainReporter())
    else:  # plain
        set_reporter(PlainReporter())


def build_session(settings: Settings) -> Session:
    ops = FileOperations(
        settings.root, max_name_length=settings.max_name_length
    )
    return Session(ops, ActionLog(settings.resolve_log_path()))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="safebackup",
        description="Back up, restore or delete a file in the working directory",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=REPORTERS,
        default=None,
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    p.add_argument(
        "--root",
        type=Path,
        help="Sandbox directory (default: current working directory)",
    )
    p.add_argument(
        "--config",
        type=Path,
        help="YAML settings file (default: safebackup.yaml in the root)",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        help="Action log, relative to the root (default: logfile.txt)",
    )
    sub = p.add_subparsers(dest="cmd")

    b = sub.add_parser("backup", help="Copy FILE to FILE.bak")
    b.add_argument("file")
    b.set_defaults(func=_backup_cmd)

    r = sub.add_parser("restore", help="Overwrite FILE with FILE.bak")
    r.add_argument("file")
    r.set_defaults(func=_restore_cmd)

    d = sub.add_parser("delete", help="Delete FILE after confirmation")
    d.add_argument("file")
    d.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not prompt for confirmation",
    )
    d.set_defaults(func=_delete_cmd)

    s = sub.add_parser("shell", help="Interactive prompt (default)")
    s.set_defaults(func=_shell_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(
            root=args.root,
            config_path=args.config,
            overrides={"reporter": args.reporter, "log_file": args.log_file},
        )
        _install_reporter(settings.reporter)
        set_verbosity(args.verbose)
        configure_logging(args.verbose)
        session = build_session(settings)
    except ConfigError as exc:
        get_reporter().error(str(exc))
        return EXIT_USAGE
    get_logger().debug("sandbox root: %s", settings.root)
    func = getattr(args, "func", _shell_cmd)
    try:
        return func(args, session)
    finally:
        get_reporter().flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
