"""maildir-cleaner CLI — search, delete or archive old mails in a Maildir."""
from __future__ import annotations

import argparse
import logging
import platform
import sys
from typing import Callable, TextIO

from maildir_cleaner import config
from maildir_cleaner.errors import MaildirCleanerError
from maildir_cleaner.models.archive_pattern import ArchiveFolderNameGenerator, ArchivePattern, create_generator
from maildir_cleaner.models.message import Message
from maildir_cleaner.utils.report import render_summary
from maildir_cleaner.workers.archive_worker import archive
from maildir_cleaner.workers.collector import Collector
from maildir_cleaner.workers.delete_worker import delete

logger = logging.getLogger(__name__)


def _age(value: str) -> int:
    try:
        days = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid age '{value}'") from None
    if days < 0:
        raise argparse.ArgumentTypeError(f"age must be 0 or more, got {days}")
    return days


def _add_target_args(p: argparse.ArgumentParser, verb: str) -> None:
    p.add_argument("-d", "--dir", required=True, help="User maildir path")
    p.add_argument(
        "-a", "--age", type=_age, required=True,
        help=f"The number of age days to be {verb}. If you specify 10, mail that has "
             f"been in the mailbox for more than 10 days since its arrival will be {verb}.",
    )
    p.add_argument(
        "--exclude-folder", action="append", dest="exclude_folders",
        default=None, metavar="NAME",
        help="The name of the folder to exclude (subfolders included). Repeatable.",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="maildir-cleaner",
        description="Cleanup maildir — search, delete or archive old mails",
    )
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log progress (-vv for debug output)")
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    _add_target_args(sub.add_parser("search", help="Search old mails"), "displayed")
    _add_target_args(sub.add_parser("delete", help="Delete old mails"), "deleted")

    archive_p = sub.add_parser("archive", help="Archive old mails")
    _add_target_args(archive_p, "archived")
    archive_p.add_argument(
        "--archive-folder", default=config.DEFAULT_ARCHIVE_FOLDER,
        help=f"Archive folder name (default: {config.DEFAULT_ARCHIVE_FOLDER})",
    )
    archive_p.add_argument(
        "--archive-pattern", default=config.DEFAULT_ARCHIVE_PATTERN,
        metavar="{" + ",".join(ap.value for ap in ArchivePattern) + "}",
        help=f"Archive pattern (default: {config.DEFAULT_ARCHIVE_PATTERN})",
    )

    sub.add_parser("version", help="Show maildir-cleaner version")
    return p


# ── Commands ──────────────────────────────────────────────────────────────────

def _progress_logger(verb: str) -> Callable[[int, int], None]:
    def on_progress(done: int, total: int) -> None:
        logger.info("%s %d/%d", verb, done, total)
    return on_progress


def _search(maildir: str, age: int, exclude_folders: list[str], out: TextIO) -> list[Message]:
    out.write(f"Starts searching for the target mails. maildir: {maildir} age: {age}\n")
    messages = Collector(age, exclude_folders).collect(maildir)

    if not messages:
        out.write("Completed search. There were no target mails.\n")
        return messages

    out.write("Completed search. The target mails are listed below.\n")
    render_summary(messages, out)
    return messages


def run_search(maildir: str, age: int, exclude_folders: list[str], out: TextIO) -> None:
    _search(maildir, age, exclude_folders, out)


def run_delete(maildir: str, age: int, exclude_folders: list[str], out: TextIO) -> None:
    messages = _search(maildir, age, exclude_folders, out)
    if not messages:
        return

    out.write("Starts deleting mails.\n")
    delete(maildir, messages, on_progress=_progress_logger("Deleted"))
    out.write("Completed deletion.\n")


def run_archive(
    maildir: str,
    age: int,
    generator: ArchiveFolderNameGenerator,
    exclude_folders: list[str],
    out: TextIO,
) -> None:
    # The archive tree itself is never a source
    messages = _search(maildir, age, [*exclude_folders, generator.base_name], out)
    if not messages:
        return

    out.write("Starts archiving mails.\n")
    archived = archive(maildir, messages, generator, on_progress=_progress_logger("Archived"))
    out.write("Completed archive. The archived mails are listed below.\n")
    render_summary(archived, out)


def run_version(out: TextIO) -> None:
    out.write(
        f"Version: {config.APP_VERSION}\n"
        f"Python: {platform.python_version()}\n"
        f"OS: {platform.system()}\n"
        f"Arch: {platform.machine()}\n"
    )


def main(argv: list[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Run one command; returns the process exit code."""
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG if args.verbose > 1 else logging.INFO)

    if args.command is None:
        parser.print_help(out)
        return 0
    if args.command == "version":
        run_version(out)
        return 0

    exclude_folders = args.exclude_folders
    if exclude_folders is None:
        exclude_folders = list(config.DEFAULT_EXCLUDE_FOLDERS)

    try:
        if args.command == "search":
            run_search(args.dir, args.age, exclude_folders, out)
        elif args.command == "delete":
            run_delete(args.dir, args.age, exclude_folders, out)
        elif args.command == "archive":
            generator = create_generator(args.archive_pattern, args.archive_folder)
            run_archive(args.dir, args.age, generator, exclude_folders, out)
    except (MaildirCleanerError, OSError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"ERROR: {exc}", file=err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
