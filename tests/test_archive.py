"""Tests for archive folder naming and ArchiveWorker."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from helpers import archived_path, make_mail, make_mail_by_name, make_mail_folder, make_subscriptions
from maildir_cleaner.errors import InvalidArchivePatternError, SubscriptionsUnsupportedError
from maildir_cleaner.models.archive_pattern import (
    ArchiveFolderNameGenerator,
    ArchivePattern,
    create_generator,
)
from maildir_cleaner.models.message import Message
from maildir_cleaner.workers.archive_worker import ArchiveWorker, archive


def _msg(folder_name: str, delivered: datetime) -> Message:
    return Message(
        full_path="/m/x",
        folder_name=folder_name,
        sub_dir_name="new",
        file_name="x",
        size=1,
        delivery_time=delivered,
    )


JAN_15_2021 = datetime(2021, 1, 15, tzinfo=timezone.utc)


class TestArchiveFolderNameGenerator:
    def test_keep_inbox_goes_to_base(self):
        gen = create_generator("keep", "Archived")
        assert gen.generate(_msg("", JAN_15_2021)) == "Archived"

    def test_keep_preserves_hierarchy(self):
        gen = create_generator("keep", "Archived")
        assert gen.generate(_msg("A.B", JAN_15_2021)) == "Archived.A.B"

    def test_year(self):
        gen = create_generator("year", "Archived")
        assert gen.generate(_msg("A.B", JAN_15_2021)) == "Archived.2021"
        assert gen.generate(_msg("", JAN_15_2021)) == "Archived.2021"

    def test_month_zero_padded(self):
        gen = create_generator("month", "Archived")
        assert gen.generate(_msg("A", JAN_15_2021)) == "Archived.2021.01"

    def test_year_uses_utc(self):
        # 2021-01-01 08:00 in UTC+09:00 is still 2020 in UTC
        local = datetime(2021, 1, 1, 8, 0, tzinfo=timezone(timedelta(hours=9)))
        gen = create_generator("month", "Archived")
        assert gen.generate(_msg("", local)) == "Archived.2020.12"

    def test_base_name(self):
        assert create_generator("year", "アーカイブ").base_name == "アーカイブ"

    def test_pattern_enum(self):
        assert create_generator("month", "Archived").pattern is ArchivePattern.MONTH

    def test_invalid_pattern(self):
        with pytest.raises(InvalidArchivePatternError) as exc_info:
            create_generator("weekly", "Archived")
        assert "invalid archive-pattern 'weekly'" in str(exc_info.value)


@pytest.fixture
def root(tmp_path):
    make_mail_folder(tmp_path)
    return tmp_path


class TestArchiveWorker:
    def test_keep_scenario(self, root):
        subs = make_subscriptions(root, "A\nA.B\n")
        make_mail_folder(root, "A")
        mail = make_mail(root, "A", "cur", 100)

        [moved] = archive(str(root), [mail], ArchiveFolderNameGenerator("Archived"))

        expected_path = archived_path(root, "Archived.A", mail)
        assert expected_path.exists()
        assert not root.joinpath(mail.full_path).exists()
        assert moved.full_path == str(expected_path)
        assert moved.folder_name == "Archived.A"
        assert (moved.sub_dir_name, moved.file_name, moved.size, moved.delivery_time) == (
            mail.sub_dir_name, mail.file_name, mail.size, mail.delivery_time,
        )
        assert subs.read_text() == "A\nA.B\nArchived\nArchived.A\n"

    def test_inbox_and_subfolders(self, root):
        subs = make_subscriptions(root, "A\nA.B\n&MMYwuTDI-1\n")
        for name in ("A", "A.B", "テスト1"):
            make_mail_folder(root, name)
        mails = [
            make_mail(root, "", "new", 11),
            make_mail(root, "A.B", "cur", 12),
            make_mail(root, "テスト1", "cur", 13),
        ]

        moved = archive(str(root), mails, create_generator("keep", "Archived"))

        assert [m.folder_name for m in moved] == ["Archived", "Archived.A.B", "Archived.テスト1"]
        for before, after in zip(mails, moved):
            assert archived_path(root, after.folder_name, before).exists()
        assert subs.read_text() == (
            "A\nA.B\n&MMYwuTDI-1\n"
            "Archived\nArchived.A\nArchived.A.B\nArchived.&MMYwuTDI-1\n"
        )

    def test_year_pattern_destination(self, root):
        make_subscriptions(root)
        mail = make_mail_by_name(root, "", "cur", "1610668800.M1P1.host:2,S")

        [moved] = archive(str(root), [mail], create_generator("year", "Archived"))

        assert moved.folder_name == "Archived.2021"
        assert archived_path(root, "Archived.2021", mail).exists()

    def test_stops_at_first_failure_without_rollback(self, root):
        make_subscriptions(root)
        first = make_mail(root, "", "new", 100)
        second = make_mail(root, "", "new", 101)
        third = make_mail(root, "", "new", 102)
        root.joinpath(second.full_path).unlink()

        with pytest.raises(FileNotFoundError):
            archive(str(root), [first, second, third], create_generator("keep", "Archived"))

        assert archived_path(root, "Archived", first).exists()
        assert root.joinpath(third.full_path).exists()

    def test_missing_subscriptions_moves_nothing(self, root):
        mail = make_mail(root, "", "new", 100)
        with pytest.raises(SubscriptionsUnsupportedError):
            archive(str(root), [mail], create_generator("keep", "Archived"))
        assert root.joinpath(mail.full_path).exists()

    def test_progress_callback(self, root):
        make_subscriptions(root)
        mails = [make_mail(root, "", "new", 100), make_mail(root, "", "cur", 200)]
        on_progress = MagicMock()

        ArchiveWorker(str(root), create_generator("month", "Old"), on_progress=on_progress).run(mails)

        assert [c.args for c in on_progress.call_args_list] == [(1, 2), (2, 2)]

    def test_empty_list(self, root):
        assert archive(str(root), [], create_generator("keep", "Archived")) == []
