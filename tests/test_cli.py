from datetime import datetime, timezone
from json import loads

import pytest

from editorial_backend import cli
from editorial_backend.cli import argument_parser, run, select_journal
from editorial_backend.db.backends import MemoryBackend
from editorial_backend.db.session import Storage
from editorial_backend.seed import initialize_seed_data
from editorial_backend.storage import StorageError

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def storage():
    return Storage(MemoryBackend(), prefix="ojs_")


@pytest.fixture
def seeded(storage):
    initialize_seed_data(storage, now=NOW)
    return storage


def execute(storage, *argv):
    return run(argument_parser(list(argv)), storage)


class TestCommands:
    def test_seed(self, storage):
        assert execute(storage, "seed") == "Demo data initialized"
        assert execute(storage, "seed") == "Journals already present, nothing to do"

    def test_stats(self, seeded):
        report = execute(seeded, "stats")
        assert report.startswith("Report: IJCS")
        assert "'totalSubmissions': 1" in report

    def test_stats_without_journal(self, storage):
        with pytest.raises(ValueError):
            execute(storage, "stats")

    def test_submissions(self, seeded):
        report = execute(seeded, "submissions", "--search", "machine", "--stage", "review")
        lines = report.splitlines()
        assert lines[0] == "1 submissions in IJCS"
        assert lines[1].startswith("submission-1\treview\treview")

    def test_submissions_filtered_out(self, seeded):
        assert execute(seeded, "submissions", "--status", "published") == "0 submissions in IJCS"

    def test_login_whoami_logout(self, seeded):
        assert execute(seeded, "login", "author@university.edu") == "Welcome back, John Smith"
        assert execute(seeded, "whoami") == "John Smith <author@university.edu> (author)"
        assert execute(seeded, "logout") == "Signed out"
        assert execute(seeded, "whoami") == "Not signed in"

    def test_login_unknown(self, seeded):
        with pytest.raises(ValueError):
            execute(seeded, "login", "ghost@example.org")

    def test_export_import(self, seeded, tmp_path):
        path = tmp_path / "snapshot.json"
        execute(seeded, "export", str(path))
        assert len(loads(path.read_text())["users"]) == 3

        other = Storage(MemoryBackend(), prefix="ojs_")
        report = execute(other, "import", str(path))
        assert "'journals': 1" in report
        assert other.submissions.get_all() == seeded.submissions.get_all()

    def test_import_invalid_json(self, storage, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        with pytest.raises(StorageError):
            execute(storage, "import", str(path))

    def test_clear(self, seeded):
        assert execute(seeded, "clear") == "Store cleared"
        assert seeded.backend.keys() == []


class TestSelectJournal:
    def test_by_id(self, seeded):
        assert select_journal(seeded, "journal-1").initials == "IJCS"

    def test_unknown_id(self, seeded):
        with pytest.raises(ValueError):
            select_journal(seeded, "journal-2")


class TestEntryPoint:
    def test_entry_point(self, storage, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(cli.config, "log_file", str(tmp_path / "cli.log"))
        monkeypatch.setattr("sys.argv", ["editorial-backend", "seed"])
        monkeypatch.setattr(
            "editorial_backend.db.session.open_storage", lambda: storage
        )
        cli.entry_point()
        assert "Demo data initialized" in capsys.readouterr().out
        assert len(storage.users.get_all()) == 3

    def test_entry_point_error(self, storage, monkeypatch, tmp_path):
        monkeypatch.setattr(cli.config, "log_file", str(tmp_path / "cli.log"))
        monkeypatch.setattr("sys.argv", ["editorial-backend", "stats"])
        monkeypatch.setattr(
            "editorial_backend.db.session.open_storage", lambda: storage
        )
        with pytest.raises(SystemExit):
            cli.entry_point()

    def test_entry_point_unwritable_export(self, storage, monkeypatch, tmp_path):
        monkeypatch.setattr(cli.config, "log_file", str(tmp_path / "cli.log"))
        missing = tmp_path / "missing" / "snapshot.json"
        monkeypatch.setattr("sys.argv", ["editorial-backend", "export", str(missing)])
        monkeypatch.setattr(
            "editorial_backend.db.session.open_storage", lambda: storage
        )
        with pytest.raises(SystemExit) as ex:
            cli.entry_point()
        assert str(ex.value).startswith("Error:")

    def test_entry_point_missing_import(self, storage, monkeypatch, tmp_path):
        monkeypatch.setattr(cli.config, "log_file", str(tmp_path / "cli.log"))
        monkeypatch.setattr(
            "sys.argv", ["editorial-backend", "import", str(tmp_path / "absent.json")]
        )
        monkeypatch.setattr(
            "editorial_backend.db.session.open_storage", lambda: storage
        )
        with pytest.raises(SystemExit):
            cli.entry_point()
        assert storage.backend.keys() == []
