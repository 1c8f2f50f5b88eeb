"""Console access to the editorial store

1. ``seed`` writes the demonstration dataset into an empty store
2. ``stats`` and ``submissions`` report on a journal (the first one by default)
3. ``login``, ``logout`` and ``whoami`` manage the current user
4. ``export`` and ``import`` move every collection through a JSON snapshot
5. ``clear`` empties the store
"""

import argparse
from json import JSONDecodeError, dump, load
from logging import basicConfig, getLogger
from typing import List, Optional

from .auth import login
from .config import config
from .db.session import Storage, connect_to_store
from .filters import filter_submissions
from .models import Journal
from .queries import Queries
from .seed import initialize_seed_data
from .storage import StorageError

logger = getLogger(__name__)


def argument_parser(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Manage the records of the editorial dashboard"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("seed", help="Load the demonstration dataset if empty")

    stats = commands.add_parser("stats", help="Show dashboard statistics")
    stats.add_argument("-j", "--journal", help="Journal id (default: first)")

    submissions = commands.add_parser("submissions", help="List submissions")
    submissions.add_argument("-j", "--journal", help="Journal id (default: first)")
    submissions.add_argument("-s", "--search", help="Search title and abstract")
    submissions.add_argument("--stage", default="all", help="Workflow stage")
    submissions.add_argument("--status", default="all", help="Submission status")

    sign_in = commands.add_parser("login", help="Sign in by email")
    sign_in.add_argument("email")

    commands.add_parser("logout", help="Clear the current user")
    commands.add_parser("whoami", help="Show the current user")

    export = commands.add_parser("export", help="Write every collection to a JSON file")
    export.add_argument("path")

    importer = commands.add_parser("import", help="Append the records of a JSON file")
    importer.add_argument("path")

    commands.add_parser("clear", help="Delete every collection")

    return parser.parse_args(argv)


def select_journal(storage: Storage, journal_id: Optional[str]) -> Journal:
    if journal_id:
        journal = storage.journals.get_by_id(journal_id)
        if journal is None:
            raise ValueError(f"Journal {journal_id} not found")
        return journal
    journals = storage.journals.get_all()
    if not journals:
        raise ValueError("No journals found, run the seed command first")
    return journals[0]


def run(args: argparse.Namespace, storage: Storage) -> str:
    """Executes one command and returns the report to print"""
    if args.command == "seed":
        if initialize_seed_data(storage):
            return "Demo data initialized"
        return "Journals already present, nothing to do"

    elif args.command == "stats":
        journal = select_journal(storage, args.journal)
        stats = Queries(storage).dashboard_stats(journal.id)
        return f"Report: {journal.initials} {stats.to_json_dict()}"

    elif args.command == "submissions":
        journal = select_journal(storage, args.journal)
        submissions = filter_submissions(
            Queries(storage).submissions_by_journal(journal.id),
            search=args.search,
            stage=args.stage,
            status=args.status,
        )
        lines = [f"{len(submissions)} submissions in {journal.initials}"]
        lines.extend(
            f"{s.id}\t{s.stage}\t{s.status}\t{s.title}" for s in submissions
        )
        return "\n".join(lines)

    elif args.command == "login":
        user = login(storage, args.email)
        if user is None:
            raise ValueError(f"No account found with email {args.email}")
        return f"Welcome back, {user.full_name}"

    elif args.command == "logout":
        storage.auth.logout()
        return "Signed out"

    elif args.command == "whoami":
        user = storage.auth.get_current_user()
        if user is None:
            return "Not signed in"
        return f"{user.full_name} <{user.email}> ({', '.join(user.roles)})"

    elif args.command == "export":
        snapshot = storage.dump_snapshot()
        with open(args.path, "w", encoding="utf-8") as json_file:
            dump(snapshot, json_file, indent=2)
        counts = {name: len(records) for name, records in snapshot.items()}
        return f"Report: exported {counts}"

    elif args.command == "import":
        with open(args.path, "r", encoding="utf-8") as json_file:
            try:
                snapshot = load(json_file)
            except JSONDecodeError as ex:
                raise StorageError(f"{args.path} is not valid JSON: {ex}") from ex
        return f"Report: imported {storage.load_snapshot(snapshot)}"

    elif args.command == "clear":
        storage.clear()
        return "Store cleared"

    else:
        raise ValueError(f"Unknown command {args.command}")


@connect_to_store
def entry_point(storage: Storage):
    """This is the console entry point to the programme"""
    basicConfig(
        filename=config.log_file,
        filemode="w",
        encoding="utf-8",
        level=config.logging_level,
    )
    args = argument_parser()
    try:
        report = run(args, storage)
    except (ValueError, OSError) as ex:
        logger.error(f"Command {args.command} failed: {ex}")
        raise SystemExit(f"Error: {ex}")
    logger.info(report)
    print(report)
    return report


if __name__ == "__main__":
    entry_point()
