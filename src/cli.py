"""Command-line user management.

Usage:
    expense-adduser --user alice [--password secret] [--db expenses.db]

Without ``--password`` the password is prompted for (hidden on a terminal,
read as one line from stdin otherwise). Without ``--db`` the configured
``DATABASE_URL`` is used.
"""

import argparse
import getpass
import logging
import sys
from typing import TextIO

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.config import get_settings
from src.database import build_engine, init_db
from src.models.user import User
from src.services.auth import create_user, get_password_hash
from src.services.errors import ExpenseTrackerError, InvalidError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-adduser", description="Create a user account")
    parser.add_argument("--user", "-u", default="", help="Username")
    parser.add_argument(
        "--password", "-p", default="", help="Password (optional, will prompt if omitted)"
    )
    parser.add_argument(
        "--db", default=None, help="Database URL or SQLite file path (default: DATABASE_URL)"
    )
    return parser


def database_url_from_arg(db: str | None) -> str:
    """Accept either a SQLAlchemy URL or a bare SQLite file path."""
    if not db:
        return get_settings().database_url
    if "://" in db:
        return db
    return f"sqlite:///{db}"


def read_password(stdin: TextIO, stdout: TextIO) -> str:
    """Prompt for a password."""
    if stdin.isatty():
        return getpass.getpass("Password: ", stream=stdout)

    stdout.write("Password: ")
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise EOFError("no password given on stdin")
    stdout.write("\n")
    return line.rstrip("\r\n")


def add_user(db: Session, username: str, password: str) -> User:
    """Validate input and create the user."""
    if not password.strip():
        raise InvalidError("password cannot be empty")
    return create_user(db, username, get_password_hash(password))


def run(
    argv: list[str],
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    """Run the command and return the process exit code."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return int(e.code or 0)

    username = args.user.strip()
    if not username:
        parser.print_usage(stdout)
        stderr.write("Error: missing required flags: user\n")
        return 1

    password = args.password
    if not password:
        try:
            password = read_password(stdin, stdout)
        except (EOFError, OSError) as e:
            stderr.write(f"Error: failed to read password: {e}\n")
            return 1

    engine = build_engine(database_url_from_arg(args.db))
    try:
        init_db(bind=engine)
        db = sessionmaker(bind=engine)()
        try:
            user = add_user(db, username, password)
            stdout.write(f"User {user.username} created successfully with ID {user.id}\n")
        finally:
            db.close()
    except ExpenseTrackerError as e:
        stderr.write(f"Error: {e.message}\n")
        return 1
    except SQLAlchemyError as e:
        logger.debug(f"Database error: {e}")
        stderr.write(f"Error: failed to open database: {e}\n")
        return 1
    finally:
        engine.dispose()

    return 0


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
