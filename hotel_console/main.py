import argparse
import logging
import sys
from typing import List, Optional, TextIO

from config import Config
from hotel_console.cli.line_input import EndOfInput, LineInput
from hotel_console.cli.presenter import Presenter
from hotel_console.constants.response_messages import (CONNECTING,
                                                       DISCONNECTING,
                                                       ERROR_CONNECTION_FAILED,
                                                       ERROR_CONNECTION_HINT,
                                                       ERROR_UNEXPECTED_FAILURE,
                                                       GOODBYE, GREETING, USAGE)
from hotel_console.database.db import DatabaseClient, DatabaseConnectionError
from hotel_console.database.models import create_schema
from hotel_console.services.query_service import QueryService
from hotel_console.session.controller import SessionController
from hotel_console.session.schema import Outcome, Session
from hotel_console.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hotel-console",
        description="Text menu front end for the hotel management database.",
    )
    parser.add_argument("dbname", help="name of the database")
    parser.add_argument("port", help="port the database server listens on")
    parser.add_argument("user", help="database user name")
    return parser


def run_shell(controller: SessionController, line_input: LineInput, out: TextIO) -> Session:
    """
    Read one choice at a time and hand it to the controller until the user
    exits or input runs out. Returns the last session.
    """
    session = Session.anonymous()
    while True:
        for line in controller.menu_lines(session):
            print(line, file=out)
        try:
            choice = line_input.read_int()
            result = controller.handle(session, choice)
        except EndOfInput:
            logger.info("End of input, leaving the menu loop")
            return session
        if result.outcome == Outcome.EXIT:
            return session
        session = result.session


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = build_parser()
    if len(argv) != 3:
        print(USAGE, file=stderr)
        return 0
    args = parser.parse_args(argv)

    setup_logger("hotel_console", Config.LOG_LEVEL, Config.LOG_FILE)
    print(GREETING, file=stdout)
    print(CONNECTING, file=stdout)

    try:
        client = DatabaseClient.connect(
            host=Config.DB_HOST,
            port=args.port,
            database=args.dbname,
            user=args.user,
            password=Config.DB_PASSWORD,
        )
    except DatabaseConnectionError as e:
        logger.error("Connection failed: %s", e)
        print(ERROR_CONNECTION_FAILED.format(error=e), file=stderr)
        print(ERROR_CONNECTION_HINT, file=stdout)
        return 1

    try:
        print("Done", file=stdout)
        if Config.INIT_SCHEMA:
            try:
                create_schema(client)
            except Exception as e:
                client.rollback()
                logger.exception("Schema creation failed: %s", e)
                print(ERROR_UNEXPECTED_FAILURE.format(error=e), file=stderr)
        line_input = LineInput(stream=stdin, out=stdout)
        controller = SessionController(
            queries=QueryService(client),
            line_input=line_input,
            presenter=Presenter(out=stdout),
            err=stderr,
        )
        run_shell(controller, line_input, stdout)
    finally:
        print(DISCONNECTING, file=stdout)
        client.close()
        print(GOODBYE, file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
