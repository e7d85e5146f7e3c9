import argparse
import json
import pathlib
import sys
import typing

import pydantic
from loguru import logger

from dbdelta import adapter, data, service

__all__ = ("main",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class ShowArgs:
    db: str
    table: str | None
    columns: tuple[str, ...] | None
    sql: str | None


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class CompareArgs:
    db: str
    expected_sql: str
    actual_sql: str


def parse_args(args: argparse.Namespace, /) -> ShowArgs | CompareArgs | data.Error:
    try:
        match args.command:
            case "show":
                if not args.db:
                    return data.Error.new("--db is required.")

                if not args.table and not args.sql:
                    return data.Error.new("Either --table or --sql is required, but neither were provided.")

                if args.columns and not args.table:
                    return data.Error.new("--columns can only be used with --table.")

                return ShowArgs(
                    db=args.db,
                    table=args.table,
                    columns=tuple(args.columns) if args.columns else None,
                    sql=args.sql,
                )
            case "compare":
                if not args.db:
                    return data.Error.new("--db is required.")

                if not args.expected_sql:
                    return data.Error.new("--expected-sql is required.")

                if not args.actual_sql:
                    return data.Error.new("--actual-sql is required.")

                return CompareArgs(
                    db=args.db,
                    expected_sql=args.expected_sql,
                    actual_sql=args.actual_sql,
                )
            case _:
                return data.Error.new(f"{args.command} is invalid.")
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing command line args: {e!s}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbdelta")
    parser.add_argument("--config", type=str, default=None)
    subparser = parser.add_subparsers(dest="command", required=True)

    show_parser = subparser.add_parser("show")
    compare_parser = subparser.add_parser("compare")

    show_parser.add_argument("--db", type=str, required=True)
    show_options = show_parser.add_mutually_exclusive_group(required=True)
    show_options.add_argument("--table", type=str)
    show_options.add_argument("--sql", type=str)
    show_parser.add_argument("--columns", nargs="+", type=str)

    compare_parser.add_argument("--db", type=str, required=True)
    compare_parser.add_argument("--expected-sql", type=str, required=True)
    compare_parser.add_argument("--actual-sql", type=str, required=True)

    return parser


def run(*, args: ShowArgs | CompareArgs, config: data.Config) -> bool | data.Error:
    """Run a parsed command.  Returns whether the command succeeded."""
    db_config = config.db(args.db)
    if db_config is None:
        return data.Error.new(
            f"--db was {args.db}, but could not find database entry by that name in the config file.",
            db=args.db,
        )

    db = adapter.database.create(db_config=db_config, config=config)
    if isinstance(db, data.Error):
        return db

    try:
        match args:
            case ShowArgs(table=str() as table, columns=columns):
                data_set = service.query(data.Table(db=db, name=table, columns=columns))
            case ShowArgs(sql=str() as sql):
                data_set = service.query(data.Query(db=db, sql=sql))
            case CompareArgs(expected_sql=expected_sql, actual_sql=actual_sql):
                actual_source = data.Query(db=db, sql=actual_sql, name="actual")
                expected_rows = data.Query(db=db, sql=expected_sql, name="expected").execute_query()
                expected = actual_source.data().add_rows(*(row.values for row in expected_rows))
                result = service.evaluate_state_assertion(expected)
                if result.passed:
                    logger.info(result.summary())
                else:
                    logger.error(result.summary())
                return result.passed
            case _:
                return data.Error.new(f"Unrecognized command, {args!r}.")
    except data.Error as e:
        return e

    rendered = json.dumps(adapter.render.render_data_set(data_set), indent=2, default=str)
    logger.info(f"{data_set.source.name}:\n{rendered}")
    return True


def main(argv: typing.Sequence[str] | None = None, /) -> int:
    try:
        log_folder = adapter.fs.get_log_folder()
        if isinstance(log_folder, data.Error):
            logger.error(f"An error occurred while looking up log folder: {log_folder!s}")
            return 1

        if not getattr(sys, "frozen", False):
            logger.remove()
            logger.add(sys.stderr, level="INFO")

        logger.add(log_folder / "error.log", rotation="5 MB", retention="7 days", level="ERROR")

        args = build_parser().parse_args(sys.argv[1:] if argv is None else list(argv))

        if args.config:
            config_file_path: pathlib.Path | data.Error = pathlib.Path(args.config)
        else:
            config_file_path = adapter.fs.get_config_path()
            if isinstance(config_file_path, data.Error):
                logger.error(f"An error occurred while looking up config_file_path: {config_file_path!s}")
                return 1

        config = adapter.config.load(config_file=config_file_path)
        if isinstance(config, data.Error):
            logger.error(f"An error occurred while loading config file: {config!s}")
            return 1

        parsed_args = parse_args(args)
        if isinstance(parsed_args, data.Error):
            logger.error(parsed_args.error_message)
            return 1

        match run(args=parsed_args, config=config):
            case data.Error(error_message=error_message):
                logger.error(error_message)
                return 1
            case False:
                return 1
            case _:
                return 0
    except Exception as e:
        logger.exception(e)
        return 1
    finally:
        adapter.log.remove_report_sinks()


if __name__ == "__main__":
    sys.exit(main())
