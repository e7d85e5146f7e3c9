import functools
import json
import pathlib
import typing

import pydantic

from dbdelta import data

__all__ = ("load", "parse")

_OPTIONAL_KEYS: typing.Final[tuple[tuple[str, str], ...]] = (
    ("log-assertions", "log_assertions"),
    ("log-assertion-errors", "log_assertion_errors"),
    ("log-queries", "log_queries"),
    ("log-setup", "log_setup"),
    ("log-snapshots", "log_snapshots"),
    ("log-file", "log_file"),
    ("log-rotation", "log_rotation"),
    ("log-retention", "log_retention"),
    ("digest-algorithm", "digest_algorithm"),
    ("digest-chunk-size", "digest_chunk_size"),
)


@functools.lru_cache(maxsize=1)
def load(*, config_file: pathlib.Path) -> data.Config | data.Error:
    try:
        if not config_file.exists():
            return data.Error.new(
                f"The config file specified, {config_file.resolve()!s}, does not exist.",
                config_file=config_file,
            )

        with config_file.open("r") as fh:
            d = typing.cast(dict[str, typing.Any], json.load(fh))

        return parse(d)
    except Exception as e:
        return data.Error.new(
            f"An error occurred while loading the config file: {e!s}",
            config_file=config_file,
        )


def parse(d: dict[str, typing.Any], /) -> data.Config | data.Error:
    try:
        if "databases" not in d.keys():
            return data.Error.new("config file is missing an entry for 'databases'.")

        databases: list[data.DbConfig] = []
        for db_dict in d["databases"]:
            db_config = _parse_db_dict(db_dict)
            if isinstance(db_config, data.Error):
                return db_config

            databases.append(db_config)

        kwargs: dict[str, typing.Any] = {
            attr: d[key] for key, attr in _OPTIONAL_KEYS if key in d.keys()
        }
        if kwargs.get("log_file") is not None:
            kwargs["log_file"] = pathlib.Path(kwargs["log_file"])

        return data.Config(databases=tuple(databases), **kwargs)
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing the config: {e!s}")


def _parse_db_dict(db_dict: dict[str, typing.Any], /) -> data.DbConfig | data.Error:
    try:
        if "db-id" not in db_dict.keys():
            return data.Error.new("database entry in config file is missing an entry for 'db-id'.")

        db_id: typing.Final[str] = db_dict["db-id"]

        if "api" not in db_dict.keys():
            return data.Error.new(f"database entry, {db_id}, is missing an entry for 'api'.", db_id=db_id)

        try:
            api: typing.Final[data.API] = data.API(db_dict["api"])
        except ValueError:
            return data.Error.new(
                f"could not convert api entry, {db_dict['api']!r}, to a data.API instance.",
                db_id=db_id,
            )

        host: typing.Final[str | None] = db_dict.get("host")
        db_name: typing.Final[str | None] = db_dict.get("db-name")
        keyring_db_username_entry: typing.Final[str | None] = db_dict.get("keyring-db-username-entry")
        keyring_db_password_entry: typing.Final[str | None] = db_dict.get("keyring-db-password-entry")
        connection_string: typing.Final[str | None] = db_dict.get("connection-string")

        if connection_string is None:
            if api == data.API.SQLITE:
                if db_name is None:
                    return data.Error.new(
                        f"database entry, {db_id}, requires either 'db-name' or 'connection-string'.",
                        db_id=db_id,
                    )
            elif (
                host is None
                or db_name is None
                or keyring_db_username_entry is None
                or keyring_db_password_entry is None
            ):
                return data.Error.new(
                    "If connection-string is null, then host, db-name, keyring-db-username-entry, and "
                    "keyring-db-password-entry must be provided.",
                    db_id=db_id,
                )

        return data.DbConfig(
            db_id=db_id,
            api=api,
            host=host,
            db_name=db_name,
            keyring_db_username_entry=keyring_db_username_entry,
            keyring_db_password_entry=keyring_db_password_entry,
            connection_string=None if connection_string is None else pydantic.SecretStr(connection_string),
        )
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing database entry from json: {e!s}")
