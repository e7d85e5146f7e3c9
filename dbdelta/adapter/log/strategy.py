import pathlib
import typing

from loguru import logger

from dbdelta import data
from dbdelta.adapter.log.loguru_log import LoguruLog

__all__ = ("create", "remove_report_sinks")

# one file sink per log file for every database sharing it; released by remove_report_sinks
_report_sinks: typing.Final[dict[pathlib.Path, int]] = {}


def create(*, config: data.Config) -> data.Log | data.Error:
    try:
        if config.log_file is not None:
            log_file = config.log_file.resolve()
            if log_file not in _report_sinks:
                _report_sinks[log_file] = logger.add(
                    log_file,
                    rotation=config.log_rotation,
                    retention=config.log_retention,
                    serialize=True,
                    filter=lambda record: "report" in record["extra"],
                )

        return LoguruLog(config=config)
    except Exception as e:
        return data.Error.new(str(e), config=config)


def remove_report_sinks() -> None:
    while _report_sinks:
        _, handler_id = _report_sinks.popitem()
        logger.remove(handler_id)
