from dbdelta.adapter.log.loguru_log import LoguruLog
from dbdelta.adapter.log.strategy import create, remove_report_sinks

__all__ = ("LoguruLog", "create", "remove_report_sinks")
