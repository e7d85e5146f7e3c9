from dbdelta import data
from dbdelta.adapter import cursor_provider, log

__all__ = ("create",)


def create(*, db_config: data.DbConfig, config: data.Config) -> data.Database | data.Error:
    try:
        provider = cursor_provider.create(db_config=db_config)
        if isinstance(provider, data.Error):
            return provider

        db_log = log.create(config=config)
        if isinstance(db_log, data.Error):
            return db_log

        return data.Database(cursor_provider=provider, log=db_log, config=config)
    except Exception as e:
        return data.Error.new(str(e), db_config=db_config)
