from dbdelta import data

__all__ = ("create",)


def create(*, db_config: data.DbConfig) -> data.CursorProvider | data.Error:
    try:
        if db_config.api == data.API.PSYCOPG:
            from dbdelta.adapter.cursor_provider.pg import PgCursorProvider

            return PgCursorProvider(db_config=db_config)
        elif db_config.api == data.API.PYODBC:
            from dbdelta.adapter.cursor_provider.odbc import OdbcCursorProvider

            return OdbcCursorProvider(db_config=db_config)
        elif db_config.api == data.API.SQLITE:
            from dbdelta.adapter.cursor_provider.sqlite import SqliteCursorProvider

            return SqliteCursorProvider(db_config=db_config)
        else:
            return data.Error.new(
                f"CursorProvider is not implemented for the {db_config.api!s} api.",
                db_config=db_config,
            )
    except Exception as e:
        return data.Error.new(str(e), db_config=db_config)
