import contextlib
import typing

from dbdelta.data.config import Config
from dbdelta.data.cursor import Cursor
from dbdelta.data.cursor_provider import CursorProvider
from dbdelta.data.digest import Digester
from dbdelta.data.error import Error, ExecutionError
from dbdelta.data.log import Log
from dbdelta.data.result_set import ResultSet

__all__ = ("Database",)

_T = typing.TypeVar("_T")


class Database:
    """Database handle shared by the data sources of one database.

    Connections come from the cursor provider; every result is reported through ``log``.
    Each call runs in its own connection and is committed when it succeeds.
    """

    def __init__(
        self,
        *,
        cursor_provider: CursorProvider,
        log: Log,
        config: Config | None = None,
    ):
        self._cursor_provider: typing.Final[CursorProvider] = cursor_provider
        self._log: typing.Final[Log] = log
        self._config: typing.Final[Config] = config or Config()
        self._digester: typing.Final[Digester] = Digester(
            algorithm=self._config.digest_algorithm,
            chunk_size=self._config.digest_chunk_size,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def digester(self) -> Digester:
        return self._digester

    @property
    def log(self) -> Log:
        return self._log

    def fetch(self, *, sql: str, params: typing.Iterable[typing.Hashable] | None) -> ResultSet:
        return self._run(lambda cur: cur.fetch_all(sql=sql, params=params), sql=sql)

    def execute(self, *, sql: str, params: typing.Iterable[typing.Hashable] | None) -> int:
        return self._run(lambda cur: cur.execute(sql=sql, params=params), sql=sql)

    @contextlib.contextmanager
    def cursor(self, **context: typing.Any) -> typing.Generator[Cursor, None, None]:
        """Open a cursor for several statements that commit or roll back together.

        Raising inside the block rolls the statements back.
        """
        with self._cursor_provider.open() as cur:
            if isinstance(cur, Error):
                raise ExecutionError.wrap(cur, **context)

            yield cur

    def _run(self, fn: typing.Callable[[Cursor], _T | Error], /, **context: typing.Any) -> _T:
        with self.cursor(**context) as cur:
            result = fn(cur)
            if isinstance(result, Error):
                raise ExecutionError.wrap(result, **context)

            return result
