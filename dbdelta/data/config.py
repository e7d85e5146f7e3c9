import pathlib

import pydantic

from dbdelta.data.db_config import DbConfig

__all__ = ("Config",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class Config:
    log_assertions: bool = False
    log_assertion_errors: bool = True
    log_queries: bool = False
    log_setup: bool = False
    log_snapshots: bool = False
    log_file: pathlib.Path | None = None
    log_rotation: str = "5 MB"
    log_retention: str = "7 days"
    digest_algorithm: str = "sha1"
    digest_chunk_size: pydantic.PositiveInt = 4096
    databases: tuple[DbConfig, ...] = ()

    def db(self, /, db_id: str) -> DbConfig | None:
        return next((db for db in self.databases if db.db_id == db_id), None)

    def __repr__(self) -> str:
        return (
            f"Config(log_assertions={self.log_assertions}, log_assertion_errors={self.log_assertion_errors}, "
            f"log_queries={self.log_queries}, log_setup={self.log_setup}, log_snapshots={self.log_snapshots}, "
            f"digest_algorithm={self.digest_algorithm!r}, databases={self.databases})"
        )
