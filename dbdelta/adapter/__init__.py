from dbdelta.adapter import config, cursor_provider, database, fs, log, render

__all__ = ("config", "cursor_provider", "database", "fs", "log", "render")
