from dbdelta.adapter.cursor_provider.strategy import create

__all__ = ("create",)
