import typing

__all__ = ("FrozenDict",)


class FrozenDict(dict[str, typing.Hashable]):
    def __hash__(self) -> int:  # type: ignore
        return hash(frozenset(self.items()))

    def _readonly(self, *args: typing.Any, **kwargs: typing.Any) -> typing.NoReturn:
        raise TypeError(f"{self.__class__.__name__} is read-only.")

    __setitem__ = _readonly
    __delitem__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly
