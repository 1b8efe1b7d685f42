from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Final

_PARAMS: Final = object()


class HashedSeq(list[Hashable]):
    """A list that computes its hash once, so it can key a hot cache cheaply."""

    __slots__ = ("hashvalue",)

    def __init__(self, items: Iterable[Hashable]) -> None:
        self[:] = items
        self.hashvalue = hash(tuple(self))

    def __hash__(self) -> int:  # type: ignore[override]
        return self.hashvalue

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self[:] == other[:]  # type: ignore[index]

    def __ne__(self, other: object) -> bool:
        return not self == other


class Signature(HashedSeq):
    """Identifies one read: what kind it is, the text it reads and every parameter that shapes its result.

    Parameters are kept sorted by name, so the order they are passed in never matters.
    """

    __slots__ = ()

    @classmethod
    def of(cls, kind: str, text: str, /, **params: Hashable) -> Signature:
        return cls((kind, text, _PARAMS, *sorted(params.items())))

    @property
    def kind(self) -> str:
        return self[0]  # type: ignore[return-value]

    @property
    def text(self) -> str:
        return self[1]  # type: ignore[return-value]

    @property
    def params(self) -> dict[str, Hashable]:
        return dict(self[3:])  # type: ignore[arg-type]
