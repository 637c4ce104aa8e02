"""Dependency-keyed memoization of derived views."""
from __future__ import annotations
from typing import Any, Callable, Dict, Tuple, TypeVar

from core.logger import get_logger

log = get_logger("analytics/memo")

T = TypeVar("T")


def _same(a: Any, b: Any) -> bool:
    # Stores are immutable, identity is enough and avoids a full comparison
    return a is b or a == b


class ViewMemo:
    """
    Remembers the last result of each named view with the dependencies it
    was computed from.

    ``get`` recomputes only when one member of the dependency tuple differs
    from the previous call. Nothing else is retained, so dropping the memo
    (or calling ``clear``) only costs a recomputation.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[Tuple[Any, ...], Any]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, name: str, deps: Tuple[Any, ...], compute: Callable[[], T]) -> T:
        entry = self._entries.get(name)
        if entry is not None:
            cached_deps, value = entry
            if len(cached_deps) == len(deps) and all(_same(a, b) for a, b in zip(cached_deps, deps)):
                self.hits += 1
                return value

        self.misses += 1
        value = compute()
        self._entries[name] = (deps, value)
        log.debug(f"Recomputed view '{name}'")
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
