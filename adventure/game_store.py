from __future__ import annotations

import logging
from collections.abc import Iterator


logger = logging.getLogger(__name__)


class GameStore:
    """Values the player typed in, keyed by the label of the input prompt.

    Lives for the lifetime of the process and is never persisted. A second
    write to the same label replaces the first; there is no delete.
    """

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def set_value(self, label: str, value: str) -> None:
        if label in self._values:
            logger.debug("Overwriting game store value for %r", label)
        self._values[label] = value

    def get_value(self, label: str) -> str | None:
        return self._values.get(label)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __contains__(self, label: object) -> bool:
        return label in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"GameStore({self._values!r})"
