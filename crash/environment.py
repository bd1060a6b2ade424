"""The shell's own copy of the environment and its run-time state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field


class Environment:
    """An ordered list of ``NAME=value`` entries."""

    def __init__(self, entries: Iterable[str] | Mapping[str, str] = ()) -> None:
        if isinstance(entries, Mapping):
            entries = (f"{name}={value}" for name, value in entries.items())
        self._entries: list[str] = list(entries)

    def _index(self, name: str) -> int | None:
        prefix = name + "="
        return next(
            (i for i, entry in enumerate(self._entries) if entry.startswith(prefix)),
            None,
        )

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it is not set."""
        index = self._index(name)
        if index is None:
            return None
        return self._entries[index][len(name) + 1 :]

    def set(self, name: str, value: str | None = None, create: bool = False) -> bool:
        """Replace the value of ``name``; add it when missing if ``create``.

        Returns False when the variable is missing and was not created.
        """
        value = "" if value is None else value
        index = self._index(name)
        if index is not None:
            self._entries[index] = f"{name}={value}"
            return True
        if create:
            self.create(name, value)
            return True
        return False

    def create(self, name: str, value: str | None) -> None:
        """Append a new variable at the end."""
        self._entries.append(f"{name}={'' if value is None else value}")

    def delete(self, name: str) -> bool:
        """Remove ``name``; return whether it was present."""
        index = self._index(name)
        if index is None:
            return False
        del self._entries[index]
        return True

    def as_list(self) -> list[str]:
        """Return a copy of the entries, in order."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._index(name) is not None


@dataclass
class ShellState:
    """Everything a running shell carries between commands."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0
    exit_flag: bool = False