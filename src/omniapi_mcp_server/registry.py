"""API registry: named connection profiles for the APIs a user has added."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


@dataclass
class ApiEntry:
    """One registered API."""

    name: str
    base_url: str  # never ends with "/"
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


class ApiRegistry:
    """In-memory store of :class:`ApiEntry` objects, keyed by name.

    A registry belongs to a single server instance. Entries are created only
    through :meth:`add` and live until the process exits.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ApiEntry] = {}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        base_url: str,
        headers: dict[str, str] | None = None,
    ) -> ApiEntry:
        """Store *name* → profile, replacing any previous entry of that name."""
        entry = ApiEntry(
            name=name,
            base_url=base_url.rstrip("/"),
            headers={**DEFAULT_HEADERS, **(headers or {})},
        )
        replaced = name in self._entries
        self._entries[name] = entry
        logger.info(
            "API registered",
            api=name,
            base_url=entry.base_url,
            replaced=replaced,
        )
        return entry

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, name: str) -> ApiEntry | None:
        return self._entries.get(name)

    def list(self) -> list[tuple[str, str]]:
        """Return ``(name, base_url)`` pairs; empty when nothing is registered."""
        return [(entry.name, entry.base_url) for entry in self._entries.values()]

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
