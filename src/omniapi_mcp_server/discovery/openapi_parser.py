"""Extract the documented paths from an OpenAPI / Swagger document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from .candidates import DOC_MARKER_KEYS

logger = structlog.get_logger(__name__)

# Path-item keys that are operations; "parameters", "summary" etc. are not.
_HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)


@dataclass
class DocumentedPath:
    """One entry of the document's ``paths`` object."""

    path: str
    methods: list[str] = field(default_factory=list)  # GET, POST, …

    def render(self) -> str:
        return f"• {self.path} [{', '.join(self.methods)}]"


def is_api_document(doc: Any) -> bool:
    """True if *doc* looks like an OpenAPI/Swagger document."""
    return isinstance(doc, dict) and any(key in doc for key in DOC_MARKER_KEYS)


class OpenAPIParser:
    """Turns a loaded document into a list of :class:`DocumentedPath`."""

    def parse(self, doc: dict[str, Any]) -> list[DocumentedPath]:
        paths = doc.get("paths")
        if not isinstance(paths, dict):
            return []

        documented: list[DocumentedPath] = []
        for path, path_item in paths.items():
            documented.append(
                DocumentedPath(path=path, methods=self._methods(path_item))
            )

        logger.info("Parsed API document", path_count=len(documented))
        return documented

    @staticmethod
    def _methods(path_item: Any) -> list[str]:
        if not isinstance(path_item, dict):
            return []
        return [key.upper() for key in path_item if key.lower() in _HTTP_METHODS]
