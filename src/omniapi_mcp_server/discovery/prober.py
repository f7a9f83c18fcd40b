"""Endpoint discovery for registered APIs.

Discovery runs in two rounds:

1. Documentation paths (:data:`DOC_PATHS`) are probed one at a time with GET.
   Probes are produced lazily, so the first path serving an OpenAPI/Swagger
   document ends the round and the remaining paths are never requested.
2. If no document was found, every path in :data:`COMMON_ENDPOINTS` is probed
   with HEAD and the ones answering 2xx are reported.

Every probe yields a :class:`ProbeOutcome`; a failing probe is an ``ERROR``
outcome, never an exception.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Iterable

import httpx
import structlog

from ..client import ApiClient, ApiNotFoundError
from ..registry import ApiEntry, ApiRegistry
from .candidates import COMMON_ENDPOINTS, DOC_PATHS
from .openapi_parser import DocumentedPath, OpenAPIParser, is_api_document

logger = structlog.get_logger(__name__)


class ProbeStatus(str, enum.Enum):
    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    ERROR = "error"


@dataclass
class ProbeOutcome:
    """Result of a single probe against one candidate path."""

    path: str
    status: ProbeStatus
    status_code: int | None = None
    document: dict[str, Any] | None = None
    error: str | None = None

    @property
    def matched(self) -> bool:
        return self.status is ProbeStatus.MATCHED


@dataclass
class DiscoveryReport:
    api: str
    doc_probes: list[ProbeOutcome] = field(default_factory=list)
    doc_path: str | None = None
    documented_paths: list[DocumentedPath] = field(default_factory=list)
    has_paths: bool = False  # document declared a "paths" object, even an empty one
    endpoint_probes: list[ProbeOutcome] = field(default_factory=list)

    @property
    def live_endpoints(self) -> list[ProbeOutcome]:
        return [p for p in self.endpoint_probes if p.matched]

    def render(self) -> str:
        text = f'🔍 Trying to discover endpoints for API "{self.api}"...\n\n'

        if self.doc_path is not None:
            text += f"✅ Documentation found at: {self.doc_path}\n\n"
            if self.has_paths:
                text += "📋 Available endpoints:\n"
                for documented in self.documented_paths:
                    text += documented.render() + "\n"
            return text

        text += "❌ OpenAPI documentation not found.\n\n"
        text += "🔍 Testing common endpoints...\n\n"
        live = self.live_endpoints
        for outcome in live:
            text += f"✅ {outcome.path} ({outcome.status_code})\n"
        if not live:
            text += "⚠️ No common endpoints responded.\n"
        return text + "\n💡 Tip: Check the API documentation for specific endpoints."


class Prober:
    """Discover documentation or live endpoints of a registered API."""

    def __init__(
        self,
        registry: ApiRegistry,
        client: ApiClient,
        doc_paths: Iterable[str] = DOC_PATHS,
        common_endpoints: Iterable[str] = COMMON_ENDPOINTS,
    ):
        self.registry = registry
        self.client = client
        self.doc_paths = tuple(doc_paths)
        self.common_endpoints = tuple(common_endpoints)
        self.parser = OpenAPIParser()

    async def discover(self, api: str) -> DiscoveryReport:
        entry = self.registry.get(api)
        if entry is None:
            raise ApiNotFoundError(f'API "{api}" not found.')

        report = DiscoveryReport(api=api)

        probes = self.iter_doc_probes(entry)
        try:
            async for outcome in probes:
                report.doc_probes.append(outcome)
                if outcome.matched:
                    report.doc_path = outcome.path
                    report.has_paths = isinstance(outcome.document.get("paths"), dict)
                    report.documented_paths = self.parser.parse(outcome.document)
                    break
        finally:
            await probes.aclose()

        if report.doc_path is None:
            for path in self.common_endpoints:
                report.endpoint_probes.append(await self.probe_endpoint(entry, path))

        logger.info(
            "Discovery finished",
            api=api,
            doc_path=report.doc_path,
            documented_paths=len(report.documented_paths),
            live_endpoints=len(report.live_endpoints),
        )
        return report

    async def iter_doc_probes(self, entry: ApiEntry) -> AsyncIterator[ProbeOutcome]:
        """Yield one outcome per documentation path, requesting each on demand."""
        for path in self.doc_paths:
            yield await self.probe_doc(entry, path)

    # ------------------------------------------------------------------
    # Single probes
    # ------------------------------------------------------------------

    async def probe_doc(self, entry: ApiEntry, path: str) -> ProbeOutcome:
        try:
            response = await self.client.probe(
                "GET", f"{entry.base_url}{path}", headers=entry.headers
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._error(entry, path, e)

        if not response.is_success:
            return ProbeOutcome(
                path, ProbeStatus.NOT_MATCHED, status_code=response.status_code
            )
        try:
            doc = response.json()
        except ValueError:
            return ProbeOutcome(
                path, ProbeStatus.NOT_MATCHED, status_code=response.status_code
            )
        if not is_api_document(doc):
            return ProbeOutcome(
                path, ProbeStatus.NOT_MATCHED, status_code=response.status_code
            )
        return ProbeOutcome(
            path, ProbeStatus.MATCHED, status_code=response.status_code, document=doc
        )

    async def probe_endpoint(self, entry: ApiEntry, path: str) -> ProbeOutcome:
        try:
            response = await self.client.probe(
                "HEAD", f"{entry.base_url}{path}", headers=entry.headers
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._error(entry, path, e)

        status = ProbeStatus.MATCHED if response.is_success else ProbeStatus.NOT_MATCHED
        return ProbeOutcome(path, status, status_code=response.status_code)

    @staticmethod
    def _error(entry: ApiEntry, path: str, exc: Exception) -> ProbeOutcome:
        logger.debug("Probe failed", api=entry.name, path=path, error=str(exc))
        return ProbeOutcome(path, ProbeStatus.ERROR, error=str(exc))
