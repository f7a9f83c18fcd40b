"""Discovery of documentation and live endpoints for registered APIs."""

from .openapi_parser import DocumentedPath, OpenAPIParser
from .prober import DiscoveryReport, ProbeOutcome, Prober, ProbeStatus

__all__ = [
    "DocumentedPath",
    "OpenAPIParser",
    "DiscoveryReport",
    "ProbeOutcome",
    "ProbeStatus",
    "Prober",
]
