"""Well-known paths tried by ``discover_api``.

Order matters: documentation paths are tried in sequence and the first one
that serves an OpenAPI/Swagger document wins.
"""

DOC_PATHS: tuple[str, ...] = (
    "/swagger.json",
    "/openapi.json",
    "/api-docs",
    "/docs",
    "/swagger/v1/swagger.json",
    "/v1/swagger.json",
    "/.well-known/openapi.json",
)

# Probed with HEAD when no documentation is found; all of them, every time.
COMMON_ENDPOINTS: tuple[str, ...] = (
    "/",
    "/api",
    "/health",
    "/status",
    "/users",
    "/posts",
)

# Top-level keys that identify an OpenAPI / Swagger document
DOC_MARKER_KEYS: frozenset[str] = frozenset({"paths", "swagger", "openapi"})
