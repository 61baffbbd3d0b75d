"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ domain logic beyond records, types and errors
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Thin wrappers over raw clients: the orchestrator only ever sees CatalogError
"""
