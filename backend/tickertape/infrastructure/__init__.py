"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure imports only error types from core/
    - All database calls wrapped with rollback and error mapping

Design Decisions:
    - Resilient wrappers over raw clients (ADR: ExMA single responsibility)
"""
