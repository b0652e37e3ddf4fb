"""Services Layer — database-backed operations invoked by API routes.

Invariants:
    - Services receive their AsyncSession via constructor (injected per request)
    - Services never build HTTP responses; routes translate results and errors

Design Decisions:
    - Class per concern holding the session (ADR: ExMA impureim sandwich)
"""
