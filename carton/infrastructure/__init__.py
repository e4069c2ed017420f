"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic beyond errors and protocols
    - All external calls map their failures to CartonError subclasses
"""
