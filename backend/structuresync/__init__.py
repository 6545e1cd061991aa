"""StructureSync Application Package — schema resolution and artifact generation.

Invariants:
    - Package root holds only the version string (import side-effects prohibited)

Design Decisions:
    - No star exports: explicit imports only (ADR: ExMA no convention-over-config)
"""

__version__ = "1.0.0"
