"""GeoLookup Application Package — read-only road, street and district lookup API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
