"""Pydantic Schemas — response contracts for the lookup endpoints.

Invariants:
    - Schemas describe the wire format; models describe persistence
"""
