"""Services Layer — orchestrates repositories around the pure core.

Invariants:
    - Services own the IO sequencing; core functions stay pure
"""
