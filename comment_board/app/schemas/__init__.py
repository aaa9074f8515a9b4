"""
Pydantic schema definitions for API payloads.

Schemas are shared by the stores, which build them from rows or
in‑memory records, so both stores return identical shapes.
"""
