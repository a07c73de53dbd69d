"""
Infrastructure Layer

This layer provides reusable SQL generation services that support the domain
logic without containing seed-export rules themselves.

Components:
- sql: identifier formatting, literal quoting and the PostgreSQL upsert dialect
"""

__all__: list[str] = []
