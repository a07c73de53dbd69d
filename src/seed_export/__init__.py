"""
Seed Export - seed-data export compiler.

Reads every row of a configured set of tables from a hosted PostgREST backend
and compiles them into one idempotent SQL upsert file for re-seeding a
PostgreSQL database.
"""

__version__ = "0.1.0"
