"""Seed export domain layer.

The domain package hosts the pure seed-compilation logic: value
classification and literal encoding (``seed_values``) and upsert statement
compilation (``statements``). Domain modules may depend on the Python
standard library, pydantic, ``seed_export.config`` and
``seed_export.infrastructure`` only; they must never import from
``seed_export.io`` or ``seed_export.orchestration``.
"""
