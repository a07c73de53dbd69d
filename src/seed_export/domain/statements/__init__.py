"""Upsert statement compilation."""

from .compiler import StatementCompiler, banner, compile_table, no_data_comment
from .exceptions import DivergentRowShapeError, StatementCompilationError
from .models import CompiledStatement

__all__ = [
    "StatementCompiler",
    "banner",
    "compile_table",
    "no_data_comment",
    "CompiledStatement",
    "DivergentRowShapeError",
    "StatementCompilationError",
]
