"""
Table registry for the seed export.

The registry lists, in output order, every destination table whose rows are
exported, together with the options that steer value encoding. It is read once
per run from ``config/seed_tables.yml`` (or any YAML file with the same
shape) and validated with Pydantic. When no file is configured the built-in
registry below is used.

Example YAML:

    encoder:
      json_value_tables: [kv_store]
      timestamp_columns: [published_at, sunrise, sunset]
    tables:
      - name: alpaca_stocks
        primary_key: id
        unique_constraint: symbol
"""

from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = structlog.get_logger(__name__)


class TableRegistryError(Exception):
    """Raised when the table registry file is missing or invalid."""

    pass


class TableSpec(BaseModel):
    """How one destination table is extracted and compiled."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Destination table name")
    primary_key: str = Field(..., min_length=1, description="Primary key column")
    unique_constraint: Optional[str] = Field(
        None, description="Unique column used for ON CONFLICT instead of the primary key"
    )
    exclude_columns: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Source columns that do not exist in the destination schema",
    )

    @property
    def conflict_column(self) -> str:
        """Column that decides whether a row already exists."""
        return self.unique_constraint or self.primary_key


class EncoderOptions(BaseModel):
    """
    Naming conventions that drive value classification.

    Timestamp detection is purely name based: a string column whose name ends
    with one of ``timestamp_suffixes`` or appears in ``timestamp_columns`` is
    cast to timestamptz, whatever it holds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    json_value_tables: Tuple[str, ...] = Field(
        default=("kv_store",),
        description="Table name prefixes of generic key-value tables",
    )
    json_value_column: str = Field(
        default="value",
        description="Column of a key-value table that is always jsonb",
    )
    timestamp_suffixes: Tuple[str, ...] = Field(default=("_at", "_time"))
    timestamp_columns: FrozenSet[str] = Field(
        default=frozenset({"published_at", "sunrise", "sunset"})
    )
    immutable_columns: FrozenSet[str] = Field(
        default=frozenset({"created_at"}),
        description="Columns never reassigned by ON CONFLICT DO UPDATE",
    )

    def is_json_value_column(self, table_name: str, column_name: str) -> bool:
        return column_name == self.json_value_column and table_name.startswith(
            self.json_value_tables
        )

    def is_timestamp_column(self, column_name: str) -> bool:
        return column_name in self.timestamp_columns or column_name.endswith(
            self.timestamp_suffixes
        )


class TableRegistry(BaseModel):
    """Ordered table specs plus the encoder options shared by all of them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tables: Tuple[TableSpec, ...] = Field(..., min_length=1)
    encoder: EncoderOptions = Field(default_factory=EncoderOptions)

    @field_validator("tables")
    @classmethod
    def _unique_table_names(cls, tables: Tuple[TableSpec, ...]) -> Tuple[TableSpec, ...]:
        seen = set()
        duplicates = []
        for spec in tables:
            if spec.name in seen:
                duplicates.append(spec.name)
            seen.add(spec.name)
        if duplicates:
            raise ValueError(f"Duplicate table names in registry: {', '.join(duplicates)}")
        return tables

    @model_validator(mode="after")
    def _conflict_column_not_excluded(self) -> "TableRegistry":
        for spec in self.tables:
            if spec.conflict_column in spec.exclude_columns:
                raise ValueError(
                    f"Table '{spec.name}' excludes its own conflict column "
                    f"'{spec.conflict_column}'"
                )
        return self

    @property
    def table_names(self) -> List[str]:
        return [spec.name for spec in self.tables]

    def select(self, names: List[str]) -> "TableRegistry":
        """
        Restrict the registry to ``names``, keeping registry order.

        Raises:
            TableRegistryError: If a name is not registered
        """
        unknown = [name for name in names if name not in self.table_names]
        if unknown:
            raise TableRegistryError(
                f"Unknown table(s): {', '.join(unknown)}. "
                f"Registered tables: {', '.join(self.table_names)}"
            )
        wanted = set(names)
        return TableRegistry(
            tables=tuple(spec for spec in self.tables if spec.name in wanted),
            encoder=self.encoder,
        )


DEFAULT_TABLES: Tuple[TableSpec, ...] = (
    # Weather
    TableSpec(name="weather_locations", primary_key="id"),
    TableSpec(name="weather_current", primary_key="id"),
    TableSpec(name="weather_air_quality", primary_key="id"),
    TableSpec(name="weather_hourly_forecast", primary_key="id"),
    TableSpec(name="weather_daily_forecast", primary_key="id"),
    TableSpec(name="weather_alerts", primary_key="id"),
    # News providers
    TableSpec(name="news_provider_configs", primary_key="id", unique_constraint="provider"),
    # AI providers
    TableSpec(name="ai_providers", primary_key="id"),
    # Unified data providers; these columns are absent from the migrations
    TableSpec(
        name="data_providers",
        primary_key="id",
        exclude_columns=frozenset({"dashboard", "legacy_id", "allow_api_key"}),
    ),
    # Sports
    TableSpec(name="sports_leagues", primary_key="id"),
    TableSpec(name="sports_teams", primary_key="id"),
    # News articles
    TableSpec(name="news_articles", primary_key="id"),
    # Finance
    TableSpec(name="alpaca_stocks", primary_key="id", unique_constraint="symbol"),
    # Key-value stores
    TableSpec(name="kv_store_cbef71cf", primary_key="key"),
    TableSpec(name="kv_store_629fe562", primary_key="key"),
)


def default_registry() -> TableRegistry:
    """Return the built-in registry."""
    return TableRegistry(tables=DEFAULT_TABLES)


def load_table_registry(path: Optional[Union[str, Path]] = None) -> TableRegistry:
    """
    Load and validate a table registry.

    Args:
        path: YAML registry file. The built-in registry is returned when None.

    Returns:
        Validated TableRegistry

    Raises:
        TableRegistryError: If the file is missing, is not valid YAML or does
            not match the registry schema
    """
    if path is None:
        return default_registry()

    config_path = Path(path)
    if not config_path.exists():
        logger.error("table_registry.file_not_found", config_path=str(config_path))
        raise TableRegistryError(f"Table registry file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(
            "table_registry.yaml_parse_error",
            config_path=str(config_path),
            error=str(e),
        )
        raise TableRegistryError(f"Invalid YAML in table registry: {e}") from e

    if not isinstance(raw_config, dict):
        raise TableRegistryError(
            f"Table registry must be a mapping with a 'tables' list: {config_path}"
        )

    try:
        registry = TableRegistry(**raw_config)
    except ValidationError as e:
        logger.error(
            "table_registry.validation_failed",
            config_path=str(config_path),
            error=str(e),
        )
        raise TableRegistryError(f"Table registry validation failed: {e}") from e

    logger.info(
        "table_registry.loaded",
        config_path=str(config_path),
        table_count=len(registry.tables),
    )
    return registry
