"""Configuration loading and validation.

This module is responsible for:

- Loading `.env` into the process environment (without overriding existing vars).
- Converting environment variables into a strongly-typed Pydantic model.
- Validating fields and providing actionable error messages.
"""

import os
import re
from typing import Literal

import dotenv
from pydantic import BaseModel, Field, field_validator

SinkKind = Literal["console", "memory", "duckdb"]

_SQL_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _get_env_str(name: str, default: str) -> str:
    """Read a string env var with a default."""
    value = os.getenv(name, "").strip()
    return value or default


def _get_env_bool(name: str, default: bool) -> bool:
    """Read a boolean env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    normalized = raw.strip().lower()
    if normalized in {"true", "1", "yes", "y", "on"}:
        return True
    if normalized in {"false", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean (true/false). Got: {raw!r}")


def _get_env_int(name: str, default: int) -> int:
    """Read an int env var with a default."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an int. Got: {raw!r}") from exc


class DiagnosticsConfig(BaseModel):
    """Settings for notice ingestion and diagnostic output."""

    sink: SinkKind = Field(default="console", description="Where diagnostic records are written")
    db_path: str = Field(default="diagnostics.duckdb", description="DuckDB file for the duckdb sink")
    table: str = Field(default="diagnostic_records", description="DuckDB table name")
    max_cause_depth: int = Field(default=32, description="Max error cause links rendered per error")
    record_skipped: bool = Field(default=False, description="Record input that is not a notice")

    @field_validator("sink", mode="before")
    def validate_sink(cls, v: object) -> object:
        """Accept sink names case-insensitively, with a helpful message otherwise."""
        if isinstance(v, str):
            normalized = v.strip().lower()
            if normalized not in {"console", "memory", "duckdb"}:
                raise ValueError(f"DIAGNOSTICS_SINK must be one of console, memory, duckdb. Got: {v!r}")
            return normalized
        return v

    @field_validator("table")
    def validate_table(cls, v: str) -> str:
        """The table name is interpolated into SQL, so it must be a plain identifier."""
        if not _SQL_IDENTIFIER.fullmatch(v):
            raise ValueError(f"DIAGNOSTICS_TABLE must be a SQL identifier. Got: {v!r}")
        return v

    @field_validator("max_cause_depth")
    def validate_max_cause_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"DIAGNOSTICS_MAX_CAUSE_DEPTH must be >= 1. Got: {v!r}")
        return v


def load_config() -> DiagnosticsConfig:
    """Load diagnostics configuration from environment variables.

    Notes:
    - Calls `dotenv.load_dotenv()` so local `.env` values are visible to the process.
    - Raises `ValueError` with actionable messages for malformed values.
    """
    dotenv.load_dotenv()

    return DiagnosticsConfig(
        sink=_get_env_str("DIAGNOSTICS_SINK", "console"),
        db_path=_get_env_str("DIAGNOSTICS_DB_PATH", "diagnostics.duckdb"),
        table=_get_env_str("DIAGNOSTICS_TABLE", "diagnostic_records"),
        max_cause_depth=_get_env_int("DIAGNOSTICS_MAX_CAUSE_DEPTH", 32),
        record_skipped=_get_env_bool("DIAGNOSTICS_RECORD_SKIPPED", False),
    )
