"""Configuration models for todo-mvp.

The configuration selects where the local vault lives and which remote
store the task cache coordinator talks to.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class LocalConfig(BaseModel):
    """Local SQLite store configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite file path (default: user data dir)"
    )


class RemoteConfig(BaseModel):
    """Remote store configuration."""

    type: Literal["memory", "http"] = Field(
        default="memory", description="Remote store backend"
    )
    endpoint: str = Field(default="http://localhost:8000/api")
    timeout: int = Field(default=30)
    retry: int = Field(default=3)
    latency: float = Field(
        default=0.0, description="Simulated latency in seconds (memory only)"
    )
    seed: bool = Field(default=True, description="Preload sample tasks (memory only)")
    snapshot_path: str | None = Field(
        default=None,
        description="JSON file the memory store persists to (default: user data dir)",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip()

    @field_validator("latency")
    @classmethod
    def validate_latency(cls, v: float) -> float:
        if v < 0:
            raise ValueError("latency cannot be negative")
        return v


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="table")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main todo-mvp configuration."""

    local: LocalConfig = Field(default_factory=LocalConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
