"""Configuration management."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from didi.core.constants import DEFAULT_MAX_PAYLOAD_SIZE


class DidiConfig(BaseModel):
    """DIDI tooling configuration - supports YAML and ENV."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field("INFO", description="Log level name")
    json_logs: bool = Field(False, description="Render logs as JSON instead of console")
    max_payload_size: int = Field(
        DEFAULT_MAX_PAYLOAD_SIZE,
        gt=0,
        description="Largest payload a full read will load (bytes)",
    )
    bench_repetitions: int = Field(
        1_000_000,
        gt=0,
        description="Letter runs generated by the benchmark",
    )
    bench_search_string: str = Field(
        "custom_formats_are_interesting",
        description="String appended to benchmark data and stored in its header",
    )
    workdir: str = Field(".", description="Directory for benchmark scratch files")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DidiConfig":
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls(**raw)

    @classmethod
    def from_env(cls) -> "DidiConfig":
        return cls(
            log_level=os.getenv("DIDI_LOG_LEVEL", "INFO"),
            json_logs=os.getenv("DIDI_JSON_LOGS", "false").lower() == "true",
            max_payload_size=int(
                os.getenv("DIDI_MAX_PAYLOAD_SIZE", str(DEFAULT_MAX_PAYLOAD_SIZE))
            ),
            bench_repetitions=int(os.getenv("DIDI_BENCH_REPETITIONS", "1000000")),
            bench_search_string=os.getenv(
                "DIDI_BENCH_SEARCH_STRING", "custom_formats_are_interesting"
            ),
            workdir=os.getenv("DIDI_WORKDIR", "."),
        )


__all__ = ["DidiConfig"]
