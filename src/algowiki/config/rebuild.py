"""Rebuild scheduling defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import positive_float_env

DEFAULT_REBUILD_INTERVAL_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class RebuildConfig:
    interval_seconds: float = DEFAULT_REBUILD_INTERVAL_SECONDS


def get_rebuild_config() -> RebuildConfig:
    return RebuildConfig(
        interval_seconds=positive_float_env(
            "ALGOWIKI_REBUILD_INTERVAL", DEFAULT_REBUILD_INTERVAL_SECONDS
        )
    )
