"""Run settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fullsimple.core.pretty import RenderStyle
from fullsimple.core.reduce import EvalMode


class Settings(BaseSettings):
    """How a program is evaluated and printed.

    Every field can be set from the environment, e.g. ``FULLSIMPLE_MODE=big-step``
    or ``FULLSIMPLE_MAX_STEPS=1000``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FULLSIMPLE_",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    mode: EvalMode = Field(default=EvalMode.SMALL_STEP)
    recover: bool = Field(default=False)
    max_steps: int | None = Field(default=None)
    style: RenderStyle = Field(default=RenderStyle.NAMED)

    @field_validator("max_steps")
    @classmethod
    def _positive_max_steps(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("max_steps must be positive")
        return value


def load_settings(**overrides: Any) -> Settings:
    return Settings(**overrides)


__all__ = ["Settings", "load_settings"]
