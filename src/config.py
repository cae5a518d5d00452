from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.hexgrid.directions import Orientation


class Settings(BaseSettings):
    # Board defaults, used when a caller does not pick orientation/offset
    default_orientation: Orientation = Orientation.POINTY
    default_offset: int = 1

    model_config = SettingsConfigDict(
        env_prefix="HEXGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("default_offset")
    @classmethod
    def _check_offset(cls, value: int) -> int:
        if value not in (1, -1):
            raise ValueError(f"Offset parity must be 1 or -1, got {value}")
        return value


settings = Settings()
