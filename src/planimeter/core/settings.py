from __future__ import annotations

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from planimeter import consts


class EllipsoidSettings(BaseModel):
    name: str = consts.ellipsoids.DEFAULT_ELLIPSOID
    major_radius: float | None = None
    flattening: float | None = None

    @model_validator(mode="after")
    def check_explicit_parameters(self) -> EllipsoidSettings:
        if (self.major_radius is None) != (self.flattening is None):
            msg = "Both major_radius and flattening have to be provided to define a custom ellipsoid"
            raise ValueError(msg)
        return self


class OutputSettings(BaseModel):
    precision: int = 3


class Settings(BaseSettings):
    """Represents Application Settings with nested configuration sections."""

    environment: str = "local"
    log_level: str = consts.logging.DEFAULT_LOG_LEVEL
    ellipsoid: EllipsoidSettings = EllipsoidSettings()
    output: OutputSettings = OutputSettings()

    model_config = SettingsConfigDict(
        env_prefix="PLANIMETER_",
        env_file=consts.directories.ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


def current_settings() -> Settings:
    return Settings()
