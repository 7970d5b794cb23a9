"""Configuration models describing secutils settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SecutilsBaseModel(BaseModel):
    """Shared configuration for secutils settings models."""

    model_config = ConfigDict(extra="forbid")


class InspectionSettings(SecutilsBaseModel):
    """Settings for the file inspection engine.

    Attributes:
        chunk_size_kb: Read size, in KiB, used while digesting file content.
        resolve_owners: Whether to map uid/gid values to principal names.
    """

    chunk_size_kb: int = Field(default=64, gt=0)
    resolve_owners: bool = True


class OutputSettings(SecutilsBaseModel):
    """Settings for serialized output.

    Attributes:
        indent: JSON indentation used for persisted records and ``--json`` output.
    """

    indent: int = Field(default=2, ge=0)


class IocSettings(SecutilsBaseModel):
    """Settings for indicator-of-compromise extraction.

    Attributes:
        max_file_size_mb: Text files larger than this are skipped.
    """

    max_file_size_mb: int = Field(default=25, gt=0)


class LoggingSettings(SecutilsBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level name.
    """

    level: str = "WARNING"


class CLIOptions(SecutilsBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        json_default: Whether commands emit JSON by default.
    """

    quiet_default: bool = False
    json_default: bool = False


class SecutilsConfig(SecutilsBaseModel):
    """Top-level configuration for secutils."""

    inspection: InspectionSettings = Field(default_factory=InspectionSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    ioc: IocSettings = Field(default_factory=IocSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "SecutilsBaseModel",
    "InspectionSettings",
    "OutputSettings",
    "IocSettings",
    "LoggingSettings",
    "CLIOptions",
    "SecutilsConfig",
]
