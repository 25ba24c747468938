"""Pydantic models for mesh generation settings files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from membermesh.domain.segment_resolver import (
    DEFAULT_DROP_EPSILON,
    DEFAULT_HAUNCH_FRACTION,
)

# Supported schema versions for settings files
# Version 1.0: Initial schema with meshing parameters and output options
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

SUPPORTED_OUTPUT_FORMATS: frozenset[str] = frozenset({"stl", "json"})


class MeshingConfig(BaseModel):
    """Meshing parameters shared by every member.

    Attributes:
        subdivisions: Interpolation steps per tapered segment.
        drop_epsilon: Gap in mm between the two boundaries of a DROP transition.
        default_haunch_fraction: Haunch length, as a fraction of member length,
            for two-section members that give none.
    """

    model_config = ConfigDict(extra="forbid")

    subdivisions: int = Field(default=1, ge=1, le=256)
    drop_epsilon: float = Field(default=DEFAULT_DROP_EPSILON, gt=0)
    default_haunch_fraction: float = Field(default=DEFAULT_HAUNCH_FRACTION, gt=0, le=0.5)


class OutputConfig(BaseModel):
    """Export options.

    Attributes:
        formats: Export formats to write (stl, json).
        stl_y_up: Swap Z-up member coordinates to Y-up in STL output.
    """

    model_config = ConfigDict(extra="forbid")

    formats: list[str] = Field(default_factory=lambda: ["stl"])
    stl_y_up: bool = False

    @field_validator("formats")
    @classmethod
    def validate_formats(cls, v: list[str]) -> list[str]:
        """Validate that every requested format is known."""
        normalized = [fmt.strip().lower() for fmt in v]
        unknown = sorted(set(normalized) - SUPPORTED_OUTPUT_FORMATS)
        if unknown:
            raise ValueError(
                f"Unsupported output format(s): {', '.join(unknown)}. "
                f"Supported: {', '.join(sorted(SUPPORTED_OUTPUT_FORMATS))}"
            )
        return normalized


class MeshSettings(BaseModel):
    """Root model of a settings file.

    Example:
        >>> settings = MeshSettings.model_validate(
        ...     {"schema_version": "1.0", "meshing": {"subdivisions": 4}}
        ... )
        >>> settings.meshing.subdivisions
        4
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    meshing: MeshingConfig = Field(default_factory=MeshingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version: {v}. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )
