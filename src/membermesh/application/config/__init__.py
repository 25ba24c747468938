"""Settings schema and loading for mesh generation.

Public API:
    - MeshSettings: Root settings model
    - MeshingConfig: Meshing parameters (subdivisions, DROP epsilon, haunch fraction)
    - OutputConfig: Export format options
    - load_settings: Load settings from a JSON file
    - load_settings_from_dict: Load settings from a dictionary
    - ConfigError: Exception for settings errors

Example:
    >>> from pathlib import Path
    >>> from membermesh.application.config import load_settings, ConfigError
    >>>
    >>> try:
    ...     settings = load_settings(Path("mesh-settings.json"))
    ...     print(settings.meshing.subdivisions)
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from membermesh.application.config.loader import (
    ConfigError,
    load_settings,
    load_settings_from_dict,
)
from membermesh.application.config.schema import (
    SUPPORTED_OUTPUT_FORMATS,
    SUPPORTED_VERSIONS,
    MeshingConfig,
    MeshSettings,
    OutputConfig,
)

__all__ = [
    "ConfigError",
    "MeshSettings",
    "MeshingConfig",
    "OutputConfig",
    "SUPPORTED_OUTPUT_FORMATS",
    "SUPPORTED_VERSIONS",
    "load_settings",
    "load_settings_from_dict",
]
