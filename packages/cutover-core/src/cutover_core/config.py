"""Descriptor generation configuration.

Loaded from an optional ``cutover.yaml``. Every field has a default, so an
empty file (or no file at all) yields the standard behavior.

Example cutover.yaml::

    ignored_chunks: [Dbgi, Docs]
    max_workers: 4
    output_format: appup
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
import yaml

from cutover_core.errors import ConfigurationError

DEFAULT_IGNORED_CHUNKS: frozenset[str] = frozenset({"Dbgi"})
"""Chunk kinds whose changes have no runtime-observable effect."""

OutputFormat = Literal["appup", "json"]


class CutoverConfig(BaseModel):
    """Configuration for descriptor generation.

    Attributes:
        ignored_chunks: Chunk kinds that may differ without making a unit
            significantly changed (debug info by default).
        max_workers: Worker threads for per-unit filtering and extraction.
            1 runs everything inline.
        output_format: Descriptor serialization (appup terms or JSON).

    Example:
        >>> config = CutoverConfig(ignored_chunks={"Dbgi", "Docs"}, max_workers=4)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ignored_chunks: frozenset[str] = Field(
        default=DEFAULT_IGNORED_CHUNKS,
        description="Chunk kinds ignored when deciding whether a unit changed",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Worker threads for per-unit analysis",
    )
    output_format: OutputFormat = Field(
        default="appup",
        description="Descriptor serialization format",
    )

    @field_validator("ignored_chunks")
    @classmethod
    def _chunk_tags(cls, value: frozenset[str]) -> frozenset[str]:
        for tag in value:
            if len(tag) != 4:
                msg = f"Chunk kind '{tag}' must be exactly 4 characters"
                raise ValueError(msg)
        return value

    @classmethod
    def from_yaml(cls, path: str | Path) -> CutoverConfig:
        """Load and validate configuration from a YAML file.

        Args:
            path: Path to the configuration file.

        Returns:
            Validated CutoverConfig instance.

        Raises:
            ConfigurationError: If the file is missing, is not valid YAML, or
                fails schema validation.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError("Configuration file not found", file_path=str(path))

        try:
            with path.open("r") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Configuration file is not valid YAML",
                file_path=str(path),
                internal_details=str(e),
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping", file_path=str(path))

        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(x) for x in err["loc"]) for err in e.errors())
            raise ConfigurationError(
                f"Invalid configuration for: {fields}",
                file_path=str(path),
                internal_details=str(e),
            ) from e

    def merged(self, **overrides: Any) -> CutoverConfig:
        """Return a copy with the non-None overrides applied and re-validated."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return CutoverConfig.model_validate({**self.model_dump(), **updates})
