# SPDX-License-Identifier: MIT
"""CLI configuration loading from pyproject.toml.

Example:
    [project]
    version = "1.4.0"

    [tool.semrange]
    range = ">=1.0.0 <2.0.0"
    prerelease = false
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ValidationError
from .ranges import Range, parse_range
from .semver import Version, parse_version

PYPROJECT = "pyproject.toml"


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


@dataclass
class SemrangeConfig:
    """Configuration loaded from pyproject.toml.

    Attributes:
        project_dir: Directory containing pyproject.toml, if one was found
        version: Project version from [project].version
        range: Default range expression for ``semrange match``
        prerelease: Whether ``semrange match`` accepts pre-release versions
    """

    project_dir: Optional[Path] = None
    version: str = ""
    range: str = ""
    prerelease: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.version:
            try:
                parse_version(self.version)
            except ValidationError as e:
                raise ConfigError(f"Invalid project version {self.version!r}: {e}") from e
        if self.range:
            try:
                parse_range(self.range)
            except ValidationError as e:
                raise ConfigError(f"Invalid range {self.range!r}: {e}") from e
        if not isinstance(self.prerelease, bool):
            raise ConfigError(
                f"tool.semrange.prerelease must be a boolean, got {self.prerelease!r}"
            )

    @property
    def project_version(self) -> Optional[Version]:
        return parse_version(self.version) if self.version else None

    @property
    def default_range(self) -> Optional[Range]:
        return parse_range(self.range) if self.range else None

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "SemrangeConfig":
        """Load configuration from pyproject.toml.

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If pyproject.toml doesn't exist
        """
        project_path = Path(project_dir)
        pyproject_path = project_path / PYPROJECT

        if not pyproject_path.exists():
            raise FileNotFoundError(f"{PYPROJECT} not found in {project_path}")

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject, project_path)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        project_dir: Optional[Path] = None,
    ) -> "SemrangeConfig":
        """Create SemrangeConfig from a parsed pyproject.toml dictionary."""
        project = pyproject.get("project", {})
        tool = pyproject.get("tool", {}).get("semrange", {})

        version = project.get("version", "")
        if not isinstance(version, str):
            raise ConfigError(f"project.version must be a string, got {version!r}")
        range_text = tool.get("range", "")
        if not isinstance(range_text, str):
            raise ConfigError(f"tool.semrange.range must be a string, got {range_text!r}")

        return cls(
            project_dir=project_dir,
            version=version,
            range=range_text,
            prerelease=tool.get("prerelease", True),
        )


def find_project_root(start: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest directory at or above start containing pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / PYPROJECT).is_file():
            return directory
    return None


def load_config(project_dir: Optional[Path] = None) -> SemrangeConfig:
    """Load configuration for project_dir, or defaults if there is none."""
    root = find_project_root(project_dir)
    if root is None:
        return SemrangeConfig()
    return SemrangeConfig.from_pyproject(root)
