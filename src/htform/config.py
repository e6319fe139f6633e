"""
Project configuration, loaded from pyproject.toml [tool.htform].

    [tool.htform]
    readonly_form_attributes = ["id", "method"]
    log_level = "INFO"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import tomlkit

logger = logging.getLogger(__name__)

TOOL_NAME = "htform"
DEFAULT_READONLY_FORM_ATTRIBUTES = ["id", "method"]


@dataclass
class HTFormConfig:
    project_root: Path = field(default_factory=Path.cwd)
    readonly_form_attributes: list[str] = field(
        default_factory=lambda: list(DEFAULT_READONLY_FORM_ATTRIBUTES)
    )
    log_level: str = "WARNING"

    @classmethod
    def load(cls, project_root: Path) -> HTFormConfig:
        pyproject = project_root / "pyproject.toml"
        if not pyproject.exists():
            return cls(project_root=project_root)

        doc = tomlkit.parse(pyproject.read_text())
        tool_config = doc.get("tool", {}).get(TOOL_NAME, {})
        logger.debug(f"loaded [tool.{TOOL_NAME}] from {pyproject}: {dict(tool_config)}")

        return cls(
            project_root=project_root,
            readonly_form_attributes=[
                str(name)
                for name in tool_config.get(
                    "readonly_form_attributes", DEFAULT_READONLY_FORM_ATTRIBUTES
                )
            ],
            log_level=str(tool_config.get("log_level", "WARNING")).upper(),
        )

    def save(self) -> None:
        pyproject = self.project_root / "pyproject.toml"
        if pyproject.exists():
            doc = tomlkit.parse(pyproject.read_text())
        else:
            doc = tomlkit.document()

        if "tool" not in doc:
            doc["tool"] = tomlkit.table()

        doc["tool"][TOOL_NAME] = {
            "readonly_form_attributes": self.readonly_form_attributes,
            "log_level": self.log_level,
        }
        pyproject.write_text(tomlkit.dumps(doc))


_default: HTFormConfig | None = None


def get_config() -> HTFormConfig:
    """Process-wide configuration, loaded lazily from the working directory."""
    global _default
    if _default is None:
        _default = HTFormConfig.load(Path.cwd())
    return _default


def set_config(config: HTFormConfig | None) -> None:
    global _default
    _default = config
