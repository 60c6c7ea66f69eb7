"""Write persona scaffolds to disk.

Existing files are overwritten. Filesystem errors propagate to the caller; a
partially written scaffold is left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path

from persona_creator.scaffold.templates import render_config, render_identity, render_soul

logger = logging.getLogger(__name__)

SUBDIRECTORIES: tuple[str, ...] = ("skills", "memory")
CONFIG_FILENAME = "config.yaml"


def _write(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    logger.info("Created file", extra={"path": str(path)})


def create_persona_scaffold(*, root: Path, name: str, description: str = "") -> Path:
    """Create `<root>/<name>` with identity/soul documents and placeholder folders.

    Returns:
        The persona directory.
    """

    persona_path = root / name
    for directory in (persona_path, *(persona_path / sub for sub in SUBDIRECTORIES)):
        if not directory.exists():
            directory.mkdir(parents=True)
            logger.info("Created directory", extra={"path": str(directory)})

    _write(persona_path / "IDENTITY.md", render_identity(name, description))
    _write(persona_path / "SOUL.md", render_soul(name))
    for sub in SUBDIRECTORIES:
        _write(persona_path / sub / ".gitkeep", "")

    return persona_path


def create_config(*, persona_path: Path, name: str, model: str) -> Path:
    """Write `config.yaml` for a persona and return its path."""

    config_path = persona_path / CONFIG_FILENAME
    _write(config_path, render_config(name, model))
    return config_path
