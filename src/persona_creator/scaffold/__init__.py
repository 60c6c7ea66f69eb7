"""Persona scaffold generation (templates + file writing)."""

from persona_creator.scaffold.generator import create_config, create_persona_scaffold

__all__ = ["create_config", "create_persona_scaffold"]
