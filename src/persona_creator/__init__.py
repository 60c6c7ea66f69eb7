"""Persona Creator.

A small, local-first CLI that:
- scaffolds persona directories (identity, soul, config)
- bootstraps a git repository and its GitHub remote
- tracks provisioning state in a JSON persona registry
"""

__version__ = "0.1.0"

from persona_creator.config import PersonaSettings

__all__ = ["__version__", "PersonaSettings"]
