#!/usr/bin/env python3
"""Programmatic persona creation example.

This demonstrates using the persona creator components directly:

* load settings from `.env`
* scaffold a persona without touching GitHub
* mark credential kinds as configured and watch readiness change

The registry location comes from `PERSONA_REGISTRY_PATH` (see `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from persona_creator.config import PersonaSettings
from persona_creator.github import SkippedRepoBootstrap
from persona_creator.lifecycle import PersonaLifecycle
from persona_creator.logging import configure_logging
from persona_creator.registry import RegistryStore


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a persona (programmatic example).")
    parser.add_argument("--name", required=True, help="Persona name")
    parser.add_argument("--description", default="", help="Persona description")
    parser.add_argument(
        "--keys",
        default="openai,anthropic",
        help='Comma-separated key types to mark configured, e.g. "openai,anthropic"',
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    key_types = [key.strip() for key in args.keys.split(",") if key.strip()]

    settings = PersonaSettings()
    configure_logging(settings.log_level)

    lifecycle = PersonaLifecycle(
        store=RegistryStore(settings.registry_path),
        bootstrap=SkippedRepoBootstrap(),
        settings=settings,
    )

    created = lifecycle.create_persona(name=args.name, description=args.description)
    print(f"Scaffolded {created.persona.name} at {created.persona_path}")

    for key_type in key_types:
        outcome = lifecycle.add_key(name=args.name, key_type=key_type)
        persona = outcome.persona
        print(
            f"+{key_type}: status={persona.status} ready={persona.is_ready} "
            f"missing={', '.join(persona.missing_keys) or 'none'}"
        )

    print(f"Persisted to: {settings.registry_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
