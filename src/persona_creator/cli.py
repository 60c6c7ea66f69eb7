"""CLI entrypoint for the persona creator.

Exit codes:
- 0: success
- 1: persona not found (or key not configured on `remove-key`)
- 2: invalid arguments or configuration (including a missing path on `register`)
- 3: registry persistence failure or any other unexpected failure
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from persona_creator import __version__
from persona_creator.config import PersonaSettings
from persona_creator.errors import (
    KeyNotConfigured,
    PersonaNotFound,
    PersonaPathMissing,
    RegistryPersistenceError,
)
from persona_creator.github import (
    GitHubRepoClient,
    GitRepoBootstrap,
    RepoBootstrap,
    SkippedRepoBootstrap,
)
from persona_creator.lifecycle import PersonaLifecycle
from persona_creator.logging import configure_logging
from persona_creator.registry import (
    PersonaStatus,
    PersonaView,
    RegistryStore,
    marker_configured_at,
)
from persona_creator.scaffold.generator import CONFIG_FILENAME
from persona_creator.scaffold.templates import (
    RULE,
    SUGGESTED_KEY_TYPES,
    render_next_steps,
    render_setup_guide,
)

logger = logging.getLogger(__name__)

PROG = "persona-creator"

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_ARGUMENTS = 2
EXIT_FAILURE = 3

_STATUS_ICONS = {
    PersonaStatus.READY.value: "[+]",
    PersonaStatus.NEEDS_SETUP.value: "[!]",
    PersonaStatus.ERROR.value: "[x]",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Create and manage AI personas: folder structure, config, GitHub repo and registry",
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-persona", help="Create a new AI persona")
    create.add_argument("name", help="Persona name (e.g. green-open)")
    create.add_argument(
        "--model",
        default=None,
        help="Default model for the persona (defaults to PERSONA_DEFAULT_MODEL)",
    )
    create.add_argument("--description", default="", help="Persona description")
    create.add_argument(
        "--skip-remote",
        action="store_true",
        help="Do not initialise git or create the GitHub repository",
    )

    setup = subparsers.add_parser(
        "setup", help="Show setup guidance for a persona (Discord, API keys, channels)"
    )
    setup.add_argument("name", help="Persona name")

    list_cmd = subparsers.add_parser("list", help="List all registered personas")
    list_cmd.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    status = subparsers.add_parser("status", help="Show status and configured keys for a persona")
    status.add_argument("name", help="Persona name")
    status.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    register = subparsers.add_parser(
        "register", help="Manually register an existing persona folder"
    )
    register.add_argument("name", help="Persona name")
    register.add_argument(
        "--repo", default=None, help="GitHub repo in 'org/repo' form (defaults to the org/prefix)"
    )
    register.add_argument(
        "--path", default=None, help="Local path to the persona (defaults to PERSONA_ROOT/<name>)"
    )

    add_key = subparsers.add_parser("add-key", help="Mark a key as configured for a persona")
    add_key.add_argument("name", help="Persona name")
    add_key.add_argument("key_type", help="Key type (e.g. openai, anthropic, elevenlabs)")

    remove_key = subparsers.add_parser(
        "remove-key", help="Remove a configured key marker from a persona"
    )
    remove_key.add_argument("name", help="Persona name")
    remove_key.add_argument("key_type", help="Key type to remove")

    update_status = subparsers.add_parser(
        "update-status", help="Update the status of a persona"
    )
    update_status.add_argument("name", help="Persona name")
    update_status.add_argument(
        "status", help="New status (ready, needs-setup, error; other values are accepted)"
    )

    unregister = subparsers.add_parser("unregister", help="Remove a persona from the registry")
    unregister.add_argument("name", help="Persona name")

    return parser


def _build_bootstrap(
    settings: PersonaSettings, *, skip_remote: bool
) -> tuple[RepoBootstrap, GitHubRepoClient | None]:
    if skip_remote:
        return SkippedRepoBootstrap(), None

    github = (
        GitHubRepoClient(token=settings.github_token, base_url=settings.github_base_url)
        if settings.github_token.strip()
        else None
    )
    bootstrap = GitRepoBootstrap(
        github=github,
        token=settings.github_token,
        git_user_name=settings.git_user_name,
        git_user_email=settings.git_user_email,
        private=settings.repo_private,
    )
    return bootstrap, github


def _print_list(personas: list[PersonaView]) -> None:
    if not personas:
        print("No personas registered yet.")
        print(f"Create one with: {PROG} create-persona <name>")
        return

    print(RULE)
    print("REGISTERED PERSONAS")
    print(RULE)
    for p in personas:
        icon = _STATUS_ICONS.get(p.status, "[?]")
        print(f"\n{icon} {p.name}")
        print(f"   Status: {p.status}")
        print(f"   Repo: {p.repo}")
        print(f"   Keys: {', '.join(p.keys_configured) or 'none'}")
        if p.missing_keys:
            print(f"   Missing: {', '.join(p.missing_keys)}")
    print("\n" + RULE)
    print(f"Total: {len(personas)} persona(s)")


def _print_status(persona: PersonaView) -> None:
    print(RULE)
    print(f"PERSONA: {persona.name}")
    print(RULE)
    print(f"Status: {persona.status}")
    print(f"Repo: {persona.repo}")
    print(f"Path: {persona.path}")
    print(f"Created: {persona.created_at}")
    print(f"Last Updated: {persona.last_updated}")

    print("\n--- Keys & Configuration ---")
    if not persona.keys_configured:
        print("No keys configured yet.")
    for key in persona.keys_configured:
        configured_at = marker_configured_at(persona.record.keys[key]) or "unknown"
        print(f"  [+] {key} (configured: {configured_at})")

    print("\n--- Missing Keys ---")
    if persona.missing_keys:
        print(f"  {', '.join(persona.missing_keys)}")
    else:
        print("  All common keys configured!")

    print("\n--- Readiness ---")
    print(f"  Status: {'Ready' if persona.is_ready else 'Needs Setup'}")
    print("\n" + RULE)


def _print_setup(persona: PersonaView, settings: PersonaSettings) -> None:
    print("\n" + RULE)
    print(f"SETUP GUIDE: {persona.name}")
    print(RULE)

    guide_path = settings.setup_guide_path
    if guide_path is not None and guide_path.is_file():
        print(guide_path.read_text(encoding="utf-8"))
    else:
        print(
            render_setup_guide(
                persona.name,
                SUGGESTED_KEY_TYPES,
                PROG,
                config_path=str(Path(persona.path) / CONFIG_FILENAME) if persona.path else "",
            )
        )
    print(RULE + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = PersonaSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_INVALID_ARGUMENTS

    configure_logging(settings.log_level)

    store = RegistryStore(settings.registry_path)

    try:
        if args.command == "create-persona":
            bootstrap, github = _build_bootstrap(settings, skip_remote=args.skip_remote)
            try:
                lifecycle = PersonaLifecycle(store=store, bootstrap=bootstrap, settings=settings)
                print(f'Creating persona "{args.name}"...')
                created = lifecycle.create_persona(
                    name=args.name, model=args.model, description=args.description
                )
            finally:
                if github is not None:
                    github.close()

            print(f"Path: {created.persona_path}")
            print(f"Config: {created.config_path}")
            if created.bootstrap.skipped:
                print("Repository bootstrap skipped")
            elif created.bootstrap.ok:
                print(f"Git repo initialised and pushed to GitHub: {created.bootstrap.repository}")
            else:
                print(
                    f"Repository bootstrap failed: {created.bootstrap.error}",
                    file=sys.stderr,
                )
                print("Persona registered locally only; push the repository manually later.")
            print(f"Persona registered: {created.persona.name} ({created.persona.status})")
            print(
                render_next_steps(
                    created.persona.name, created.persona.repo, SUGGESTED_KEY_TYPES, PROG
                )
            )
            return EXIT_OK

        lifecycle = PersonaLifecycle(
            store=store, bootstrap=SkippedRepoBootstrap(), settings=settings
        )

        if args.command == "setup":
            _print_setup(lifecycle.status(args.name), settings)
            return EXIT_OK

        if args.command == "list":
            personas = lifecycle.list_personas()
            if args.json:
                print(json.dumps([p.to_json() for p in personas], indent=2))
            else:
                _print_list(personas)
            return EXIT_OK

        if args.command == "status":
            persona = lifecycle.status(args.name)
            if args.json:
                print(json.dumps(persona.to_json(), indent=2))
            else:
                _print_status(persona)
            return EXIT_OK

        if args.command == "register":
            path = Path(args.path).expanduser() if args.path else None
            persona = lifecycle.register_existing(name=args.name, repo=args.repo, path=path)
            print(f'Persona "{persona.name}" registered successfully!')
            print(f"   Status: {persona.status}")
            print(f"   Keys: {', '.join(persona.keys_configured) or 'none'}")
            print(f"   Missing: {', '.join(persona.missing_keys) or 'none'}")
            return EXIT_OK

        if args.command == "add-key":
            outcome = lifecycle.add_key(name=args.name, key_type=args.key_type)
            print(f'Added key "{args.key_type}" to persona "{args.name}"')
            if outcome.became_ready:
                print('All keys configured! Status updated to "ready"')
            return EXIT_OK

        if args.command == "remove-key":
            lifecycle.remove_key(name=args.name, key_type=args.key_type)
            print(f'Removed key "{args.key_type}" from persona "{args.name}"')
            return EXIT_OK

        if args.command == "update-status":
            lifecycle.update_status(name=args.name, status=args.status)
            print(f'Updated status for "{args.name}" to "{args.status}"')
            return EXIT_OK

        if args.command == "unregister":
            lifecycle.unregister(args.name)
            print(f'Unregistered persona "{args.name}"')
            return EXIT_OK

        logger.error("Unknown command", extra={"command": args.command})
        return EXIT_INVALID_ARGUMENTS

    except PersonaNotFound as e:
        print(f"{e}.", file=sys.stderr)
        print(f"Use `{PROG} list` to see registered personas.", file=sys.stderr)
        return EXIT_NOT_FOUND

    except KeyNotConfigured as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND

    except PersonaPathMissing as e:
        print(str(e), file=sys.stderr)
        return EXIT_INVALID_ARGUMENTS

    except RegistryPersistenceError as e:
        logger.error(str(e), extra={"path": str(e.path)})
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
