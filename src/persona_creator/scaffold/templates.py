"""Document templates for persona scaffolds.

Everything here is a pure `fields -> text` function; writing files is the
generator's job.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

DEFAULT_DESCRIPTION = "A new AI persona"

# Keys suggested in the setup guidance printed after `create-persona`.
SUGGESTED_KEY_TYPES: tuple[str, ...] = ("openai", "anthropic", "elevenlabs", "huggingface")

IDENTITY_TEMPLATE = """# {name}

{description}

## Core Identity
- **Role**:
- **Purpose**:
- **Values**:

## Expertise
-
"""

SOUL_TEMPLATE = """# Soul - {name}

This document defines who you are at your core.

## Personality
- **Tone**:
- **Style**:
- **Approach**:

## Behavioral Guidelines
1.
2.
3.

## Constraints
-
"""

CONFIG_TEMPLATE = """# Persona Configuration for {name}

# Default model for this persona
defaultModel: {model}

# Skills available to this persona (add skill names here)
skills: []

# Personality settings
personality:
  tone: neutral
  verbosity: medium
  creativity: 0.7

# Memory settings
memory:
  enabled: true
  maxEntries: 100

# Model-specific settings
modelSettings:
  temperature: 0.7
  maxTokens: 4096
"""

DISCORD_GUIDE = """## Discord Bot Setup

Create a bot at the Discord Developer Portal: https://discord.com/developers/applications

1. **Create Bot**
   - Create application -> Bot -> Add Bot
   - Under "Privileged Gateway Intents":

| Intent | Enable? | Why |
|--------|---------|-----|
| Server Members Intent | YES | See who talks to the bot |
| Message Content Intent | YES | Required to read & respond |
| Presence Intent | NO | Not needed |

2. **Uncheck "Public Bot"** (keep private)
3. Copy the **Bot Token** (keep it secret!)

4. **Guild ID (Server ID)**
   - Enable Developer Mode in Discord settings
   - Right-click your server -> Copy ID

5. **Channel IDs**
   - Enable Developer Mode
   - Right-click target channels -> Copy ID
   - Common channels:
     - Persona interaction channel
     - Log/audit channel
     - Admin commands channel (if applicable)

### Required Permissions:

- View Channels, Send Messages, Manage Messages
- Embed Links, Attach Files, Read Message History
- Add Reactions, Use Slash Commands
- Mention Everyone (@bot-to-bot mentions)
- Manage Threads, Create Public/Private Threads
- Send Messages in Threads, Pin Messages
- Use External Emojis, Use External Stickers

### Generate Invite Link:

OAuth2 URL Generator:
- Scope: bot
- Permissions: the list above

Copy the generated URL and open it to invite.
"""

RULE = "=" * 70


def render_identity(name: str, description: str = "") -> str:
    return IDENTITY_TEMPLATE.format(name=name, description=description or DEFAULT_DESCRIPTION)


def render_soul(name: str) -> str:
    return SOUL_TEMPLATE.format(name=name)


def render_config(name: str, model: str) -> str:
    # A JSON string is a valid double-quoted YAML scalar.
    return CONFIG_TEMPLATE.format(name=" ".join(name.splitlines()), model=json.dumps(model))


def render_setup_guide(
    name: str, key_types: Sequence[str], command: str, config_path: str = ""
) -> str:
    """Full setup walkthrough shown by the `setup` command."""

    config_hint = config_path or f"the {name} persona's config.yaml"
    lines = [
        DISCORD_GUIDE,
        "### API Keys Configuration:",
        "",
        "Run these commands to configure API keys:",
        "",
    ]
    lines.extend(f"  {command} add-key {name} {key_type}" for key_type in key_types)
    lines.extend(
        [
            "",
            "### Next Steps:",
            "",
            "1. Copy your bot token and run:",
            f"   {command} add-key {name} discord",
            "",
            f"2. Create/update {config_hint} with channel/guild IDs",
            "",
            "3. Invite your bot to the server with proper permissions",
            "",
            f"4. Test with: {command} status {name}",
            "",
        ]
    )
    return "\n".join(lines)


def render_next_steps(name: str, repository: str, key_types: Sequence[str], command: str) -> str:
    """Short guidance printed after a persona has been created."""

    return "\n".join(
        [
            "",
            RULE,
            "SETUP GUIDANCE FOR YOUR NEW PERSONA",
            RULE,
            "",
            f'Persona "{name}" created successfully!',
            f"GitHub: https://github.com/{repository}",
            "",
            "Your next steps:",
            "",
            "1. CONFIGURE API KEYS",
            f"   Run: {command} add-key {name} <key-type>",
            f"   Common keys: {', '.join(key_types)}",
            "",
            "2. DISCORD BOT SETUP (if using Discord)",
            "   Create bot at: https://discord.com/developers/applications",
            "   You'll need:",
            "   - Discord Bot Token",
            "   - Channel IDs for persona interaction",
            "   - Guild ID (server ID)",
            "",
            "3. VIEW DETAILED SETUP INSTRUCTIONS",
            f"   Run: {command} setup {name}",
            "",
            "4. CHECK PERSONA STATUS",
            f"   Run: {command} status {name}",
            "",
            RULE,
        ]
    )
