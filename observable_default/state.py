"""
Global expansion settings.

Every pipeline entry point also accepts an explicit ``settings`` argument,
so the module-level state is only the fallback.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ExpansionSettings(BaseModel):
    """Container for all expansion configuration."""
    model_config = ConfigDict(frozen=True)

    # Name reported in diagnostics
    directive_name: str = "user_default"

    # Default store: `<default_store_type>.<default_store_member>`
    default_store_type: str = "Defaults"
    default_store_member: str = "standard"

    # Name of the implicit enclosing-type reference
    self_name: str = "Self"

    # Recognized directive labels, and alternate spellings accepted for them
    argument_labels: Tuple[str, ...] = ("key", "defaultValue", "store")
    label_aliases: Dict[str, str] = {"default_value": "defaultValue"}


class ExpansionState:
    """Holder for the active settings."""

    settings: ExpansionSettings = ExpansionSettings()


# Global state instance
state = ExpansionState()


def get_settings(settings: Optional[ExpansionSettings] = None) -> ExpansionSettings:
    """Return ``settings`` if given, else the active module-level settings."""
    if settings is not None:
        return settings
    return state.settings


def configure(**overrides) -> ExpansionSettings:
    """Replace the active settings with a validated copy carrying ``overrides``."""
    merged = state.settings.model_dump()
    merged.update(overrides)
    state.settings = ExpansionSettings.model_validate(merged)
    return state.settings


def reset_settings() -> ExpansionSettings:
    """Restore the default settings (for testing)."""
    state.settings = ExpansionSettings()
    return state.settings
