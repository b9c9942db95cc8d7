"""
Enum definitions for the HoloHub API.
"""
from enum import Enum


class WikiEntryType(str, Enum):
    """Discriminator for Holo-Wiki entries."""
    CHARACTER = "character"
    NPC = "npc"
    LORE = "lore"


class ComposerState(str, Enum):
    """In-flight state of a single chat composer."""
    IDLE = "idle"
    PENDING = "pending"


class NpcTurnStatus(str, Enum):
    """How an NPC invocation ended."""
    REPLIED = "replied"
    NOT_FOUND = "not_found"
    FAILED = "failed"


def normalize_type(type_str: str) -> str:
    """
    Normalize a wiki type string for consistency.

    Examples:
        "NPC" -> "npc"
        " Lore " -> "lore"
    """
    return type_str.lower().strip().replace(" ", "_")
