"""Detection of chat messages addressed to an NPC (``@Name, message``)."""

import re

from holohub.models import NpcInvocation

NPC_INVOCATION_PATTERN = re.compile(r"^@([\w\s-]+),")


def parse_npc_invocation(text: str) -> NpcInvocation | None:
    """
    Classify a raw chat message.

    Returns the target name and utterance when the message starts with
    ``@`` + name + ``,``, otherwise None (a plain message). Both parts are
    trimmed once; nothing else is normalized.

    Examples:
        "@Boba Fett, where are you?" -> ("Boba Fett", "where are you?")
        "@X," -> ("X", "")
        "hello @X, there" -> None
    """
    match = NPC_INVOCATION_PATTERN.match(text)
    if not match:
        return None
    return NpcInvocation(
        target_name=match.group(1).strip(),
        utterance=text[match.end():].strip(),
    )
