"""Prompt builders shared across services."""

EXCHANGE_SEPARATOR = "\n\n"
EXCHANGE_START = EXCHANGE_SEPARATOR + "User: "


def build_npc_assistant_prompt() -> str:
    return (
        "You are the voice of non-player characters in a Star Wars roleplay hub. "
        "Each request names one NPC, its personality and its memory of earlier conversations. "
        "Always answer as that NPC, in character, and never mention being an AI or a model."
    )


def recent_history(history: str, max_chars: int) -> str:
    """
    Return the tail of an interaction history that fits in ``max_chars``.

    The cut lands where a stored exchange begins (a blank line followed by
    ``User: ``), so blank lines inside a reply are never mistaken for one.
    When no exchange starts inside the budget the raw tail is returned.
    A non-positive budget disables the cap.
    """
    if max_chars <= 0 or len(history) <= max_chars:
        return history
    window = history[-(max_chars + len(EXCHANGE_SEPARATOR)):]
    boundary = window.find(EXCHANGE_START)
    if boundary == -1:
        return history[-max_chars:]
    return window[boundary + len(EXCHANGE_SEPARATOR):]


def build_npc_turn_prompt(
    npc_name: str,
    personality: str,
    history: str,
    utterance: str,
) -> str:
    return f"""You are roleplaying as an NPC named {npc_name}.
Your personality is: {personality}.
Here is your memory of past interactions. It is context only: do not repeat it verbatim, just use it to stay consistent.
--- MEMORY START ---
{history}
--- MEMORY END ---
Based on your personality and memory, respond to the user's latest message. Keep your response in character and concise.
User's message: "{utterance}\""""
