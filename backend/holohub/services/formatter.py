"""Per-line style tags: ``[B]`` bold, ``[C]`` center, ``[I]`` italic, ``[U]`` underline."""

import re

from holohub.models import FormattedLine, FormattedWikiEntry, WikiEntry

_STYLE_TAG_PATTERN = re.compile(r"^\[([BCIU]+)\]", re.IGNORECASE)
NBSP = "\u00a0"


def format_line(line: str) -> FormattedLine:
    match = _STYLE_TAG_PATTERN.match(line)
    if not match:
        return FormattedLine(text=line or NBSP)
    commands = match.group(1).upper()
    return FormattedLine(
        text=line[match.end():] or NBSP,
        bold="B" in commands,
        center="C" in commands,
        italic="I" in commands,
        underline="U" in commands,
    )


def format_message(text: str | None) -> list[FormattedLine]:
    if not text:
        return []
    return [format_line(line) for line in text.split("\n")]


def format_wiki_entry(entry: WikiEntry) -> FormattedWikiEntry:
    return FormattedWikiEntry(
        id=entry.id,
        name=entry.name,
        type=entry.type.value,
        content=format_message(entry.content),
        personality=format_message(entry.personality),
        interaction_history=format_message(entry.interaction_history),
    )
