"""Escaping codec for free-form text stored in the delimited diary format.

Four characters are special inside a field: the backslash, the `|` used by
the field delimiter, and the `\n` and `\r` that can end a record. Encoding escapes
the backslash first so that decoding, which scans left to right, can always
tell an escape sequence from literal text.
"""

from __future__ import annotations

ESCAPE = "\\"
DELIMITER_CHAR = "|"
DELIMITER = f" {DELIMITER_CHAR} "

_DECODE_MAP = {
    DELIMITER_CHAR: DELIMITER_CHAR,
    "n": "\n",
    "r": "\r",
    ESCAPE: ESCAPE,
}


def encode(text: str | None) -> str:
    """Escape `text` so it can be stored in a single field.

    >>> encode("a|b")
    'a\\\\|b'
    >>> encode(None)
    ''
    """
    if text is None:
        return ""
    return (
        text.replace(ESCAPE, ESCAPE + ESCAPE)
        .replace(DELIMITER_CHAR, ESCAPE + DELIMITER_CHAR)
        .replace("\n", ESCAPE + "n")
        .replace("\r", ESCAPE + "r")
    )


def decode(text: str | None) -> str:
    """Reverse `encode`.

    A backslash followed by any other character is kept literally together
    with that character, and a trailing lone backslash is kept as is.
    """
    if text is None:
        return ""
    out: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            out.append(_DECODE_MAP.get(ch, ESCAPE + ch))
            escaped = False
        elif ch == ESCAPE:
            escaped = True
        else:
            out.append(ch)
    if escaped:
        out.append(ESCAPE)
    return "".join(out)


def split_fields(line: str) -> list[str]:
    """Split a raw record line on the delimiter, leaving fields encoded.

    Escape sequences are copied through untouched, so an escaped `|` never
    ends a field and each part can be handed to `decode` afterwards.
    """
    parts: list[str] = []
    current: list[str] = []
    width = len(DELIMITER)
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == ESCAPE:
            current.append(line[i : i + 2])
            i += 2
            continue
        if line.startswith(DELIMITER, i):
            parts.append("".join(current))
            current = []
            i += width
            continue
        current.append(ch)
        i += 1
    parts.append("".join(current))
    return parts


def join_fields(marker: str, *fields: str) -> str:
    """Join a marker and already-encoded fields into one record line."""
    return DELIMITER.join((marker, *fields))
