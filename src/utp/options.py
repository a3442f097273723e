"""FFmpeg option string tokenizer.

Admin-entered option strings ("-crf 32 -b:v 5M") are split into the
argument lists handed to the host's encoder profiles. The lexer is
deliberately forgiving: it never raises, so a typo in a settings field can
only produce odd arguments, never a failed reconciliation.

Rules:
    - A space outside quotes separates tokens; runs of spaces and
      leading/trailing spaces never produce empty tokens. Tabs and line
      breaks are ordinary characters.
    - A double quote toggles quoted mode and is not copied. A quote always
      opens a token, so ``""`` yields one empty token.
    - ``\\X`` is decoded as ``X`` inside and outside quotes. A lone trailing
      backslash is kept as-is.
    - An unterminated quote consumes to the end of the string.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

_QUOTE = '"'
_ESCAPE = "\\"
_SPACE = " "


def parse_options_string(raw: Any) -> list[str]:
    """Split an option string into command-line tokens.

    Args:
        raw: Option string from settings. None and non-string values are
            treated as empty.

    Returns:
        Ordered list of tokens. Empty for None, non-string, empty or
        space-only input.

    Example:
        >>> parse_options_string('-crf 32 -metadata title="My Video"')
        ['-crf', '32', '-metadata', 'title=My Video']
    """
    if not raw or not isinstance(raw, str):
        return []

    tokens: list[str] = []
    current: list[str] = []
    in_token = False
    quoted = False
    i = 0
    length = len(raw)

    while i < length:
        char = raw[i]

        if char == _ESCAPE and i + 1 < length:
            current.append(raw[i + 1])
            in_token = True
            i += 2
            continue

        if char == _QUOTE:
            quoted = not quoted
            in_token = True
        elif char == _SPACE and not quoted:
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True
        i += 1

    if in_token:
        tokens.append("".join(current))

    return tokens


def _quote_token(token: str) -> str:
    escaped = token.replace(_ESCAPE, _ESCAPE * 2).replace(_QUOTE, _ESCAPE + _QUOTE)
    if not token or _SPACE in token:
        return f'"{escaped}"'
    return escaped


def format_options(tokens: Iterable[str]) -> str:
    """Render tokens back into an option string.

    Tokens containing a space, and empty tokens, are quoted; quotes and
    backslashes are escaped. Parsing the result with parse_options_string()
    gives back the same tokens.

    Args:
        tokens: Tokens to render.

    Returns:
        Space-separated option string.
    """
    return " ".join(_quote_token(token) for token in tokens)
