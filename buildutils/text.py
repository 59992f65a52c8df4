"""String and path helpers used by the templating scripts."""

from __future__ import annotations

import os
import re
from typing import Dict

_BACK_SLASH = re.compile(r"\\")
# Indentation of the last line of a string
_LAST_LINE_INDENT = re.compile(r"([^\S\r\n]*)[^\r\n]*\Z")
_SEPARATORS = re.compile(r"[\s_-]+")


def from_template(
    templ: str,
    subs: Dict[str, str],
    autoindent: bool = True,
    end: str = "\n",
) -> str:
    """Simple template substitution for template vars of the form ``{{name}}``.

    Args:
        templ: The template string, e.g. ``"generated by {{funcName}}"``.
        subs: Maps template variable names to their substitutions.
        autoindent: If True, continuation lines of a multi-line substitution
            are indented to the level of the line holding ``{{var}}``.
        end: Appended to the result after stripping.

    Returns:
        The template with all variables substituted, stripped, plus *end*.
    """
    for key, val in subs.items():
        parts = templ.split("{{%s}}" % key)
        if not autoindent:
            templ = val.join(parts)
            continue
        acc = parts[0]
        for cur in parts[1:]:
            match = _LAST_LINE_INDENT.search(acc)
            indent = match.group(1) if match else ""
            acc = acc + ("\n" + indent).join(val.split("\n")) + cur
        templ = acc

    return templ.strip() + end


def camel_case(text: str, upper: bool = False) -> str:
    """Convert ``snake-case``, ``snake_case`` or ``snake case`` to ``snakeCase``.

    With *upper* the first letter is capitalized as well (``SnakeCase``).
    Capitals inside a word are kept.
    """
    words = [w for w in _SEPARATORS.split(text) if w]
    if not words:
        return ""
    result = "".join(w[0].upper() + w[1:] for w in words)
    if not upper:
        result = result[0].lower() + result[1:]
    return result


def stem(path: str) -> str:
    """The last part of a path, without its extension(s)."""
    return os.path.basename(path).split(".")[0]


def ensure_unix_path_sep(source: str) -> str:
    """Ensure the given path uses ``/`` as path separator."""
    if os.sep == "/":
        return source
    return _BACK_SLASH.sub("/", source)
