"""Expansion of file glob patterns into a sorted list of paths."""

import glob
import logging
from typing import List

from .errors import InvalidPattern, NoMatch

logger = logging.getLogger(__name__)


def _translate_pattern(pattern: str) -> str:
    """Check ``pattern`` and turn its backslash escapes into glob-safe text.

    Outside a character class ``\\x`` matches ``x`` literally, so
    ``\\[v1\\].yaml`` matches the file ``[v1].yaml``. Inside ``[...]``
    the class is kept as written.
    """
    translated: List[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            if i + 1 == len(pattern):
                raise InvalidPattern(pattern, "trailing escape character")
            translated.append(glob.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            # A leading ']' is a literal member of the class
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            end = pattern.find("]", j)
            if end == -1:
                raise InvalidPattern(
                    pattern, f"unterminated character class at offset {i}"
                )
            translated.append(pattern[i : end + 1])
            i = end + 1
            continue
        translated.append(char)
        i += 1
    return "".join(translated)


def resolve_pattern(pattern: str) -> List[str]:
    """Expand ``pattern`` and return the matching paths in ascending order.

    Relative patterns are resolved against the process working directory.
    ``**`` is not recursive, wildcards match dot-files, and a backslash
    escapes the next character.

    Raises:
        InvalidPattern: the pattern is malformed
        NoMatch: nothing matched
    """
    matches = glob.glob(
        _translate_pattern(pattern), recursive=False, include_hidden=True
    )
    if not matches:
        raise NoMatch(pattern)

    matches.sort()
    logger.debug(f"Pattern {pattern!r} matched {len(matches)} file(s): {matches}")
    return matches
