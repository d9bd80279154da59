"""Inclusion of files matched by a glob, filtered through a selector."""

import logging
from pathlib import Path
from typing import List

from .errors import FileReadError, IncludeError, TemplatingError
from .globbing import resolve_pattern
from .selector import evaluate

logger = logging.getLogger(__name__)


class FileIncluder:
    """Reads every file matched by a pattern and concatenates the selected parts."""

    def __init__(self, encoding: str = "utf-8"):
        """Initialize with the encoding used to read source files."""
        self.encoding = encoding

    def read_file(self, path: str) -> str:
        """Read the full content of one matched file."""
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, str(e)) from e

    def include_file(self, selector: str, path: str) -> str:
        """Read ``path`` and apply ``selector`` to its content."""
        contents = self.read_file(path)
        return evaluate(selector, contents)

    def include(self, selector: str, pattern: str) -> str:
        """Include every file matching ``pattern``, in ascending path order.

        Each file is run through ``selector``, trimmed, and dropped when
        nothing is left. The surviving parts are joined with a newline.
        The first failing file aborts the whole include.
        """
        matches = resolve_pattern(pattern)

        parts: List[str] = []
        for path in matches:
            try:
                part = self.include_file(selector, path)
            except TemplatingError as e:
                raise IncludeError(path, e) from e

            part = part.strip()
            if part:
                parts.append(part)
            else:
                logger.debug(f"Skipping {path}: selector {selector!r} left nothing")

        logger.debug(
            f"Included {len(parts)} of {len(matches)} file(s) for pattern {pattern!r}"
        )
        return "\n".join(parts)
