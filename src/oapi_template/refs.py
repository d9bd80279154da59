"""Rewriting of cross-file ``$ref`` values into document-local fragments.

Included snippets keep their ``$ref`` values pointing at the file they
came from, e.g. ``../schemas/user.yaml#/components/schemas/User``. Once
the snippets are merged into one document those files are gone, so the
path in front of ``#/`` is dropped and only the fragment is kept.

This is a textual rewrite. It handles refs whose value sits on one line
in double or single quotes, with or without quotes around the ``$ref``
key. Unquoted values and refs without a ``#/`` fragment are left alone.
A ``$ref``-shaped substring inside some other string value is rewritten
as well.
"""

import logging
import re

logger = logging.getLogger(__name__)

REF_PATH_PATTERN = re.compile(
    r"""(?P<ref_double>"?\$ref"?\s*:\s*")(?P<path_double>[^"]*?)(?P<fragment_double>#/[^"]*)(?P<close_double>")"""
    r"|"
    r"""(?P<ref_single>"?\$ref"?\s*:\s*')(?P<path_single>[^']*?)(?P<fragment_single>#/[^']*)(?P<close_single>')"""
)


def _strip_path(match: "re.Match[str]") -> str:
    if match.group("ref_double") is not None:
        return (
            match.group("ref_double")
            + match.group("fragment_double")
            + match.group("close_double")
        )
    return (
        match.group("ref_single")
        + match.group("fragment_single")
        + match.group("close_single")
    )


def rewrite_refs(text: str) -> str:
    """Replace every ``$ref`` value of the form ``<path>#/<fragment>`` with ``#/<fragment>``.

    The quote style of each value is preserved and all other text is
    returned unchanged. Applying it twice gives the same result as once.
    """
    rewritten, count = REF_PATH_PATTERN.subn(_strip_path, text)
    if count:
        logger.debug(f"Matched {count} $ref value(s) carrying a fragment")
    return rewritten
