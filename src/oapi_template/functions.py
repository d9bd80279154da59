"""Template functions that pull source files into the rendered document."""

import logging
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .config import Config
from .includes import FileIncluder
from .refs import rewrite_refs

logger = logging.getLogger(__name__)

IncludeFunction = Callable[..., str]

OAPI_SELECTORS: Mapping[str, str] = MappingProxyType(
    {
        "includeOAPISchemas": ".components.schemas",
        "includeOAPIPaths": ".paths",
        "includeOAPIParameters": ".components.parameters",
    }
)


def selector_include(
    includer: FileIncluder, selector: str, rewrite: bool
) -> Callable[[str], str]:
    """Bind ``selector`` to a one-argument include, optionally rewriting refs."""

    def include(pattern: str) -> str:
        content = includer.include(selector, pattern)
        if rewrite:
            return rewrite_refs(content)
        return content

    return include


def build_functions(
    config: Optional[Config] = None, includer: Optional[FileIncluder] = None
) -> Mapping[str, IncludeFunction]:
    """Build the read-only table of template functions.

    Holds the five built-ins plus any extra functions declared in the
    configuration. The table is built once per run and handed to the
    renderer.
    """
    config = config or Config()
    includer = includer or FileIncluder(encoding=config.encoding)

    def include_yq(selector: str, pattern: str) -> str:
        return includer.include(selector, pattern)

    def include_verbatim(pattern: str) -> str:
        return includer.include("", pattern)

    functions: Dict[str, IncludeFunction] = {
        "includeYQ": include_yq,
        "includeVerbatim": include_verbatim,
    }
    for name, selector in OAPI_SELECTORS.items():
        functions[name] = selector_include(includer, selector, rewrite=True)

    for name, extra in config.functions.items():
        logger.debug(
            f"Registering {name} with selector {extra.selector!r} "
            f"(rewrite_refs={extra.rewrite_refs})"
        )
        functions[name] = selector_include(includer, extra.selector, extra.rewrite_refs)

    return MappingProxyType(functions)
