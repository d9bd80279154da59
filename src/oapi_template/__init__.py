"""Package initialization for oapi_template."""

__version__ = "0.1.0"
__description__ = "Assemble OpenAPI documents from templated source files"

from .config import Config
from .functions import build_functions
from .includes import FileIncluder
from .refs import rewrite_refs
from .renderer import TemplateRenderer
from .selector import evaluate

__all__ = [
    "Config",
    "FileIncluder",
    "TemplateRenderer",
    "build_functions",
    "evaluate",
    "rewrite_refs",
]
