"""Template rendering with Jinja2 and the include functions."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError

from .config import Config
from .errors import (
    FileReadError,
    OutputWriteError,
    TemplateExecutionError,
    TemplatingError,
)
from .functions import IncludeFunction, build_functions

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class TemplateRenderer:
    """Renders a template whose include calls splice source files into the output."""

    def __init__(
        self,
        config: Optional[Config] = None,
        functions: Optional[Mapping[str, IncludeFunction]] = None,
    ):
        """Initialize with configuration and an optional prebuilt function table."""
        self.config = config or Config()
        self.functions = (
            functions if functions is not None else build_functions(self.config)
        )
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=self.config.template.trim_blocks,
            lstrip_blocks=self.config.template.lstrip_blocks,
            keep_trailing_newline=self.config.template.keep_trailing_newline,
        )
        self.env.globals.update(self.functions)

    def render_string(self, source: str, name: str = "<template>") -> str:
        """Render template source text.

        Errors raised by an include function propagate unchanged; any
        other engine failure becomes TemplateExecutionError.
        """
        try:
            template = self.env.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateExecutionError(name, e.message or str(e), e.lineno) from e

        try:
            return template.render()
        except TemplatingError:
            raise
        except Exception as e:
            raise TemplateExecutionError(name, f"{type(e).__name__}: {e}") from e

    def render_file(self, template_path: str) -> str:
        """Read and render the template at ``template_path``."""
        try:
            source = Path(template_path).read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(template_path, str(e)) from e

        logger.debug(f"Rendering template {template_path}")
        return self.render_string(source, name=template_path)

    def render_to_file(self, template_path: str, output_path: str) -> None:
        """Render ``template_path`` and write the result to ``output_path``.

        The output is written only after the whole template rendered, and
        replaced in one step so a failed write leaves the old file intact.
        """
        rendered = self.render_file(template_path)

        path = Path(output_path)
        tmp_path: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=self.config.encoding,
                dir=path.parent,
                prefix=f".{path.name}.",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(rendered)
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            os.replace(tmp_path, path)
        except (OSError, UnicodeEncodeError) as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise OutputWriteError(output_path, str(e)) from e

        logger.info(f"Wrote {len(rendered)} characters to {output_path}")
