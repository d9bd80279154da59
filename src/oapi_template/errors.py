"""Exceptions raised while assembling a document from a template."""

from typing import Optional


class TemplatingError(Exception):
    """Base class for every failure raised by oapi_template."""


class InvalidPattern(TemplatingError):
    """The glob pattern is syntactically malformed."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid glob {pattern!r}: {reason}")


class NoMatch(TemplatingError):
    """The glob pattern matched no files."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"no files matched pattern {pattern!r}")


class FileReadError(TemplatingError):
    """A matched file could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to read file {path}: {reason}")


class QuerySyntaxError(TemplatingError):
    """The selector expression could not be compiled."""

    def __init__(self, selector: str, reason: str):
        self.selector = selector
        self.reason = reason
        super().__init__(f"invalid selector {selector!r}: {reason}")


class QueryEvalError(TemplatingError):
    """The selector compiled but failed against a document."""

    def __init__(self, selector: str, reason: str):
        self.selector = selector
        self.reason = reason
        super().__init__(f"selector {selector!r} failed: {reason}")


class IncludeError(TemplatingError):
    """Including one matched file failed; ``cause`` holds the underlying error."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"include {path!r} failed: {cause}")


class TemplateExecutionError(TemplatingError):
    """The template engine could not parse or execute the template."""

    def __init__(self, template: str, reason: str, lineno: Optional[int] = None):
        self.template = template
        self.reason = reason
        self.lineno = lineno
        location = f"{template}:{lineno}" if lineno is not None else template
        super().__init__(f"failed to execute template {location}: {reason}")


class OutputWriteError(TemplatingError):
    """The assembled document could not be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to write output file {path}: {reason}")
