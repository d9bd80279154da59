"""Configuration management for oapi-template.

The configuration file is optional. It tunes logging, file encoding and
the Jinja2 environment, and can declare extra selector-bound include
functions next to the built-in ones.
"""

import codecs
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

BUILTIN_FUNCTION_NAMES = frozenset(
    {
        "includeVerbatim",
        "includeYQ",
        "includeOAPISchemas",
        "includeOAPIPaths",
        "includeOAPIParameters",
    }
)


class IncludeFunctionConfig(BaseModel):
    """A template function bound to a fixed selector."""

    selector: str = Field(..., description="jq expression applied to every file")
    rewrite_refs: bool = Field(
        default=True, description="Strip file paths from $ref values in the result"
    )


class TemplateOptions(BaseModel):
    """Jinja2 environment options."""

    trim_blocks: bool = Field(default=False)
    lstrip_blocks: bool = Field(default=False)
    keep_trailing_newline: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration class."""

    config_path: Optional[str] = Field(
        default=None, description="Path to the loaded config file"
    )
    log_level: str = Field(default="INFO", description="Logging level for the CLI")
    encoding: str = Field(
        default="utf-8", description="Encoding of template, source and output files"
    )
    template: TemplateOptions = Field(default_factory=TemplateOptions)
    functions: Dict[str, IncludeFunctionConfig] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @field_validator("functions")
    @classmethod
    def _check_function_names(
        cls, value: Dict[str, IncludeFunctionConfig]
    ) -> Dict[str, IncludeFunctionConfig]:
        for name in value:
            if not name.isidentifier():
                raise ValueError(f"Function name is not an identifier: {name}")
            if name in BUILTIN_FUNCTION_NAMES:
                raise ValueError(f"Function name shadows a built-in: {name}")
        return value

    @classmethod
    def load(cls, config_path: str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ValueError(f"Invalid configuration in {config_path}: {config_data}")

        # Shorthand: a bare string is a selector with ref rewriting enabled
        raw_functions = config_data.get("functions") or {}
        if not isinstance(raw_functions, dict):
            raise ValueError(f"Invalid functions config: {raw_functions}")

        functions: Dict[str, Any] = {}
        for name, function_data in raw_functions.items():
            if isinstance(function_data, str):
                function_data = {"selector": function_data}
            if not isinstance(function_data, dict):
                raise ValueError(f"Invalid function config for {name}: {function_data}")
            functions[name] = function_data
        config_data["functions"] = functions

        config = cls(**config_data)
        config.config_path = config_path
        return config
