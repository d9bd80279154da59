"""Selector evaluation using JQ over YAML/JSON documents."""

import json
import logging
from typing import Any, Dict, List

import jq
import yaml

from .errors import QueryEvalError, QuerySyntaxError

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(resolvers: Dict[Any, List[Any]]) -> Dict[Any, List[Any]]:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != TIMESTAMP_TAG]
        for first, entries in resolvers.items()
    }


class _DocumentLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as their source text."""


class _SelectionDumper(yaml.SafeDumper):
    """Safe dumper that always double-quotes $ref values.

    Timestamp-looking strings are written plain, as they were read.
    """


_DocumentLoader.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeLoader.yaml_implicit_resolvers
)
_SelectionDumper.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeDumper.yaml_implicit_resolvers
)


def _represent_dict(dumper: yaml.SafeDumper, data: Dict[str, Any]) -> yaml.MappingNode:
    node = dumper.represent_mapping("tag:yaml.org,2002:map", data)
    for key_node, value_node in node.value:
        if key_node.value == "$ref" and isinstance(value_node, yaml.ScalarNode):
            value_node.style = '"'
    return node


_SelectionDumper.add_representer(dict, _represent_dict)


def _compile(selector: str) -> Any:
    """Compile a JQ program, turning syntax errors into QuerySyntaxError."""
    try:
        return jq.compile(selector)
    except ValueError as e:
        raise QuerySyntaxError(selector, str(e).strip()) from e


def _decode_documents(selector: str, document_text: str) -> List[Any]:
    """Decode every YAML document in the text. JSON is accepted as YAML."""
    try:
        return list(yaml.load_all(document_text, Loader=_DocumentLoader))
    except yaml.YAMLError as e:
        raise QueryEvalError(selector, f"cannot decode document: {e}") from e


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def _string_keys(value: Any) -> Any:
    """Turn every mapping key into a string, as JSON objects require."""
    if isinstance(value, dict):
        return {_key_text(k): _string_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_string_keys(item) for item in value]
    return value


def _to_json(selector: str, document: Any) -> str:
    try:
        # default=str covers the remaining non-JSON scalars (binary, sets)
        return json.dumps(_string_keys(document), default=str)
    except (TypeError, ValueError) as e:
        raise QueryEvalError(selector, f"cannot encode document: {e}") from e


def _encode_value(value: Any) -> str:
    """Encode one JQ result the way it would be spliced into a YAML document."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value + "\n"
    if isinstance(value, (bool, int, float)):
        return json.dumps(value) + "\n"
    return yaml.dump(
        value,
        Dumper=_SelectionDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def evaluate(selector: str, document_text: str) -> str:
    """Apply ``selector`` to ``document_text`` and return the re-encoded result.

    An empty selector returns the text unchanged. Otherwise each YAML
    document in the text is run through the JQ program and every result
    is encoded as YAML; ``null`` results encode to nothing. Output from
    different documents is separated by a ``---`` line.

    Raises:
        QuerySyntaxError: the selector does not compile
        QueryEvalError: decoding, evaluation or encoding failed
    """
    if selector == "":
        return document_text

    program = _compile(selector)
    documents = _decode_documents(selector, document_text)

    outputs: List[str] = []
    for document in documents:
        try:
            results = program.input(text=_to_json(selector, document)).all()
        except ValueError as e:
            raise QueryEvalError(selector, str(e).strip()) from e

        logger.debug(
            f"Selector {selector!r} produced {len(results)} result(s) for one document"
        )
        output = "".join(_encode_value(result) for result in results)
        if output:
            outputs.append(output)

    return "---\n".join(outputs)
