"""JSON decoding and validation for node descriptor collections."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from ..errors import ParseError
from .types import FOLDER, NODE_TYPES, PAGE, NodeDescriptor

logger = logging.getLogger(__name__)

_TEXT_FIELDS = {
    "rootCause": "root_cause",
    "content": "content",
    "notes": "notes",
}


def _string_tuple(source_id: str, where: str, name: str, value: object) -> tuple[str, ...]:
    """Normalize an optional JSON list of strings."""
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ParseError(source_id, f"{where}: '{name}' must be a list")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ParseError(source_id, f"{where}: '{name}' entries must be strings")
        out.append(item)
    return tuple(out)


def parse_descriptor(source_id: str, raw: object, where: str = "[0]") -> NodeDescriptor:
    """Validate one JSON object and convert it into a ``NodeDescriptor``.

    ``where`` is a JSON-path-like location used in error messages.
    """
    if not isinstance(raw, Mapping):
        raise ParseError(source_id, f"{where}: expected an object")

    title = raw.get("title")
    if not isinstance(title, str):
        raise ParseError(source_id, f"{where}: 'title' must be a string")
    node_type = raw.get("type")
    if node_type not in NODE_TYPES:
        raise ParseError(source_id, f"{where}: 'type' must be one of {sorted(NODE_TYPES)}")

    text_values: dict[str, str | None] = {}
    for json_name, attr in _TEXT_FIELDS.items():
        value = raw.get(json_name)
        if value is not None and not isinstance(value, str):
            raise ParseError(source_id, f"{where}: '{json_name}' must be a string")
        text_values[attr] = value

    measures = _string_tuple(source_id, where, "measures", raw.get("measures"))
    images = _string_tuple(source_id, where, "images", raw.get("images"))

    children: tuple[NodeDescriptor, ...] | None = None
    source: str | None = None
    raw_children = raw.get("children")
    raw_source = raw.get("source")
    if node_type == PAGE:
        if raw_children is not None or raw_source is not None:
            logger.warning("%s %s: page %r carries children/source; ignored", source_id, where, title)
    elif node_type == FOLDER:
        if raw_children is not None:
            if not isinstance(raw_children, list):
                raise ParseError(source_id, f"{where}: 'children' must be a list")
            children = tuple(
                parse_descriptor(source_id, child, f"{where}.children[{idx}]")
                for idx, child in enumerate(raw_children)
            )
            if raw_source is not None:
                logger.warning("%s %s: folder %r has both children and source; using children", source_id, where, title)
        elif raw_source is not None:
            if not isinstance(raw_source, str) or not raw_source.strip():
                raise ParseError(source_id, f"{where}: 'source' must be a non-empty string")
            source = raw_source.strip()

    return NodeDescriptor(
        title=title,
        type=node_type,
        children=children,
        source=source,
        measures=measures,
        images=images,
        **text_values,
    )


def parse_descriptor_list(source_id: str, data: object) -> list[NodeDescriptor]:
    """Convert a decoded JSON document into an ordered descriptor list."""
    if not isinstance(data, list):
        raise ParseError(source_id, "top-level value must be a list")
    return [parse_descriptor(source_id, item, f"[{idx}]") for idx, item in enumerate(data)]


def parse_descriptor_json(source_id: str, text: str) -> list[NodeDescriptor]:
    """Decode JSON text and validate it as a descriptor collection.

    Nesting too deep to decode or walk is reported as ``ParseError``.
    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ParseError(source_id, f"invalid JSON: {exc}", cause=exc) from exc
    except RecursionError as exc:
        raise ParseError(source_id, "nesting too deep", cause=exc) from exc
    try:
        return parse_descriptor_list(source_id, data)
    except RecursionError as exc:
        raise ParseError(source_id, "nesting too deep", cause=exc) from exc


def descriptor_to_dict(descriptor: NodeDescriptor) -> dict[str, object]:
    """Serialize a descriptor back into its JSON object shape."""
    out: dict[str, object] = {"title": descriptor.title, "type": descriptor.type}
    if descriptor.children is not None:
        out["children"] = [descriptor_to_dict(child) for child in descriptor.children]
    if descriptor.source is not None:
        out["source"] = descriptor.source
    if descriptor.root_cause is not None:
        out["rootCause"] = descriptor.root_cause
    if descriptor.measures:
        out["measures"] = list(descriptor.measures)
    if descriptor.content is not None:
        out["content"] = descriptor.content
    if descriptor.notes is not None:
        out["notes"] = descriptor.notes
    if descriptor.images:
        out["images"] = list(descriptor.images)
    return out


__all__ = [
    "parse_descriptor",
    "parse_descriptor_list",
    "parse_descriptor_json",
    "descriptor_to_dict",
]
