"""Resolve raw JSML values into tagged nodes."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .aliases import INVALID_NAME_RE
from .errors import JsmlStructureError
from .types_jsml import JsmlNode, NodeSequence, RealizedNode, StructuredNode, TextNode

RealizedCheck = Callable[[Any], bool]


def looks_realized(value: Any) -> bool:
    return callable(getattr(value, "clone_node", None))


def _check_tag(tag: Any) -> str:
    if not isinstance(tag, str) or not tag:
        raise JsmlStructureError(f"tag must be a non-empty string, got {tag!r}")
    if INVALID_NAME_RE.search(tag):
        raise JsmlStructureError(f"invalid tag name {tag!r}")
    return tag


def _resolve_bag(tag: str, bag: Any) -> Dict[str, Any]:
    if bag is None:
        return {}
    if isinstance(bag, str):
        return {"text": bag}
    if isinstance(bag, Mapping):
        return dict(bag)
    raise JsmlStructureError(
        f"properties of <{tag}> must be a mapping or a string, got {type(bag).__name__}"
    )


def resolve_node(value: Any, *, is_realized: Optional[RealizedCheck] = None) -> JsmlNode:
    """Resolve one JSML value into a :class:`TextNode`, :class:`RealizedNode`
    or :class:`StructuredNode`.

    The explicit form ``{"tag": "a", "href": "#"}`` and the wrapper form
    ``{"a": {"href": "#"}}`` both resolve to ``StructuredNode("a", {...})``.
    The input mapping is copied, never mutated.
    """
    if isinstance(value, str):
        return TextNode(value)

    check = is_realized or looks_realized
    if not isinstance(value, Mapping):
        if check(value):
            return RealizedNode(value)
        raise JsmlStructureError(f"object does not match JSML structure: {type(value).__name__}")

    if "tag" in value:
        tag = _check_tag(value["tag"])
        properties = {key: item for key, item in value.items() if key != "tag"}
        return StructuredNode(tag=tag, properties=properties)

    keys = list(value.keys())
    if not keys:
        raise JsmlStructureError("object does not match JSML structure: no tag found")
    if len(keys) > 1:
        raise JsmlStructureError(
            f"object without 'tag' must have exactly one key, got {', '.join(map(str, keys))}"
        )
    tag = _check_tag(keys[0])
    return StructuredNode(tag=tag, properties=_resolve_bag(tag, value[tag]))


def resolve_nodes(values: NodeSequence, *, is_realized: Optional[RealizedCheck] = None) -> List[JsmlNode]:
    if isinstance(values, (str, Mapping)):
        raise JsmlStructureError("expected a list of JSML nodes")
    return [resolve_node(value, is_realized=is_realized) for value in values]
