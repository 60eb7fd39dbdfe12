"""String materializer: JSML to an HTML fragment without a document."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .aliases import (
    Effect,
    check_attribute,
    check_children,
    check_class_tokens,
    check_dataset,
    check_listener,
    check_listeners,
    check_string,
    check_style,
    is_void,
    iter_effects,
)
from .dom_model import ClassList, Dataset, Element, StyleDeclaration, Text, escape_text, node_to_html, render_attrs
from .errors import JsmlTypeError
from .listeners import serialize_listener
from .models import DEFAULT_OPTIONS, RenderOptions
from .normalize import resolve_node
from .types_jsml import NodeSequence, RealizedNode, StructuredNode, TextNode


def to_html(node: Any, *, options: Optional[RenderOptions] = None) -> str:
    """Convert a JSML value to an HTML string.

    >>> to_html({"p": {"class": "a b", "$": ["x", {"em": "y"}]}})
    '<p class="a b">x<em>y</em></p>'
    """
    return _render(node, options or DEFAULT_OPTIONS)


def to_html_all(nodes: NodeSequence, *, options: Optional[RenderOptions] = None) -> str:
    if isinstance(nodes, (str, dict)):
        raise JsmlTypeError("to_html_all expects a list of JSML nodes")
    opts = options or DEFAULT_OPTIONS
    return "".join(_render(node, opts) for node in nodes)


def _render(node: Any, options: RenderOptions) -> str:
    resolved = resolve_node(node)
    if isinstance(resolved, TextNode):
        return escape_text(resolved.text, options)
    if isinstance(resolved, RealizedNode):
        return _render_realized(resolved.node, options)
    return _render_structured(resolved, options)


def _render_realized(node: Any, options: RenderOptions) -> str:
    if isinstance(node, (Element, Text)):
        return node_to_html(node, options)
    outer_html = getattr(node, "outer_html", None)
    if outer_html:
        return outer_html
    return escape_text(getattr(node, "text_content", "") or "", options)


def _render_structured(node: StructuredNode, options: RenderOptions) -> str:
    attrs: Dict[str, str] = {}
    children: List[str] = []
    void = is_void(node.tag)

    for effect, name, value in iter_effects(node.properties):
        if effect is Effect.EVENT:
            attrs[f"on{name}"] = serialize_listener(check_listener(value, name), f"on{name}")
        elif effect is Effect.CLASS:
            ClassList(attrs).add(*check_class_tokens(value))
        elif effect is Effect.STYLE:
            style = check_style(value)
            declaration = StyleDeclaration(attrs)
            if isinstance(style, str):
                declaration.css_text = style
            else:
                for prop, rule in style.items():
                    declaration.set_property(prop, rule)
        elif effect is Effect.ID:
            attrs["id"] = check_string(value, "id")
        elif effect is Effect.CHILD:
            if not void:
                children.append(_render(value, options))
        elif effect is Effect.CHILDREN:
            items = check_children(value)
            if not void:
                children.extend(_render(child, options) for child in items)
        elif effect is Effect.DATASET:
            dataset = Dataset(attrs)
            for key, item in check_dataset(value).items():
                dataset[key] = item
        elif effect is Effect.LISTENERS:
            for event, handler in check_listeners(value).items():
                attrs[f"on{event}"] = serialize_listener(handler, f"on{event}")
        else:
            attrs[name] = check_attribute(value, name, node.tag, options)

    opening = f"<{node.tag}{render_attrs(attrs, options)}>"
    if void:
        return opening
    return f"{opening}{''.join(children)}</{node.tag}>"
