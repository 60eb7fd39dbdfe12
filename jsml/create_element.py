"""Element materializer: JSML to live elements of a document context."""

from __future__ import annotations

from typing import Any, List, Optional

from .aliases import (
    Effect,
    camelize,
    check_attribute,
    check_children,
    check_class_tokens,
    check_dataset,
    check_listener,
    check_listeners,
    check_string,
    check_style,
    iter_effects,
)
from .dom_model import Document
from .errors import JsmlTypeError
from .listeners import coerce_listener
from .models import DEFAULT_OPTIONS, RenderOptions
from .normalize import resolve_node
from .types_jsml import NodeSequence, RealizedNode, StructuredNode, TextNode


def create_element(node: Any, document: Optional[Document] = None, *, options: Optional[RenderOptions] = None):
    """Create an element (or text node) from a JSML value.

    ``document`` is any object with ``create_element``, ``create_text_node``
    and ``is_node``; a fresh :class:`~jsml.dom_model.Document` is used when
    omitted. The result is not inserted anywhere.
    """
    document = document if document is not None else Document()
    return _materialize(node, document, options or DEFAULT_OPTIONS)


def create_elements(nodes: NodeSequence, document: Optional[Document] = None, *, options: Optional[RenderOptions] = None) -> List[Any]:
    if isinstance(nodes, (str, dict)):
        raise JsmlTypeError("create_elements expects a list of JSML nodes")
    document = document if document is not None else Document()
    return [_materialize(node, document, options or DEFAULT_OPTIONS) for node in nodes]


def _materialize(node: Any, document: Any, options: RenderOptions) -> Any:
    resolved = resolve_node(node, is_realized=document.is_node)
    if isinstance(resolved, TextNode):
        return document.create_text_node(resolved.text)
    if isinstance(resolved, RealizedNode):
        return resolved.node.clone_node(True)
    return _build(resolved, document, options)


def _add_listener(elem: Any, event: str, value: Any, document: Any) -> None:
    factory = getattr(document, "handler_factory", None)
    elem.add_event_listener(event, coerce_listener(value, f"on{event}", factory))


def _build(node: StructuredNode, document: Any, options: RenderOptions) -> Any:
    elem = document.create_element(node.tag)

    for effect, name, value in iter_effects(node.properties):
        if effect is Effect.EVENT:
            _add_listener(elem, name, check_listener(value, name), document)
        elif effect is Effect.CLASS:
            elem.class_list.add(*check_class_tokens(value))
        elif effect is Effect.STYLE:
            style = check_style(value)
            if isinstance(style, str):
                elem.style.css_text = style
            else:
                for prop, rule in style.items():
                    elem.style.set_property(prop, rule)
        elif effect is Effect.ID:
            elem.id = check_string(value, "id")
        elif effect is Effect.CHILD:
            elem.append(_materialize(value, document, options))
        elif effect is Effect.CHILDREN:
            elem.append(*[_materialize(child, document, options) for child in check_children(value)])
        elif effect is Effect.DATASET:
            for key, item in check_dataset(value).items():
                elem.dataset[camelize(key)] = item
        elif effect is Effect.LISTENERS:
            for event, handler in check_listeners(value).items():
                _add_listener(elem, event, handler, document)
        else:
            elem.set_attribute(name, check_attribute(value, name, node.tag, options))
    return elem
