"""Simple server-side DOM model used as the default document context."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from .aliases import camelize, dataset_attribute, is_void, kebabize
from .listeners import StringToHandler
from .models import DEFAULT_OPTIONS, RenderOptions
from .types_jsml import Listener


def escape_attribute(value: str, options: RenderOptions = DEFAULT_OPTIONS) -> str:
    if options.quote_escape == "backslash":
        return value.replace('"', '\\"')
    return html.escape(value, quote=False).replace('"', "&quot;")


def escape_text(value: str, options: RenderOptions = DEFAULT_OPTIONS) -> str:
    if not options.escape_text:
        return value
    return html.escape(value, quote=False)


def render_attrs(attrs: Dict[str, str], options: RenderOptions = DEFAULT_OPTIONS) -> str:
    if not attrs:
        return ""
    parts = [f'{name}="{escape_attribute(value, options)}"' for name, value in attrs.items()]
    return " " + " ".join(parts)


class ClassList:
    """``classList`` view over the ``class`` entry of an attribute map."""

    def __init__(self, attrs: MutableMapping[str, str]) -> None:
        self._attrs = attrs

    def _tokens(self) -> List[str]:
        return self._attrs.get("class", "").split()

    def add(self, *tokens: str) -> None:
        current = self._tokens()
        for token in tokens:
            if token and token not in current:
                current.append(token)
        if current or "class" in self._attrs:
            self._attrs["class"] = " ".join(current)

    def remove(self, *tokens: str) -> None:
        if "class" not in self._attrs:
            return
        self._attrs["class"] = " ".join(t for t in self._tokens() if t not in tokens)

    def contains(self, token: str) -> bool:
        return token in self._tokens()

    def __contains__(self, token: object) -> bool:
        return token in self._tokens()

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens())

    def __len__(self) -> int:
        return len(self._tokens())

    @property
    def value(self) -> str:
        return self._attrs.get("class", "")


def split_declarations(css: str) -> List[str]:
    """Split inline style text on ``;`` outside quotes and parentheses."""
    chunks: List[str] = []
    current: List[str] = []
    quote = ""
    depth = 0
    escaped = False
    for ch in css:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")" and depth:
            depth -= 1
        elif ch == ";" and not depth:
            chunks.append("".join(current))
            current = []
            continue
        current.append(ch)
    chunks.append("".join(current))
    return chunks


class StyleDeclaration:
    """Inline style view over the ``style`` entry of an attribute map.

    Declarations are split on ``;`` outside quotes and parentheses, then on
    their first ``:``.
    """

    def __init__(self, attrs: MutableMapping[str, str]) -> None:
        self._attrs = attrs

    def _declarations(self) -> Dict[str, str]:
        rules: Dict[str, str] = {}
        for chunk in split_declarations(self._attrs.get("style", "")):
            prop, sep, value = chunk.partition(":")
            if sep and prop.strip():
                rules[prop.strip().lower()] = value.strip()
        return rules

    @property
    def css_text(self) -> str:
        return self._attrs.get("style", "")

    @css_text.setter
    def css_text(self, value: str) -> None:
        self._attrs["style"] = value

    def set_property(self, name: str, value: str) -> None:
        rules = self._declarations()
        rules[kebabize(camelize(name))] = value
        self._attrs["style"] = "; ".join(f"{prop}: {rule}" for prop, rule in rules.items())

    def get_property_value(self, name: str) -> str:
        return self._declarations().get(kebabize(camelize(name)), "")

    def items(self) -> List[tuple[str, str]]:
        return list(self._declarations().items())


class Dataset(MutableMapping[str, str]):
    """``dataset`` view: camelCase keys backed by ``data-*`` attributes."""

    def __init__(self, attrs: MutableMapping[str, str]) -> None:
        self._attrs = attrs

    def __getitem__(self, key: str) -> str:
        return self._attrs[dataset_attribute(key)]

    def __setitem__(self, key: str, value: str) -> None:
        self._attrs[dataset_attribute(key)] = value

    def __delitem__(self, key: str) -> None:
        del self._attrs[dataset_attribute(key)]

    def __iter__(self) -> Iterator[str]:
        for name in list(self._attrs):
            if name.startswith("data-"):
                yield camelize(name[len("data-"):])

    def __len__(self) -> int:
        return sum(1 for _ in self)


@dataclass
class Text:
    data: str
    owner_document: Optional["Document"] = field(default=None, repr=False, compare=False)

    @property
    def text_content(self) -> str:
        return self.data

    @property
    def outer_html(self) -> str:
        return escape_text(self.data)

    def clone_node(self, deep: bool = True) -> "Text":
        return Text(self.data, owner_document=self.owner_document)


@dataclass
class Element:
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["DomContent"] = field(default_factory=list)
    listeners: Dict[str, List[Listener]] = field(default_factory=dict, compare=False, repr=False)
    owner_document: Optional["Document"] = field(default=None, repr=False, compare=False)

    @property
    def class_list(self) -> ClassList:
        return ClassList(self.attributes)

    @property
    def style(self) -> StyleDeclaration:
        return StyleDeclaration(self.attributes)

    @property
    def dataset(self) -> Dataset:
        return Dataset(self.attributes)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @id.setter
    def id(self, value: str) -> None:
        self.attributes["id"] = value

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name.lower()] = value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name.lower(), None)

    def append(self, *nodes: "DomContent | str") -> None:
        for node in nodes:
            if isinstance(node, str):
                node = Text(node, owner_document=self.owner_document)
            self.children.append(node)

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        registered = self.listeners.setdefault(event_type, [])
        # Registering the same listener twice is a no-op, as in the DOM.
        if listener not in registered:
            registered.append(listener)

    def dispatch_event(self, event_type: str, event: Any = None) -> List[Any]:
        """Call the listeners for ``event_type`` in registration order."""
        return [listener(event) for listener in list(self.listeners.get(event_type, []))]

    def clone_node(self, deep: bool = True) -> "Element":
        children = [child.clone_node(True) for child in self.children] if deep else []
        return Element(
            tag=self.tag,
            attributes=dict(self.attributes),
            children=children,
            owner_document=self.owner_document,
        )

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    @property
    def inner_html(self) -> str:
        return "".join(child.outer_html for child in self.children)

    @property
    def outer_html(self) -> str:
        return node_to_html(self)


DomContent = Element | Text


@dataclass
class Document:
    """Document context: creates nodes and recognizes realized ones."""

    handler_factory: Optional[StringToHandler] = None

    def create_element(self, tag: str) -> Element:
        return Element(tag=tag, owner_document=self)

    def create_text_node(self, data: str) -> Text:
        return Text(data, owner_document=self)

    def is_node(self, value: Any) -> bool:
        return isinstance(value, (Element, Text))


def _render_children(children: List[DomContent], options: RenderOptions) -> str:
    return "".join(node_to_html(child, options) for child in children)


def node_to_html(node: DomContent, options: RenderOptions = DEFAULT_OPTIONS) -> str:
    if isinstance(node, Text):
        return escape_text(node.data, options)
    attrs = render_attrs(node.attributes, options)
    if is_void(node.tag):
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{_render_children(node.children, options)}</{node.tag}>"
