"""JSML node type definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Sequence

Listener = Callable[[Any], Any]


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class RealizedNode:
    node: Any


@dataclass(frozen=True)
class StructuredNode:
    tag: str
    properties: Dict[str, Any] = field(default_factory=dict)


JsmlNode = TextNode | RealizedNode | StructuredNode

NodeSequence = Sequence[Any]
