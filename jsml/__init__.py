"""JSML: describe HTML as plain data and turn it into elements or strings."""

from .create_element import create_element, create_elements
from .dom_model import Document, Element, Text
from .errors import JsmlError, JsmlStructureError, JsmlTypeError, ListenerCoercionError
from .listeners import script, unsafe_python_handler
from .models import RenderOptions
from .to_html import to_html, to_html_all

__all__ = [
    "Document",
    "Element",
    "JsmlError",
    "JsmlStructureError",
    "JsmlTypeError",
    "ListenerCoercionError",
    "RenderOptions",
    "Text",
    "create_element",
    "create_elements",
    "script",
    "to_html",
    "to_html_all",
    "unsafe_python_handler",
]
