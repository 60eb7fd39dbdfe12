"""Exceptions raised while converting JSML."""


class JsmlError(Exception):
    """Base class for every JSML conversion failure."""


class JsmlStructureError(JsmlError, ValueError):
    """A node cannot be resolved to a tag and a property bag."""


class JsmlTypeError(JsmlError, TypeError):
    """A property value does not have the shape its alias expects."""


class ListenerCoercionError(JsmlError, ValueError):
    """A string event handler could not be turned into a callable."""
