"""Event handler coercion and serialization.

HTML event handler attributes accept a string which the browser turns into a
function ``function on<event>(event) { <body> }``. Turning a string into code
is an unsafe evaluation step, so the element materializer never does it on
its own: the host supplies a :class:`StringToHandler` (for example
:func:`unsafe_python_handler`) through the document context.
"""

from __future__ import annotations

import keyword
import textwrap
from typing import Any, Callable, Dict, Optional, Protocol

from .errors import JsmlTypeError, ListenerCoercionError
from .types_jsml import Listener

SCRIPT_SOURCE_ATTR = "__jsml_script__"


class StringToHandler(Protocol):
    def __call__(self, body: str, name: str) -> Listener: ...


def _function_name(name: str) -> str:
    candidate = "".join(ch if ch.isalnum() or ch == "_" else "_" for ch in name) or "anonymous"
    if candidate[0].isdigit() or keyword.iskeyword(candidate):
        candidate = f"_{candidate}"
    return candidate


def unsafe_python_handler(body: str, name: str = "anonymous") -> Listener:
    """Compile ``body`` as the body of ``def <name>(event):``.

    UNSAFE: this executes arbitrary code from the JSML document. Only pass it
    as a handler factory for trusted input.
    """
    func_name = _function_name(name)
    source = f"def {func_name}(event):\n" + textwrap.indent(textwrap.dedent(body).strip() or "pass", "    ")
    try:
        code = compile(source, f"<jsml {name}>", "exec")
    except SyntaxError as exc:
        raise ListenerCoercionError(f"invalid handler body for '{name}': {exc.msg}") from exc
    namespace: Dict[str, Any] = {}
    exec(code, namespace)
    return namespace[func_name]


def coerce_listener(value: Any, name: str, factory: Optional[StringToHandler]) -> Listener:
    if callable(value):
        return value
    if not isinstance(value, str):
        raise JsmlTypeError(f"handler for '{name}' must be callable or a string, got {type(value).__name__}")
    if factory is None:
        raise ListenerCoercionError(
            f"string handler for '{name}' needs a handler factory on the document"
        )
    try:
        handler = factory(value, name)
    except ListenerCoercionError:
        raise
    except SyntaxError as exc:
        raise ListenerCoercionError(f"invalid handler body for '{name}': {exc.msg}") from exc
    if not callable(handler):
        raise ListenerCoercionError(f"handler factory returned a non-callable for '{name}'")
    return handler


def script(source: str) -> Callable[[Listener], Listener]:
    """Attach client-side script source to a Python callable.

    The string materializer embeds the source as ``(<source>)()``.
    """

    def decorate(func: Listener) -> Listener:
        setattr(func, SCRIPT_SOURCE_ATTR, source)
        return func

    return decorate


def serialize_listener(value: Any, name: str) -> str:
    """Return attribute text for a handler in the HTML string output."""
    if isinstance(value, str):
        return value
    source = getattr(value, SCRIPT_SOURCE_ATTR, None)
    if isinstance(source, str):
        return f"({source})()"
    if callable(value):
        raise JsmlTypeError(
            f"handler for '{name}' is a Python callable without script source; "
            "decorate it with jsml.listeners.script() or pass a string"
        )
    raise JsmlTypeError(f"handler for '{name}' must be callable or a string, got {type(value).__name__}")
