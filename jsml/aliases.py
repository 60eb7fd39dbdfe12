"""Property alias table shared by both materializers.

Every key of a property bag is compared case-insensitively and resolves to
exactly one :class:`Effect`. Hand-written JSML can use the symbolic keys
(``.``, ``#``, ``!``, ``$``) while generated JSML can use the readable ones;
both end up on the same effect.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from .errors import JsmlTypeError
from .io_utils import warn
from .models import RenderOptions


class Effect(str, Enum):
    EVENT = "event"
    CLASS = "class"
    STYLE = "style"
    ID = "id"
    CHILD = "child"
    CHILDREN = "children"
    DATASET = "dataset"
    LISTENERS = "listeners"
    ATTRIBUTE = "attribute"


EVENT_PREFIX = "on"

ALIASES: Mapping[str, Effect] = {
    ".": Effect.CLASS,
    "class": Effect.CLASS,
    "classname": Effect.CLASS,
    "css": Effect.STYLE,
    "style": Effect.STYLE,
    "#": Effect.ID,
    "!": Effect.CHILD,
    "text": Effect.CHILD,
    "child": Effect.CHILD,
    "$": Effect.CHILDREN,
    "childs": Effect.CHILDREN,
    "childnodes": Effect.CHILDREN,
    "children": Effect.CHILDREN,
    "data": Effect.DATASET,
    "dataset": Effect.DATASET,
    "listener": Effect.LISTENERS,
    "listeners": Effect.LISTENERS,
}

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_KEBAB_RE = re.compile(r"-([a-z])")
_CAMEL_RE = re.compile(r"[A-Z]")
# Characters that cannot appear in a tag or attribute name in serialized HTML.
INVALID_NAME_RE = re.compile(r"[\s\"'<>/=\x00-\x1f]")


def camelize(kebab: str) -> str:
    return _KEBAB_RE.sub(lambda m: m.group(1).upper(), kebab)


def kebabize(camel: str) -> str:
    return _CAMEL_RE.sub(lambda m: "-" + m.group(0).lower(), camel)


def dataset_attribute(key: str) -> str:
    """Attribute name for a dataset key; ``userId`` and ``user-id`` agree."""
    return "data-" + kebabize(camelize(key))


def is_void(tag: str) -> bool:
    return tag.lower() in VOID_ELEMENTS


def classify(key: str) -> Tuple[Effect, str]:
    """Return the effect of a property key and the name it acts on.

    For events the name is the event type, for literal attributes the
    lowercased attribute name, for aliases the canonical alias key.
    """
    prop = key.lower()
    if prop.startswith(EVENT_PREFIX):
        return Effect.EVENT, check_name(prop[len(EVENT_PREFIX):], "event")
    effect = ALIASES.get(prop)
    if effect is None:
        return Effect.ATTRIBUTE, check_name(prop, "attribute")
    return effect, prop


def iter_effects(properties: Mapping[str, Any]) -> Iterator[Tuple[Effect, str, Any]]:
    for key, value in properties.items():
        effect, name = classify(key)
        yield effect, name, value


# Shape checks. Each returns the value in the form its effect consumes.


def _describe(value: Any) -> str:
    return type(value).__name__


def check_name(name: str, what: str) -> str:
    if not name or INVALID_NAME_RE.search(name):
        raise JsmlTypeError(f"invalid {what} name {name!r}")
    return name


def check_class_tokens(value: Any) -> List[str]:
    if isinstance(value, str):
        tokens: Sequence[Any] = value.split()
    elif isinstance(value, Sequence):
        tokens = value
    else:
        raise JsmlTypeError(f"class value must be a string or a list of strings, got {_describe(value)}")
    result: List[str] = []
    for token in tokens:
        if not token:
            continue
        if not isinstance(token, str):
            raise JsmlTypeError(f"class token must be a string, got {_describe(token)}")
        result.append(token)
    return result


def check_style(value: Any) -> str | Dict[str, str]:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        rules: Dict[str, str] = {}
        for prop, rule in value.items():
            if not isinstance(rule, (str, int, float)) or isinstance(rule, bool):
                raise JsmlTypeError(f"style value for '{prop}' must be a string, got {_describe(rule)}")
            rules[kebabize(camelize(str(prop)))] = str(rule)
        return rules
    raise JsmlTypeError(f"style must be a string or a mapping, got {_describe(value)}")


def check_string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise JsmlTypeError(f"{what} must be a string, got {_describe(value)}")
    return value


def check_children(value: Any) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise JsmlTypeError(f"children must be a list of JSML nodes, got {_describe(value)}")
    return value


def check_dataset(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        raise JsmlTypeError(f"dataset must be a mapping, got {_describe(value)}")
    result: Dict[str, str] = {}
    for key, item in value.items():
        check_name(dataset_attribute(str(key)), "dataset")
        result[str(key)] = check_string(item, f"dataset value for '{key}'")
    return result


def check_listeners(value: Any) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise JsmlTypeError(f"listeners must be a mapping of event name to handler, got {_describe(value)}")
    for event, handler in value.items():
        check_name(str(event).lower(), "event")
        check_listener(handler, str(event))
    return {str(event).lower(): handler for event, handler in value.items()}


def check_listener(value: Any, event: str) -> Any:
    if not (callable(value) or isinstance(value, str)):
        raise JsmlTypeError(f"handler for '{event}' must be callable or a string, got {_describe(value)}")
    return value


def coerce_attribute(value: Any) -> str:
    """Best-effort string form used when attribute checks are permissive."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def check_attribute(value: Any, name: str, tag: str, options: RenderOptions) -> str:
    if isinstance(value, str):
        return value
    if options.strict_attributes:
        raise JsmlTypeError(f"attribute '{name}' of <{tag}> must be a string, got {_describe(value)}")
    coerced = coerce_attribute(value)
    warn(f"jsml: attribute '{name}' of <{tag}> is not a string; using {coerced!r}")
    return coerced
