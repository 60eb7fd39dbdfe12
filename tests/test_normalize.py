import pytest

from jsml.dom_model import Document
from jsml.errors import JsmlStructureError
from jsml.normalize import looks_realized, resolve_node, resolve_nodes
from jsml.types_jsml import RealizedNode, StructuredNode, TextNode


def test_string_resolves_to_text() -> None:
    assert resolve_node("hello") == TextNode("hello")


def test_explicit_and_wrapper_forms_agree() -> None:
    explicit = resolve_node({"tag": "a", "text": "x"})
    wrapper = resolve_node({"a": "x"})

    assert explicit == wrapper == StructuredNode("a", {"text": "x"})


def test_wrapper_with_property_bag() -> None:
    node = resolve_node({"a": {"href": "#", "text": "my link"}})

    assert node.tag == "a"
    assert node.properties == {"href": "#", "text": "my link"}


def test_none_bag_is_empty() -> None:
    assert resolve_node({"br": None}) == StructuredNode("br", {})


def test_input_is_not_mutated() -> None:
    raw = {"tag": "p", "class": "x"}
    node = resolve_node(raw)

    assert node.properties == {"class": "x"}
    assert raw == {"tag": "p", "class": "x"}


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"a": {}, "b": {}},
        {"tag": ""},
        {"tag": 3},
        {"p": 5},
        42,
        ["x"],
        None,
    ],
)
def test_unresolvable_nodes_raise(raw) -> None:
    with pytest.raises(JsmlStructureError):
        resolve_node(raw)


def test_realized_nodes_pass_through() -> None:
    elem = Document().create_element("div")

    assert looks_realized(elem)
    assert resolve_node(elem) == RealizedNode(elem)


def test_custom_realized_check() -> None:
    marker = object()
    node = resolve_node(marker, is_realized=lambda value: value is marker)

    assert isinstance(node, RealizedNode)
    assert node.node is marker


def test_resolve_nodes_keeps_order() -> None:
    nodes = resolve_nodes(["a", {"b": "c"}])

    assert nodes == [TextNode("a"), StructuredNode("b", {"text": "c"})]


def test_resolve_nodes_rejects_single_node() -> None:
    with pytest.raises(JsmlStructureError):
        resolve_nodes({"p": "x"})


@pytest.mark.parametrize("raw", [{"a b": {}}, {"tag": 'p"'}, {"tag": "div>"}])
def test_tags_with_markup_characters_raise(raw) -> None:
    with pytest.raises(JsmlStructureError):
        resolve_node(raw)
