from __future__ import annotations

import pytest

from jsml.create_element import create_element, create_elements
from jsml.dom_model import Document, Element, Text
from jsml.errors import JsmlStructureError, JsmlTypeError, ListenerCoercionError
from jsml.listeners import unsafe_python_handler
from jsml.models import RenderOptions


def test_paragraph_with_mixed_children() -> None:
    elem = create_element({"p": {"class": "a b", "$": ["x", {"em": "y"}]}})

    assert isinstance(elem, Element)
    assert elem.tag == "p"
    assert list(elem.class_list) == ["a", "b"]
    assert isinstance(elem.children[0], Text)
    assert elem.children[0].text_content == "x"
    assert elem.children[1].tag == "em"
    assert elem.children[1].text_content == "y"
    assert elem.outer_html == '<p class="a b">x<em>y</em></p>'


def test_string_becomes_text_node() -> None:
    document = Document()
    node = create_element("hello", document)

    assert isinstance(node, Text)
    assert node.text_content == "hello"
    assert node.owner_document is document


def test_explicit_and_wrapper_forms_build_equal_elements() -> None:
    assert create_element({"tag": "a", "text": "x"}) == create_element({"a": "x"})


def test_realized_element_is_cloned() -> None:
    original = create_element({"b": {"#": "bold", "text": "x"}})
    clone = create_element(original)

    assert clone == original
    assert clone is not original
    assert clone.children[0] is not original.children[0]


def test_building_twice_gives_independent_trees() -> None:
    jsml = {"ul": {"children": [{"li": "one"}, {"li": "two"}]}}
    first = create_element(jsml)
    second = create_element(jsml)

    assert first == second
    first.children[0].set_attribute("hidden", "")
    assert not second.children[0].has_attribute("hidden")


def test_class_aliases_union_tokens() -> None:
    elem = create_element({"div": {"class": "a b", "className": "c", ".": ["a", ""]}})

    assert list(elem.class_list) == ["a", "b", "c"]
    assert elem.class_name == "a b c"


def test_style_string_replaces_and_mapping_merges() -> None:
    merged = create_element({"div": {"css": "color: red", "style": {"fontSize": "12px"}}})
    assert merged.style.get_property_value("color") == "red"
    assert merged.style.get_property_value("fontSize") == "12px"
    assert merged.style.css_text == "color: red; font-size: 12px"

    replaced = create_element({"div": {"style": {"color": "red"}, "css": "margin: 0"}})
    assert replaced.style.css_text == "margin: 0"
    assert replaced.style.get_property_value("color") == ""


def test_id_and_literal_attributes() -> None:
    elem = create_element({"a": {"#": "home", "HREF": "/", "text": "Home"}})

    assert elem.id == "home"
    assert elem.get_attribute("href") == "/"
    assert elem.outer_html == '<a id="home" href="/">Home</a>'


def test_dataset_keys_are_kebab_cased() -> None:
    elem = create_element({"div": {"dataset": {"userId": "7", "item-count": "3"}}})

    assert elem.attributes == {"data-user-id": "7", "data-item-count": "3"}
    assert elem.dataset["userId"] == "7"
    assert elem.dataset["itemCount"] == "3"
    assert sorted(elem.dataset) == ["itemCount", "userId"]


def test_child_aliases_append_in_order() -> None:
    elem = create_element({"p": {"text": "a", "child": {"b": "c"}, "!": "d"}})

    assert elem.outer_html == "<p>a<b>c</b>d</p>"


def test_callable_listeners_are_registered() -> None:
    seen: list[str] = []

    def on_focus(event):
        seen.append(f"focus:{event}")

    elem = create_element(
        {"button": {"onClick": lambda event: seen.append(f"click:{event}"), "listeners": {"focus": on_focus}}}
    )
    elem.dispatch_event("click", 1)
    elem.dispatch_event("focus", 2)

    assert seen == ["click:1", "focus:2"]
    assert elem.attributes == {}


def test_string_listener_requires_handler_factory() -> None:
    with pytest.raises(ListenerCoercionError):
        create_element({"button": {"onclick": "event.append(1)"}})


def test_string_listener_uses_handler_factory() -> None:
    document = Document(handler_factory=unsafe_python_handler)
    elem = create_element({"button": {"onclick": "event.append('clicked')"}}, document)
    log: list[str] = []

    elem.dispatch_event("click", log)

    assert log == ["clicked"]
    assert elem.listeners["click"][0].__name__ == "onclick"


def test_malformed_listener_body_fails_at_creation() -> None:
    document = Document(handler_factory=unsafe_python_handler)

    with pytest.raises(ListenerCoercionError):
        create_element({"button": {"listeners": {"click": "def ("}}}, document)


def test_void_element_serializes_without_closing_tag() -> None:
    assert create_element({"br": {}}).outer_html == "<br>"
    assert create_element({"tag": "img", "src": "a.png"}).outer_html == '<img src="a.png">'


def test_non_string_attribute_is_rejected() -> None:
    with pytest.raises(JsmlTypeError):
        create_element({"input": {"type": "checkbox", "checked": True}})


def test_non_string_attribute_is_coerced_when_permissive(capsys) -> None:
    elem = create_element(
        {"input": {"type": "checkbox", "checked": True}},
        options=RenderOptions(strict_attributes=False),
    )

    assert elem.get_attribute("checked") == "true"
    assert "checked" in capsys.readouterr().err


@pytest.mark.parametrize(
    "jsml",
    [
        {"ul": {"children": "not a list"}},
        {"div": {"dataset": ["x"]}},
        {"div": {"style": 3}},
        {"div": {"#": 3}},
        {"div": {"listeners": {"click": 3}}},
    ],
)
def test_wrong_value_shapes_raise(jsml) -> None:
    with pytest.raises(JsmlTypeError):
        create_element(jsml)


def test_invalid_nested_node_aborts_whole_call() -> None:
    with pytest.raises(JsmlStructureError):
        create_element({"div": {"children": [{"p": "ok"}, {}]}})


def test_create_elements_maps_a_list() -> None:
    document = Document()
    nodes = create_elements(["x", {"hr": {}}], document)

    assert [node.outer_html for node in nodes] == ["x", "<hr>"]


def test_custom_document_context() -> None:
    created: list[str] = []

    class RecordingDocument(Document):
        def create_element(self, tag: str) -> Element:
            created.append(tag)
            return super().create_element(tag)

    create_element({"div": {"$": [{"span": "a"}, {"span": "b"}]}}, RecordingDocument())

    assert created == ["div", "span", "span"]


def test_style_merge_keeps_semicolons_inside_quotes_and_parentheses() -> None:
    elem = create_element(
        {
            "div": {
                "style": 'background: url("a;b.png"); mask: url(data:image/png;base64,AAA)',
                "css": {"color": "red"},
            }
        }
    )

    assert elem.style.get_property_value("background") == 'url("a;b.png")'
    assert elem.style.get_property_value("mask") == "url(data:image/png;base64,AAA)"
    assert elem.style.get_property_value("color") == "red"


def test_bare_on_key_is_rejected() -> None:
    with pytest.raises(JsmlTypeError):
        create_element({"button": {"on": lambda event: None}})
