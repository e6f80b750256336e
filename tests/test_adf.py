import json

from jira_report.core.adf import extract_text


def _doc(*blocks):
    return {"type": "doc", "version": 1, "content": list(blocks)}


def _para(*runs):
    return {"type": "paragraph", "content": list(runs)}


def _text(value):
    return {"type": "text", "text": value}


def test_paragraphs_join_with_newlines():
    doc = _doc(_para(_text("Hello "), _text("world")), _para(_text("Second")))
    assert extract_text(doc) == "Hello world\nSecond"


def test_hard_break_and_nested_lists():
    doc = _doc(
        _para(_text("a"), {"type": "hardBreak"}, _text("b")),
        {
            "type": "bulletList",
            "content": [
                {"type": "listItem", "content": [_para(_text("item 1"))]},
                {"type": "listItem", "content": [_para(_text("item 2"))]},
            ],
        },
    )
    assert extract_text(doc) == "a\nb\nitem 1\nitem 2"


def test_unknown_nodes_are_skipped_not_errors():
    doc = _doc(
        {"type": "mediaSingle", "attrs": {"layout": "center"}},
        {"type": "panel", "content": [_para(_text("inside panel"))]},
        {"no_type": True},
        "stray string",
        42,
    )
    assert extract_text(doc) == "inside panel"


def test_mentions_and_cards_keep_their_text():
    doc = _doc(
        _para(
            {"type": "mention", "attrs": {"text": "@Alice"}},
            _text(" see "),
            {"type": "inlineCard", "attrs": {"url": "https://x"}},
        )
    )
    assert extract_text(doc) == "@Alice see https://x"


def test_plain_and_json_strings():
    assert extract_text("  plain text  ") == "plain text"
    assert extract_text(json.dumps(_doc(_para(_text("from json"))))) == "from json"
    assert extract_text('{"type": broken') == '{"type": broken'


def test_empty_values():
    assert extract_text(None) == ""
    assert extract_text(_doc()) == ""
    assert extract_text("") == ""
