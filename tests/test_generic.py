from healthdoc.renderers.generic import HIDDEN_FIELDS, render_generic
from healthdoc.renderers.registry import render_category


def test_unknown_tag_scenario():
    html = render_category("spaceship_log", {"foo": "bar", "ai_summary": "hidden"})
    assert html.count('<div class="section">') == 1
    assert "<h2>Details</h2>" in html
    assert html.count('<div class="row">') == 1
    assert '<span class="row-label">Foo</span><span class="row-value">bar</span>' in html
    assert "ai_summary" not in html
    assert "hidden" not in html


def test_other_report_uses_generic_layout():
    html = render_category("other_report", {"report_type": "Allergy panel"})
    assert "<h2>Details</h2>" in html
    assert "Report Type" in html


def test_hidden_fields_never_shown():
    meta = {k: "secret" for k in HIDDEN_FIELDS}
    assert render_generic(meta) == ""


def test_empty_and_nested_values_are_dropped():
    meta = {"a": None, "b": "", "c": [], "d": {"x": 1}, "e": "kept"}
    html = render_generic(meta)
    assert html.count('<div class="row">') == 1
    assert ">kept<" in html


def test_value_display_rules():
    meta = {
        "fasting": True,
        "repeat": False,
        "heart_rate": 72.0,
        "tags": ["cardio", "follow-up"],
        "team": [{"role": "Surgeon", "name": "Dr. Rao"}],
    }
    html = render_generic(meta)
    assert ">Yes<" in html and ">No<" in html
    assert ">72<" in html
    assert ">cardio, follow-up<" in html
    assert ">Surgeon · Dr. Rao<" in html


def test_insertion_order_is_kept():
    html = render_generic({"zeta": "1", "alpha": "2"})
    assert html.index("Zeta") < html.index("Alpha")


def test_nothing_left_renders_nothing():
    assert render_generic({}) == ""
    assert render_generic(None) == ""
    assert render_generic({"ai_summary": "x", "empty": ""}) == ""
