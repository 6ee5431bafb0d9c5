from healthdoc.renderers.blocks import (
    CalloutVariant,
    ListVariant,
    callout,
    item_list,
    key_value_row,
    section,
    status_dot,
    table,
    vitals_grid,
)


def test_empty_inputs_render_nothing():
    assert section("X", "") == ""
    assert section("X", "   ") == ""
    assert table([], []) == ""
    assert table(["A"], []) == ""
    assert key_value_row("Label", None) == ""
    assert key_value_row("Label", "") == ""
    assert callout("", CalloutVariant.red) == ""
    assert item_list([]) == ""
    assert item_list(None) == ""
    assert vitals_grid({}) == ""
    assert status_dot("") == ""


def test_key_value_row_escapes_label_and_value():
    html = key_value_row("<b>", "<script>alert(1)</script>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&lt;b&gt;" in html


def test_key_value_row_keeps_zero():
    assert "0" in key_value_row("Refills", 0)


def test_table_escapes_headers_not_cells():
    html = table(["<Param>"], [["<span>x</span>"]])
    assert "<th>&lt;Param&gt;</th>" in html
    assert "<td><span>x</span></td>" in html


def test_item_list_variants():
    numbered = item_list(["a", "b"])
    assert numbered.startswith('<ol class="list list-numbered">')
    assert numbered.count("<li>") == 2

    check = item_list(["Rest"], ListVariant.check)
    cross = item_list(["Drive"], ListVariant.cross)
    assert "list-check" in check and "&#10003;" in check
    assert "list-cross" in cross and "&#10007;" in cross


def test_item_list_drops_empty_items():
    html = item_list(["a", "", None], ListVariant.bullet)
    assert html.count("<li>") == 1


def test_callout_variant_class():
    assert 'class="callout callout-amber"' in callout("careful", CalloutVariant.amber)
    assert 'class="callout callout-green"' in callout("ok", "green")


def test_vitals_grid_drops_falsy_and_title_cases():
    html = vitals_grid({"bp": "120/80", "heart_rate": "72", "spo2": ""})
    assert html.count('class="vital-item"') == 2
    assert ">BP<" in html
    assert ">Heart Rate<" in html


def test_status_dot_tier_and_label():
    html = status_dot("high")
    assert "status-abnormal" in html
    assert 'title="High"' in html
    assert "status-critical" in status_dot("critical")
