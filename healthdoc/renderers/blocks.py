"""
Building blocks for record fragments.

Raw text arguments (titles, labels, values, list items, callout text) are
escaped here, once. `content` arguments and table cells are fragments already
produced by these blocks or by `escape()`, and are inserted as-is.
"""

from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from healthdoc.commons.formatting import classify_status, escape, format_number, title_case

Fragment = str


class CalloutVariant(str, Enum):
    purple = "purple"
    blue = "blue"
    green = "green"
    amber = "amber"
    red = "red"


class ListVariant(str, Enum):
    numbered = "numbered"
    bullet = "bullet"
    check = "check"
    cross = "cross"


_LIST_MARKERS = {
    ListVariant.check: "&#10003;",
    ListVariant.cross: "&#10007;",
}


def section(title: str, content: Fragment) -> Fragment:
    if not content or not content.strip():
        return ""
    return f'<div class="section"><h2>{escape(title)}</h2>{content}</div>'


def key_value_row(label: str, value: Any) -> Fragment:
    if value is None or value == "":
        return ""
    if not isinstance(value, str):
        value = format_number(value)
    return (
        f'<div class="row"><span class="row-label">{escape(label)}</span>'
        f'<span class="row-value">{escape(value)}</span></div>'
    )


def rows(*pairs) -> Fragment:
    """Concatenate key_value_row() for each (label, value) pair, skipping empty values."""
    return "".join(key_value_row(label, value) for label, value in pairs)


def table(headers: Sequence[str], body: Sequence[Sequence[Fragment]]) -> Fragment:
    if not body:
        return ""
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    lines = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in body)
    return f'<table><thead><tr>{head}</tr></thead><tbody>{lines}</tbody></table>'


def callout(text: Optional[str], variant: CalloutVariant = CalloutVariant.blue) -> Fragment:
    if not text:
        return ""
    variant = CalloutVariant(variant)
    return f'<div class="callout callout-{variant.value}"><p>{escape(text)}</p></div>'


def item_list(items: Optional[Iterable[Any]], variant: ListVariant = ListVariant.numbered) -> Fragment:
    if not items:
        return ""
    variant = ListVariant(variant)
    values = [escape(item) for item in items if item is not None and item != ""]
    if not values:
        return ""
    marker = _LIST_MARKERS.get(variant)
    if marker:
        lis = "".join(f'<li><span class="list-marker">{marker}</span> {v}</li>' for v in values)
    else:
        lis = "".join(f"<li>{v}</li>" for v in values)
    tag = "ol" if variant is ListVariant.numbered else "ul"
    return f'<{tag} class="list list-{variant.value}">{lis}</{tag}>'


def vitals_grid(vitals: Optional[Mapping[str, Any]]) -> Fragment:
    if not vitals:
        return ""
    entries = [(k, v) for k, v in vitals.items() if v]
    if not entries:
        return ""
    tiles = "".join(
        f'<div class="vital-item"><span class="vital-label">{escape(title_case(k))}</span>'
        f'<span class="vital-value">{escape(format_number(v))}</span></div>'
        for k, v in entries
    )
    return f'<div class="vitals-grid">{tiles}</div>'


def status_dot(status: Optional[str]) -> Fragment:
    if not status:
        return ""
    tier = classify_status(status)
    label = escape(title_case(status))
    return (
        f'<span class="status-dot status-{tier.value}" title="{label}"></span>'
        f'<span class="status-label">{label}</span>'
    )


# ---- small helpers used by the category renderers ----


def paragraph(text: Optional[str]) -> Fragment:
    if not text:
        return ""
    return f"<p>{escape(text)}</p>"


def labelled_paragraph(label: str, text: Optional[str]) -> Fragment:
    if not text:
        return ""
    return f"<p><strong>{escape(label)}:</strong> {escape(text)}</p>"


def small_text(text: Optional[str], emphasis: bool = False) -> Fragment:
    if not text:
        return ""
    inner = f"<em>{escape(text)}</em>" if emphasis else escape(text)
    return f'<p class="small-text">{inner}</p>'


def badge(label: str, tone: str = "blue") -> Fragment:
    return f'<span class="badge badge-{escape(tone)}">{escape(label)}</span>'


def action_label(label: str, action: str) -> Fragment:
    """Clickable label; `action` is opaque and resolved by the calling layer."""
    return f'<span class="cta" data-action="{escape(action)}">{escape(label)}</span>'


def linked_record(title: str, link_text: Optional[str], action: Optional[str]) -> Fragment:
    label = f'<span class="linked-record-title">{escape(title)}</span>'
    if link_text:
        label += " " + action_label(link_text, action or "open_record")
    return f'<div class="linked-record">{label}</div>'


def cell(value: Any, placeholder: str = "-") -> Fragment:
    """Escaped table cell text, `placeholder` when empty."""
    if value is None or value == "":
        return escape(placeholder)
    return escape(format_number(value))


def joined(parts: List[Fragment]) -> Fragment:
    return "".join(p for p in parts if p)
