from typing import Any, Mapping, Optional

from healthdoc.commons.formatting import format_number, title_case
from healthdoc.renderers.blocks import key_value_row, section

# internal or UI-only keys, never shown in a document
HIDDEN_FIELDS = frozenset(
    {
        "ai_summary",
        "ai_summary_generated_at",
        "linked_records",
        "adherence_this_week",
        "vitals_status",
        "attached_certificates",
        "structured_findings",
    }
)


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, dict):
        return " · ".join(_display(v) for v in value.values() if v is not None and v != "")
    if isinstance(value, (list, tuple)):
        parts = (_display(v) for v in value if v is not None and v != "")
        return ", ".join(p for p in parts if p)
    return str(value)


def render_generic(metadata: Optional[Mapping[str, Any]]) -> str:
    """Key/value dump of whatever metadata survives the hidden-field and empty-value filters."""
    if not metadata or not isinstance(metadata, Mapping):
        return ""
    lines = []
    for key, value in metadata.items():
        if key in HIDDEN_FIELDS:
            continue
        if value is None or value == "" or isinstance(value, dict):
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        lines.append(key_value_row(title_case(key), _display(value)))
    return section("Details", "".join(lines))
