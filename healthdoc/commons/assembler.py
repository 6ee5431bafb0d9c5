from datetime import date
from typing import Mapping, Optional, Sequence

from healthdoc.commons.formatting import escape, format_date, title_case
from healthdoc.commons.types import HealthRecord
from healthdoc.renderers.blocks import cell, table
from healthdoc.renderers.registry import render_category

EMPTY_SELECTION = "No records selected."
BULK_HEADERS = ["Title", "Category", "Date", "Doctor"]

_CSS = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, sans-serif; color: #1a1a1a; line-height: 1.6; padding: 40px; max-width: 800px; margin: 0 auto; }
h1 { font-size: 20px; font-weight: 700; margin-bottom: 8px; color: #00184D; }
h2 { font-size: 16px; font-weight: 600; margin: 24px 0 12px; color: #00184D; border-bottom: 1px solid #e5e7eb; padding-bottom: 8px; }
p, li { font-size: 13px; color: #4b5563; }
.subtitle { font-size: 13px; color: #6b7280; margin-bottom: 24px; }
.small-text { font-size: 11px; color: #6b7280; margin-top: 4px; }
table { width: 100%; border-collapse: collapse; margin: 12px 0; }
th, td { text-align: left; padding: 8px 12px; border-bottom: 1px solid #e5e7eb; font-size: 13px; }
th { font-weight: 600; color: #374151; background: #f9fafb; }
.section { margin-bottom: 24px; }
.row { display: flex; justify-content: space-between; padding: 6px 0; border-bottom: 1px solid #f3f4f6; }
.row-label { color: #6b7280; font-size: 13px; }
.row-value { font-weight: 500; font-size: 13px; }
.list { padding-left: 20px; }
.list-check, .list-cross { list-style: none; padding-left: 0; }
.list-check .list-marker { color: #059669; }
.list-cross .list-marker { color: #dc2626; }
.callout { border-radius: 8px; padding: 12px 16px; margin: 8px 0; }
.callout-purple { background: #f5f3ff; border-left: 3px solid #7c3aed; }
.callout-blue { background: #eff6ff; border-left: 3px solid #1e40af; }
.callout-green { background: #ecfdf5; border-left: 3px solid #059669; }
.callout-amber { background: #fffbeb; border-left: 3px solid #d97706; }
.callout-red { background: #fef2f2; border-left: 3px solid #dc2626; }
.ai-summary-label { font-size: 11px; font-weight: 600; text-transform: uppercase; color: #7c3aed; }
.vitals-grid { display: flex; flex-wrap: wrap; gap: 12px; }
.vital-item { border: 1px solid #e5e7eb; border-radius: 8px; padding: 8px 12px; min-width: 120px; }
.vital-label { display: block; font-size: 11px; color: #6b7280; }
.vital-value { display: block; font-size: 14px; font-weight: 600; }
.status-dot { display: inline-block; width: 8px; height: 8px; border-radius: 50%; margin-right: 6px; }
.status-normal { background: #059669; }
.status-abnormal { background: #d97706; }
.status-critical { background: #dc2626; }
.badge { display: inline-block; padding: 2px 8px; border-radius: 12px; font-size: 11px; font-weight: 500; }
.badge-green { background: #ecfdf5; color: #059669; }
.badge-amber { background: #fffbeb; color: #d97706; }
.badge-red { background: #fef2f2; color: #dc2626; }
.badge-blue { background: #eff6ff; color: #1e40af; }
.cta { color: #1e40af; font-weight: 500; }
.footer { margin-top: 40px; padding-top: 16px; border-top: 1px solid #e5e7eb; font-size: 11px; color: #9ca3af; text-align: center; }
@media print { body { padding: 20px; } @page { margin: 1cm; } }
"""


def summary_block(summary: Optional[str]) -> str:
    if not summary:
        return ""
    return (
        '<div class="ai-summary"><div class="ai-summary-label">AI Summary</div>'
        f'<div class="callout callout-purple"><p>{escape(summary)}</p></div></div>'
    )


def render_record(record: HealthRecord, summary: Optional[str] = None) -> str:
    """Summary block (when given) followed by the category body."""
    return summary_block(summary) + render_category(record.category, record.metadata)


def record_date_label(record: HealthRecord) -> str:
    return record.record_date_formatted or format_date(record.record_date)


def render_bulk(records: Sequence[HealthRecord], category_labels: Optional[Mapping[str, str]] = None) -> str:
    if not records:
        return EMPTY_SELECTION
    labels = category_labels or {}
    body = [
        [
            cell(r.title),
            cell(labels.get(r.category) or title_case(r.category)),
            cell(record_date_label(r)),
            cell(r.attribution),
        ]
        for r in records
    ]
    count = len(records)
    noun = "record" if count == 1 else "records"
    return f'<p class="subtitle">{count} {noun} selected</p>' + table(BULK_HEADERS, body)


def wrap_document(
    title: str,
    fragment: str,
    subtitle: Optional[str] = None,
    footer: Optional[str] = None,
    generated_on: Optional[date] = None,
) -> str:
    """Standalone printable HTML page around an already-escaped fragment."""
    generated = format_date(generated_on or date.today())
    footer_text = f"Generated on {escape(generated)}"
    if footer:
        footer_text += f" &middot; {escape(footer)}"
    head = f"<h1>{escape(title)}</h1>"
    if subtitle:
        head += f'<p class="subtitle">{escape(subtitle)}</p>'
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="UTF-8">\n'
        f"<title>{escape(title)}</title>\n<style>{_CSS}</style>\n</head>\n<body>\n"
        f"{head}\n{fragment}\n"
        f'<div class="footer">{footer_text}</div>\n'
        "</body>\n</html>\n"
    )
