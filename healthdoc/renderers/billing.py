from healthdoc.commons.formatting import escape, format_currency
from healthdoc.renderers.blocks import cell, joined, rows, section, table
from healthdoc.renderers.models import InvoiceMeta


def render_invoice(meta: InvoiceMeta) -> str:
    items = [
        [cell(item.label), escape(format_currency(item.amount)) or cell(None)]
        for item in (meta.line_items or [])
        if item.label
    ]
    return joined([
        section(
            "Invoice Details",
            rows(
                ("Invoice Number", meta.invoice_number),
                ("Amount", format_currency(meta.amount)),
                ("Payment Status", meta.payment_status),
            ),
        ),
        section("Line Items", table(["Item", "Amount"], items)),
    ])
