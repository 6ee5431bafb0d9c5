from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import ListVariant, item_list, joined, paragraph, rows, section
from healthdoc.renderers.models import DocumentMeta


def render_document(meta: DocumentMeta) -> str:
    return joined([
        section(
            "Document Info",
            rows(
                ("Document Type", meta.document_type),
                ("Original Date", format_date(meta.original_date)),
                ("Uploaded", format_date(meta.upload_date)),
                ("File Name", meta.file_name),
                ("File Size", meta.file_size),
            ),
        ),
        section("Notes", paragraph(meta.user_notes)),
        section("Tags", item_list(meta.tags, ListVariant.bullet)),
    ])
