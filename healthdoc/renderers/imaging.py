from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import (
    CalloutVariant,
    callout,
    cell,
    joined,
    key_value_row,
    paragraph,
    rows,
    section,
    table,
)
from healthdoc.renderers.models import ImagingMeta, PathologyMeta


def _with_credentials(name, credentials):
    if not name:
        return None
    return f"{name}, {credentials}" if credentials else name


def render_imaging(meta: ImagingMeta, color: CalloutVariant = CalloutVariant.blue) -> str:
    """X-ray, CT, MRI and ultrasound share one layout; only the impression colour differs."""
    details = rows(
        ("Modality", meta.modality),
        ("Body Part", meta.body_part),
        ("Views", meta.views),
        ("Indication", meta.indication),
        ("Technique", meta.technique),
        ("Contrast", meta.contrast),
        ("Sequences", meta.sequences),
        ("Radiologist", _with_credentials(meta.radiologist, meta.radiologist_credentials)),
        ("Sonographer", meta.sonographer),
    )

    structured = [
        [cell(f.region), cell(f.description)]
        for f in (meta.structured_findings or [])
        if f.region or f.description
    ]

    return joined([
        section("Study Details", details),
        section("Findings", paragraph(meta.findings)),
        section("Structured Findings", table(["Region", "Finding"], structured)),
        section("Impression", callout(meta.impression, color)),
    ])


def render_pathology(meta: PathologyMeta) -> str:
    details = rows(
        ("Specimen Type", meta.specimen_type),
        ("Method", meta.method),
        ("Collected", format_date(meta.collected_date_pathology)),
        ("LMP", format_date(meta.lmp)),
        ("Adequacy", meta.adequacy),
        ("Pathologist", _with_credentials(meta.pathologist, meta.pathologist_credentials)),
    )
    result = joined([paragraph(meta.result_text), paragraph(meta.result_interpretation)])

    return joined([
        section("Specimen Details", details),
        section("Gross Description", paragraph(meta.gross_description)),
        section("Microscopic Findings", paragraph(meta.microscopic_findings)),
        section("Result", result),
        section("Diagnosis", callout(meta.diagnosis, CalloutVariant.purple)),
        key_value_row("Grade", meta.grade),
        section("Recommendation", paragraph(meta.recommendation)),
    ])
