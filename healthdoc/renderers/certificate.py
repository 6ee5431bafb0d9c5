from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import (
    ListVariant,
    cell,
    item_list,
    joined,
    key_value_row,
    paragraph,
    rows,
    section,
    small_text,
    status_dot,
    table,
)
from healthdoc.renderers.models import CertificateMeta

SIGNED_NOTE = "This certificate is digitally signed."


def render_certificate(meta: CertificateMeta) -> str:
    cert_type = meta.certificate_type
    if cert_type and meta.certificate_sub_type:
        cert_type = f"{cert_type} ({meta.certificate_sub_type})"

    issued_by = meta.issued_by
    if issued_by and meta.registration_no:
        issued_by = f"{issued_by}, Reg. No. {meta.registration_no}"

    systems = [
        [cell(f.system), status_dot(f.status) or cell(None)]
        for f in (meta.system_findings or [])
        if f.system
    ]
    tests = [[cell(t.name), cell(t.result)] for t in (meta.tests_performed or []) if t.name]

    clearance = joined([
        key_value_row("Cleared For", meta.clearance_for),
        key_value_row("Status", meta.clearance_status),
        item_list(meta.clearance_conditions, ListVariant.check),
    ])

    return joined([
        section(
            "Certificate Details",
            rows(
                ("Certificate Type", cert_type),
                ("Certificate Number", meta.certificate_number),
                ("Issued For", meta.issued_for),
                ("Purpose", meta.purpose),
                ("Valid From", format_date(meta.valid_from)),
                ("Valid Until", format_date(meta.valid_until)),
                ("Examination Date", format_date(meta.examination_date)),
                ("Issued By", issued_by),
            ),
        ),
        section(
            "Leave Period",
            rows(
                ("Diagnosis", meta.leave_diagnosis),
                ("From", format_date(meta.leave_from)),
                ("To", format_date(meta.leave_to)),
                ("Duration", meta.leave_duration),
            ),
        ),
        section("Certificate Content", paragraph(meta.certificate_content)),
        section("Examination Findings", item_list(meta.examination_findings_list, ListVariant.bullet)),
        section("System Findings", table(["System", "Status"], systems)),
        section("Tests Performed", table(["Test", "Result"], tests)),
        section("Clearance", clearance),
        section("Conclusion", paragraph(meta.conclusion)),
        small_text(SIGNED_NOTE, emphasis=True) if meta.digitally_signed else "",
    ])
