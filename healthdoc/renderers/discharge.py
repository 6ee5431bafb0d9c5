from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import (
    CalloutVariant,
    ListVariant,
    action_label,
    badge,
    callout,
    cell,
    item_list,
    joined,
    labelled_paragraph,
    paragraph,
    rows,
    section,
    table,
    vitals_grid,
)
from healthdoc.renderers.models import DischargeMeta, FollowUpItem

WARNING_LEAD = "Return to hospital immediately if:"


def _follow_up_status(item: FollowUpItem) -> str:
    if item.booked:
        return badge("Booked", "green")
    return action_label("Book now", "book_follow_up")


def render_discharge(meta: DischargeMeta) -> str:
    admission = rows(
        ("IPD Number", meta.ipd_number),
        ("Admission Date", format_date(meta.admission_date)),
        ("Discharge Date", format_date(meta.discharge_date)),
        ("Length of Stay", meta.length_of_stay),
        ("Room", meta.room_info),
        ("Treating Doctor", meta.treating_doctor),
    )

    diagnosis = joined([
        labelled_paragraph("Primary", meta.primary_diagnosis),
        labelled_paragraph("Secondary", meta.secondary_diagnosis),
        # a bare diagnosis only stands in when no primary one is given
        paragraph(meta.diagnosis) if not meta.primary_diagnosis else "",
    ])

    procedures = joined([paragraph(meta.procedure_performed), item_list(meta.procedures, ListVariant.bullet)])

    medications = [
        [cell(m.name), cell(m.dosage), cell(m.duration)]
        for m in (meta.discharge_medications or [])
        if m.name
    ]

    warnings = ""
    if meta.warning_signs:
        warnings = callout(WARNING_LEAD, CalloutVariant.red) + item_list(meta.warning_signs, ListVariant.bullet)

    schedule = [
        [cell(f.description), cell(format_date(f.date)), _follow_up_status(f)]
        for f in (meta.follow_up_schedule or [])
        if f.description or f.date
    ]

    return joined([
        section("Admission Details", admission),
        section("Diagnosis", diagnosis),
        section("Procedures", procedures),
        section("Condition at Discharge", callout(meta.condition_at_discharge, CalloutVariant.green)),
        section("Hospital Course", paragraph(meta.hospital_course)),
        section("Vitals at Discharge", vitals_grid(meta.vitals_at_discharge)),
        section("Discharge Prescriptions", table(["Prescription", "Dosage", "Duration"], medications)),
        section("Instructions", paragraph(meta.discharge_instructions)),
        section("Do's", item_list(meta.discharge_dos, ListVariant.check)),
        section("Don'ts", item_list(meta.discharge_donts, ListVariant.cross)),
        section("Warning Signs", warnings),
        section("Follow-Up Schedule", table(["Description", "Date", "Status"], schedule)),
        section("Emergency Contact", paragraph(meta.emergency_contact)),
    ])
