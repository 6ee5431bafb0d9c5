"""Visit-shaped categories: consultations, ER visits, procedures, referrals and other visits."""

from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import (
    CalloutVariant,
    ListVariant,
    callout,
    cell,
    item_list,
    joined,
    key_value_row,
    labelled_paragraph,
    linked_record,
    paragraph,
    rows,
    section,
    small_text,
    table,
    vitals_grid,
)
from healthdoc.renderers.models import (
    ConsultationMeta,
    ErVisitMeta,
    OtherVisitMeta,
    ProcedureMeta,
    ReferralMeta,
)


def render_consultation(meta: ConsultationMeta) -> str:
    details = rows(
        ("Visit Type", meta.visit_type_label),
        ("OPD Number", meta.opd_number),
        ("Duration", meta.duration),
        ("Location", meta.location),
        ("Clinic", meta.clinic_name),
        ("Specialty", meta.doctor_specialty),
    )

    diagnosis = ""
    if meta.diagnosis:
        icd = small_text(f"ICD Code: {meta.icd_code}" if meta.icd_code else None)
        diagnosis = section("Diagnosis", callout(meta.diagnosis, CalloutVariant.blue) + icd)

    follow_up = joined([
        labelled_paragraph("Date", format_date(meta.follow_up_date)),
        paragraph(meta.follow_up_recommendation),
    ])

    linked = joined([
        linked_record(ref.title, ref.link_text, ref.action)
        for ref in (meta.linked_records or [])
        if ref.title
    ])

    return joined([
        section("Visit Details", details),
        section("Chief Complaint", paragraph(meta.chief_complaint)),
        section("History of Present Illness", paragraph(meta.history_of_present_illness)),
        section("Symptoms", item_list(meta.symptoms, ListVariant.bullet)),
        section("Vitals", vitals_grid(meta.vitals)),
        section("Examination Findings", paragraph(meta.examination_findings or meta.clinical_examination)),
        diagnosis,
        section(
            "Treatment Plan",
            joined([paragraph(meta.treatment_plan), item_list(meta.treatment_plan_steps)]),
        ),
        section("Follow-Up", follow_up),
        section("Linked Records", linked),
    ])


def render_er_visit(meta: ErVisitMeta) -> str:
    details = rows(
        ("ER Number", meta.er_number),
        ("Arrival Time", meta.arrival_time),
        ("Discharge Time", meta.discharge_time),
        ("Mode of Arrival", meta.mode_of_arrival),
        ("Triage Level", meta.triage_level),
        ("Attending Doctor", meta.attending_doctor),
    )

    investigations = [
        [cell(inv.name), cell(inv.result)]
        for inv in (meta.investigations or [])
        if inv.name or inv.result
    ]

    return joined([
        section("Visit Details", details),
        section("Chief Complaint", callout(meta.chief_complaint, CalloutVariant.red)),
        key_value_row("Pain Score", meta.pain_score),
        section("Vitals", vitals_grid(meta.vitals)),
        section(
            "Examination",
            joined([paragraph(meta.examination), item_list(meta.structured_examination, ListVariant.bullet)]),
        ),
        section("Investigations", table(["Investigation", "Result"], investigations)),
        section("Diagnosis", callout(meta.diagnosis, CalloutVariant.blue)),
        section(
            "Treatment Given",
            joined([paragraph(meta.treatment_given), item_list(meta.treatment_items, ListVariant.bullet)]),
        ),
        section("Disposition", joined([paragraph(meta.disposition), paragraph(meta.disposition_detail)])),
        section("Follow-Up", paragraph(meta.follow_up)),
    ])


def render_procedure(meta: ProcedureMeta) -> str:
    details = rows(
        ("Procedure", meta.procedure_name),
        ("Indication", meta.indication),
        ("Anesthesia", meta.anesthesia),
        ("Duration", meta.duration),
        ("Blood Loss", meta.blood_loss),
        ("Technique", meta.technique),
    )

    team = [
        [cell(m.role), cell(m.name), cell(m.credentials)]
        for m in (meta.surgical_team or [])
        if m.role or m.name
    ]

    return joined([
        section("Procedure Details", details),
        section("Surgical Team", table(["Role", "Name", "Credentials"], team)),
        section("Findings", paragraph(meta.findings)),
        section("Complications", paragraph(meta.complications)),
        section("Post-Operative Instructions", paragraph(meta.post_op_instructions)),
    ])


def render_referral(meta: ReferralMeta) -> str:
    return joined([
        section(
            "Referral Details",
            rows(
                ("Referred To", meta.referred_to_doctor),
                ("Department", meta.referred_to_department),
                ("Priority", meta.priority),
            ),
        ),
        section("Reason for Referral", paragraph(meta.reason)),
        section("Current Diagnosis", paragraph(meta.diagnosis)),
    ])


def render_other_visit(meta: OtherVisitMeta) -> str:
    return joined([
        section("Visit Details", rows(("Visit Type", meta.visit_type), ("Duration", meta.duration))),
        section("Notes", paragraph(meta.notes)),
        section("Follow-Up", paragraph(meta.follow_up)),
    ])
