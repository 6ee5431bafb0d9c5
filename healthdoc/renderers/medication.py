from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import (
    CalloutVariant,
    ListVariant,
    callout,
    cell,
    item_list,
    joined,
    paragraph,
    rows,
    section,
    table,
)
from healthdoc.renderers.models import MedicationMeta, PrescriptionMeta

DRUG_HEADERS = ["Prescription", "Dosage", "Frequency", "Duration", "Instructions"]


def render_prescription(meta: PrescriptionMeta) -> str:
    refills = None
    if meta.refills_remaining:
        due = format_date(meta.refill_due_date)
        refills = f"{meta.refills_remaining} (next due {due})" if due else meta.refills_remaining

    prescriber = meta.prescribing_doctor
    if prescriber and meta.prescriber_specialty:
        prescriber = f"{prescriber} ({meta.prescriber_specialty})"

    drugs = []
    for d in meta.drugs or []:
        if not d.name:
            continue
        name = f"{d.name} ({d.generic_name})" if d.generic_name else d.name
        drugs.append([cell(name), cell(d.dosage), cell(d.frequency), cell(d.duration), cell(d.instructions)])

    return joined([
        section(
            "Prescription Details",
            rows(
                ("Diagnosis", meta.prescription_diagnosis or meta.diagnosis),
                ("Prescribed By", prescriber),
                ("Valid Until", format_date(meta.valid_until)),
                ("Refills Remaining", refills),
            ),
        ),
        section("Prescriptions", table(DRUG_HEADERS, drugs)),
        section("General Instructions", item_list(meta.general_instructions, ListVariant.bullet)),
    ])


def render_medication(meta: MedicationMeta, active: bool = True) -> str:
    with_food = None
    if meta.with_food is not None:
        with_food = "Yes" if meta.with_food else "No"

    details = rows(
        ("Drug Name", meta.drug_name or meta.medication),
        ("Dosage", meta.dosage),
        ("Frequency", meta.frequency),
        ("Route", meta.route),
        ("Timing", meta.timing),
        ("With Food", with_food),
        ("Duration", meta.medication_duration),
        ("Start Date", format_date(meta.start_date)),
        ("End Date", format_date(meta.end_date)),
        ("Prescribing Doctor", meta.prescribing_doctor),
        ("Condition", meta.condition),
    )

    side_effects = ""
    if meta.side_effects:
        side_effects = joined([
            item_list(meta.side_effects, ListVariant.bullet),
            callout(meta.side_effects_warning, CalloutVariant.amber),
        ])

    return joined([
        section("Medication Details", details),
        section("Reason Stopped", paragraph(meta.reason_stopped)) if not active else "",
        section("How It Works", paragraph(meta.how_it_works)),
        section("Possible Side Effects", side_effects),
    ])
