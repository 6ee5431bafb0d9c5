from healthdoc.commons.formatting import format_date
from healthdoc.renderers.blocks import cell, joined, rows, section, table
from healthdoc.renderers.models import VaccinationMeta


def render_vaccination(meta: VaccinationMeta) -> str:
    dose = None
    if meta.dose_number and meta.total_doses:
        dose = f"{meta.dose_number} of {meta.total_doses}"
    elif meta.dose_number:
        dose = str(meta.dose_number)

    history = [
        [cell(v.vaccine_name), cell(v.dose_label), cell(format_date(v.date) or v.date), cell(v.administered_by)]
        for v in (meta.vaccination_history or [])
        if v.vaccine_name
    ]
    upcoming = [
        [cell(v.vaccine_name), cell(v.dose_label), cell(format_date(v.due_date) or v.due_date)]
        for v in (meta.upcoming_vaccinations or [])
        if v.vaccine_name
    ]

    return joined([
        section(
            "Vaccination Details",
            rows(
                ("Vaccine", meta.vaccine_name),
                ("Dose", dose),
                ("Manufacturer", meta.manufacturer),
                ("Target Disease", meta.target_disease),
                ("Batch Number", meta.batch_number),
                ("Site", meta.site),
                ("Administered By", meta.administered_by),
                ("Next Due Date", format_date(meta.next_due_date)),
                ("Certificate Number", meta.certificate_number),
            ),
        ),
        section("Vaccination History", table(["Vaccine", "Dose", "Date", "Administered By"], history)),
        section("Upcoming Vaccinations", table(["Vaccine", "Dose", "Due Date"], upcoming)),
    ])
