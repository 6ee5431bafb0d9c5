from typing import List, Optional

from healthdoc.commons.formatting import escape, format_date, format_number, title_case
from healthdoc.renderers.blocks import (
    CalloutVariant,
    callout,
    cell,
    joined,
    paragraph,
    rows,
    section,
    small_text,
    status_dot,
    table,
)
from healthdoc.renderers.models import EcgReportMeta, LabReportMeta, PftReportMeta, ResultEntry

LAB_HEADERS = ["Parameter", "Value", "Reference Range", "Status"]
PFT_HEADERS = ["Parameter", "Value", "Predicted", "% Predicted", "Status"]


def _yes_no(flag: Optional[bool]) -> Optional[str]:
    if flag is None:
        return None
    return "Yes" if flag else "No"


def _lab_row(r: ResultEntry) -> List[str]:
    value = " ".join(v for v in (r.value, r.unit) if v)
    return [cell(r.parameter), cell(value), cell(r.reference_range), status_dot(r.status) or cell(None)]


def _pft_row(r: ResultEntry) -> List[str]:
    return [
        cell(r.parameter),
        cell(r.value),
        cell(r.predicted),
        cell(r.percent_predicted),
        status_dot(r.status) or cell(None),
    ]


def result_tables(results: Optional[List[ResultEntry]], default_kind: str = "lab") -> str:
    """Split result entries by kind and render one table per kind, lab first."""
    if not results:
        return ""
    lab, pft = [], []
    for r in results:
        if r.resolved_kind(default_kind) == "pft":
            pft.append(_pft_row(r))
        else:
            lab.append(_lab_row(r))
    return joined([table(LAB_HEADERS, lab), table(PFT_HEADERS, pft)])


def _test_information(meta: LabReportMeta) -> str:
    return section(
        "Test Information",
        rows(
            ("Test Name", meta.test_name),
            ("Category", meta.test_category),
            ("Laboratory", meta.lab_name),
            ("Sample Type", meta.sample_type),
            ("Collected", format_date(meta.collected_date)),
            ("Reported", format_date(meta.reported_date)),
            ("Verified By", meta.verified_by),
            ("Fasting", _yes_no(meta.fasting)),
        ),
    )


def render_lab_report(meta: LabReportMeta) -> str:
    return joined([
        _test_information(meta),
        section("Results", result_tables(meta.results, "lab")),
    ])


def render_pft_report(meta: PftReportMeta) -> str:
    return joined([
        _test_information(meta),
        section(
            "Patient Parameters",
            rows(
                ("Age", meta.patient_age),
                ("Height", meta.patient_height),
                ("Weight", meta.patient_weight),
            ),
        ),
        section("Results", result_tables(meta.results, "pft")),
        section("Interpretation", callout(meta.interpretation, CalloutVariant.blue)),
    ])


def render_ecg_report(meta: EcgReportMeta) -> str:
    heart_rate = f"{format_number(meta.heart_rate)} bpm" if meta.heart_rate else None
    parts = [
        section(
            "ECG Details",
            rows(
                ("Indication", meta.indication),
                ("Heart Rate", heart_rate),
                ("Rhythm", meta.rhythm),
                ("Axis", meta.axis),
            ),
        )
    ]

    if meta.patient_status:
        parts.append(section("Patient Status", rows(*((title_case(k), _yes_no(v) if isinstance(v, bool) else v) for k, v in meta.patient_status.items()))))

    if meta.intervals:
        interval_rows = [
            [escape(label), escape(value)]
            for label, value in (
                ("PR Interval", meta.intervals.pr),
                ("QRS Duration", meta.intervals.qrs),
                ("QT Interval", meta.intervals.qt),
            )
            if value
        ]
        parts.append(section("Intervals", table(["Interval", "Value"], interval_rows)))

    parts.append(section("ECG Results", result_tables(meta.ecg_results, "lab")))
    parts.append(section("Findings", paragraph(meta.findings)))
    parts.append(section("Impression", callout(meta.impression, CalloutVariant.blue)))

    cardiologist = ", ".join(v for v in (meta.cardiologist, meta.cardiologist_credentials) if v)
    parts.append(small_text(f"Reported by {cardiologist}" if cardiologist else None))
    return joined(parts)
