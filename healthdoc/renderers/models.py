"""
Per-category metadata schemas.

Each category tag declares the metadata it understands; anything else in the
bag is ignored by the specialised renderer. Schemas are lenient: every field
is optional, unknown keys are allowed, and numbers are accepted where text is
expected. A value of the wrong shape is dropped on its own (a list keeps its
good items), so one bad field never costs the rest of the layout.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from healthdoc.commons.logger import logger
from healthdoc.commons.types import LinkedRecord


class MetaBase(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _tolerate(cls, v, handler, info: ValidationInfo):
        """An off-type value drops only its own field; bad list items drop only themselves."""
        try:
            return handler(v)
        except ValidationError:
            pass
        if isinstance(v, list):
            kept = []
            for item in v:
                try:
                    kept.extend(handler([item]))
                except ValidationError:
                    logger.debug(f"{cls.__name__}.{info.field_name}: dropped item {item!r}")
            return kept or None
        logger.debug(f"{cls.__name__}.{info.field_name}: ignored value {v!r}")
        return None


# ---- nested entries ----


class ResultEntry(MetaBase):
    """Lab or PFT result row. `kind` is explicit when the producer knows it."""

    kind: Optional[str] = None
    parameter: Optional[str] = None
    value: Optional[str] = None
    unit: Optional[str] = None
    reference_range: Optional[str] = None
    predicted: Optional[str] = None
    percent_predicted: Optional[str] = None
    status: Optional[str] = None

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v):
        kind = str(v).strip().lower() if v is not None else ""
        return kind if kind in ("lab", "pft") else None

    def resolved_kind(self, default: str = "lab") -> str:
        if self.kind:
            return self.kind
        if "unit" in self.model_fields_set:
            return "lab"
        if self.model_fields_set & {"predicted", "percent_predicted"}:
            return "pft"
        return default


class Drug(MetaBase):
    name: Optional[str] = None
    generic_name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None


class DischargeMedication(MetaBase):
    name: Optional[str] = None
    dosage: Optional[str] = None
    duration: Optional[str] = None


class FollowUpItem(MetaBase):
    description: Optional[str] = None
    date: Optional[str] = None
    booked: Optional[bool] = None


class Investigation(MetaBase):
    name: Optional[str] = None
    result: Optional[str] = None
    has_link: Optional[bool] = None


class VaccinationEntry(MetaBase):
    vaccine_name: Optional[str] = None
    date: Optional[str] = None
    dose_label: Optional[str] = None
    administered_by: Optional[str] = None
    batch_number: Optional[str] = None
    site: Optional[str] = None


class UpcomingVaccine(MetaBase):
    vaccine_name: Optional[str] = None
    due_date: Optional[str] = None
    dose_label: Optional[str] = None


class StructuredFinding(MetaBase):
    region: Optional[str] = None
    description: Optional[str] = None


class SurgicalTeamMember(MetaBase):
    role: Optional[str] = None
    name: Optional[str] = None
    credentials: Optional[str] = None


class TestPerformed(MetaBase):
    name: Optional[str] = None
    result: Optional[str] = None


class SystemFinding(MetaBase):
    system: Optional[str] = None
    status: Optional[str] = None


class LineItem(MetaBase):
    label: Optional[str] = None
    amount: Optional[float] = None


class Intervals(MetaBase):
    pr: Optional[str] = None
    qrs: Optional[str] = None
    qt: Optional[str] = None


# ---- category variants ----


class LabReportMeta(MetaBase):
    test_name: Optional[str] = None
    test_category: Optional[str] = None
    lab_name: Optional[str] = None
    sample_type: Optional[str] = None
    collected_date: Optional[str] = None
    reported_date: Optional[str] = None
    verified_by: Optional[str] = None
    fasting: Optional[bool] = None
    results: Optional[List[ResultEntry]] = None


class PftReportMeta(LabReportMeta):
    patient_age: Optional[str] = None
    patient_height: Optional[str] = None
    patient_weight: Optional[str] = None
    interpretation: Optional[str] = None


class EcgReportMeta(MetaBase):
    indication: Optional[str] = None
    heart_rate: Optional[Union[int, float, str]] = None
    rhythm: Optional[str] = None
    axis: Optional[str] = None
    intervals: Optional[Intervals] = None
    patient_status: Optional[Dict[str, Any]] = None
    ecg_results: Optional[List[ResultEntry]] = None
    findings: Optional[str] = None
    impression: Optional[str] = None
    cardiologist: Optional[str] = None
    cardiologist_credentials: Optional[str] = None


class ImagingMeta(MetaBase):
    modality: Optional[str] = None
    body_part: Optional[str] = None
    views: Optional[str] = None
    indication: Optional[str] = None
    technique: Optional[str] = None
    contrast: Optional[str] = None
    sequences: Optional[str] = None
    radiologist: Optional[str] = None
    radiologist_credentials: Optional[str] = None
    sonographer: Optional[str] = None
    findings: Optional[str] = None
    structured_findings: Optional[List[StructuredFinding]] = None
    impression: Optional[str] = None


class PathologyMeta(MetaBase):
    specimen_type: Optional[str] = None
    method: Optional[str] = None
    collected_date_pathology: Optional[str] = None
    lmp: Optional[str] = None
    adequacy: Optional[str] = None
    pathologist: Optional[str] = None
    pathologist_credentials: Optional[str] = None
    gross_description: Optional[str] = None
    microscopic_findings: Optional[str] = None
    result_text: Optional[str] = None
    result_interpretation: Optional[str] = None
    diagnosis: Optional[str] = None
    grade: Optional[str] = None
    recommendation: Optional[str] = None


class ConsultationMeta(MetaBase):
    visit_type_label: Optional[str] = None
    opd_number: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    clinic_name: Optional[str] = None
    doctor_specialty: Optional[str] = None
    chief_complaint: Optional[str] = None
    history_of_present_illness: Optional[str] = None
    symptoms: Optional[List[str]] = None
    vitals: Optional[Dict[str, Any]] = None
    examination_findings: Optional[str] = None
    clinical_examination: Optional[str] = None
    diagnosis: Optional[str] = None
    icd_code: Optional[str] = None
    treatment_plan: Optional[str] = None
    treatment_plan_steps: Optional[List[str]] = None
    follow_up_date: Optional[str] = None
    follow_up_recommendation: Optional[str] = None
    linked_records: Optional[List[LinkedRecord]] = None


class DischargeMeta(MetaBase):
    ipd_number: Optional[str] = None
    admission_date: Optional[str] = None
    discharge_date: Optional[str] = None
    length_of_stay: Optional[str] = None
    room_info: Optional[str] = None
    treating_doctor: Optional[str] = None
    primary_diagnosis: Optional[str] = None
    secondary_diagnosis: Optional[str] = None
    diagnosis: Optional[str] = None
    procedure_performed: Optional[str] = None
    procedures: Optional[List[str]] = None
    condition_at_discharge: Optional[str] = None
    hospital_course: Optional[str] = None
    vitals_at_discharge: Optional[Dict[str, Any]] = None
    discharge_medications: Optional[List[DischargeMedication]] = None
    discharge_instructions: Optional[str] = None
    discharge_dos: Optional[List[str]] = None
    discharge_donts: Optional[List[str]] = None
    warning_signs: Optional[List[str]] = None
    follow_up_schedule: Optional[List[FollowUpItem]] = None
    emergency_contact: Optional[str] = None


class ErVisitMeta(MetaBase):
    er_number: Optional[str] = None
    arrival_time: Optional[str] = None
    discharge_time: Optional[str] = None
    mode_of_arrival: Optional[str] = None
    triage_level: Optional[str] = None
    attending_doctor: Optional[str] = None
    chief_complaint: Optional[str] = None
    pain_score: Optional[str] = None
    vitals: Optional[Dict[str, Any]] = None
    examination: Optional[str] = None
    structured_examination: Optional[List[str]] = None
    investigations: Optional[List[Investigation]] = None
    diagnosis: Optional[str] = None
    treatment_given: Optional[str] = None
    treatment_items: Optional[List[str]] = None
    disposition: Optional[str] = None
    disposition_detail: Optional[str] = None
    follow_up: Optional[str] = None


class ProcedureMeta(MetaBase):
    procedure_name: Optional[str] = None
    indication: Optional[str] = None
    anesthesia: Optional[str] = None
    duration: Optional[str] = None
    blood_loss: Optional[str] = None
    technique: Optional[str] = None
    surgical_team: Optional[List[SurgicalTeamMember]] = None
    findings: Optional[str] = None
    complications: Optional[str] = None
    post_op_instructions: Optional[str] = None


class ReferralMeta(MetaBase):
    referred_to_doctor: Optional[str] = None
    referred_to_department: Optional[str] = None
    priority: Optional[str] = None
    reason: Optional[str] = None
    diagnosis: Optional[str] = None


class PrescriptionMeta(MetaBase):
    prescription_diagnosis: Optional[str] = None
    diagnosis: Optional[str] = None
    prescribing_doctor: Optional[str] = None
    prescriber_specialty: Optional[str] = None
    valid_until: Optional[str] = None
    refills_remaining: Optional[str] = None
    refill_due_date: Optional[str] = None
    drugs: Optional[List[Drug]] = None
    general_instructions: Optional[List[str]] = None


class MedicationMeta(MetaBase):
    drug_name: Optional[str] = None
    medication: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    route: Optional[str] = None
    timing: Optional[str] = None
    with_food: Optional[bool] = None
    medication_duration: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    prescribing_doctor: Optional[str] = None
    condition: Optional[str] = None
    reason_stopped: Optional[str] = None
    how_it_works: Optional[str] = None
    side_effects: Optional[List[str]] = None
    side_effects_warning: Optional[str] = None


class VaccinationMeta(MetaBase):
    vaccine_name: Optional[str] = None
    manufacturer: Optional[str] = None
    target_disease: Optional[str] = None
    dose_number: Optional[int] = None
    total_doses: Optional[int] = None
    batch_number: Optional[str] = None
    site: Optional[str] = None
    administered_by: Optional[str] = None
    next_due_date: Optional[str] = None
    certificate_number: Optional[str] = None
    vaccination_history: Optional[List[VaccinationEntry]] = None
    upcoming_vaccinations: Optional[List[UpcomingVaccine]] = None


class CertificateMeta(MetaBase):
    certificate_type: Optional[str] = None
    certificate_sub_type: Optional[str] = None
    certificate_number: Optional[str] = None
    issued_for: Optional[str] = None
    purpose: Optional[str] = None
    valid_from: Optional[str] = None
    valid_until: Optional[str] = None
    issued_by: Optional[str] = None
    registration_no: Optional[str] = None
    examination_date: Optional[str] = None
    leave_diagnosis: Optional[str] = None
    leave_from: Optional[str] = None
    leave_to: Optional[str] = None
    leave_duration: Optional[str] = None
    certificate_content: Optional[str] = None
    examination_findings_list: Optional[List[str]] = None
    system_findings: Optional[List[SystemFinding]] = None
    tests_performed: Optional[List[TestPerformed]] = None
    clearance_for: Optional[str] = None
    clearance_status: Optional[str] = None
    clearance_conditions: Optional[List[str]] = None
    conclusion: Optional[str] = None
    digitally_signed: Optional[bool] = None


class InvoiceMeta(MetaBase):
    invoice_number: Optional[str] = None
    amount: Optional[float] = None
    payment_status: Optional[str] = None
    line_items: Optional[List[LineItem]] = None


class OtherVisitMeta(MetaBase):
    visit_type: Optional[str] = None
    duration: Optional[str] = None
    notes: Optional[str] = None
    follow_up: Optional[str] = None


class DocumentMeta(MetaBase):
    document_type: Optional[str] = None
    original_date: Optional[str] = None
    upload_date: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[str] = None
    user_notes: Optional[str] = None
    tags: Optional[List[str]] = None
