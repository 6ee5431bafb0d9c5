from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CategoryTag(str, Enum):
    lab_report = "lab_report"
    prescription = "prescription"
    xray_report = "xray_report"
    ct_scan = "ct_scan"
    mri_report = "mri_report"
    ultrasound_report = "ultrasound_report"
    ecg_report = "ecg_report"
    pathology_report = "pathology_report"
    pft_report = "pft_report"
    consultation_notes = "consultation_notes"
    discharge_summary = "discharge_summary"
    er_visit = "er_visit"
    procedure_notes = "procedure_notes"
    referral = "referral"
    medication_active = "medication_active"
    medication_past = "medication_past"
    vaccination = "vaccination"
    medical_certificate = "medical_certificate"
    invoice = "invoice"
    other_report = "other_report"
    other_visit = "other_visit"
    document = "document"

    @classmethod
    def parse(cls, tag: Any) -> Optional["CategoryTag"]:
        """Return the member for `tag`, or None when the tag is not in the taxonomy."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            return None


class RecordStatus(BaseModel):
    label: str
    variant: Optional[str] = None


class LinkedRecord(BaseModel):
    """Weak reference to another record; the calling layer resolves `action`."""

    icon_type: Optional[str] = None
    title: Optional[str] = None
    link_text: Optional[str] = None
    action: Optional[str] = None


class HealthRecord(BaseModel):
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: Union[int, str]
    category: str
    title: str
    description: Optional[str] = None
    record_date: Optional[str] = None
    record_date_formatted: Optional[str] = None
    doctor_name: Optional[str] = None
    department_name: Optional[str] = None
    status: Optional[Union[RecordStatus, str]] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def attribution(self) -> Optional[str]:
        return self.doctor_name or self.department_name

    @property
    def status_label(self) -> Optional[str]:
        if isinstance(self.status, RecordStatus):
            return self.status.label
        return self.status


class SummaryResult(BaseModel):
    summary: str
    generated_at: Optional[str] = None


# ---- settings.yaml ----


class ExportCfg(BaseModel):
    filename_glob: str = "*.json"
    filename_pattern: str = "{record_id}_{timestamp}.html"


class CategoriesCfg(BaseModel):
    labels: Dict[str, str] = Field(default_factory=dict)


class Settings(BaseModel):
    app: Dict[str, Any] = Field(default_factory=dict)
    paths: Dict[str, str] = Field(default_factory=dict)
    export: ExportCfg = Field(default_factory=ExportCfg)
    categories: CategoriesCfg = Field(default_factory=CategoriesCfg)


class BulkRequest(BaseModel):
    records: List[HealthRecord]
    title: str = "Health Records"
