from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from healthdoc.commons.logger import logger
from healthdoc.commons.types import CategoryTag
from healthdoc.renderers import models as m
from healthdoc.renderers.billing import render_invoice
from healthdoc.renderers.blocks import CalloutVariant
from healthdoc.renderers.certificate import render_certificate
from healthdoc.renderers.discharge import render_discharge
from healthdoc.renderers.document import render_document
from healthdoc.renderers.generic import render_generic
from healthdoc.renderers.imaging import render_imaging, render_pathology
from healthdoc.renderers.lab import render_ecg_report, render_lab_report, render_pft_report
from healthdoc.renderers.medication import render_medication, render_prescription
from healthdoc.renderers.vaccination import render_vaccination
from healthdoc.renderers.visits import (
    render_consultation,
    render_er_visit,
    render_other_visit,
    render_procedure,
    render_referral,
)

Renderer = Callable[[BaseModel], str]

# other_report has no specialised layout and falls through to render_generic
REGISTRY: Dict[CategoryTag, Tuple[Type[BaseModel], Renderer]] = {
    CategoryTag.lab_report: (m.LabReportMeta, render_lab_report),
    CategoryTag.pft_report: (m.PftReportMeta, render_pft_report),
    CategoryTag.ecg_report: (m.EcgReportMeta, render_ecg_report),
    CategoryTag.xray_report: (m.ImagingMeta, partial(render_imaging, color=CalloutVariant.blue)),
    CategoryTag.ct_scan: (m.ImagingMeta, partial(render_imaging, color=CalloutVariant.amber)),
    CategoryTag.mri_report: (m.ImagingMeta, partial(render_imaging, color=CalloutVariant.purple)),
    CategoryTag.ultrasound_report: (m.ImagingMeta, partial(render_imaging, color=CalloutVariant.green)),
    CategoryTag.pathology_report: (m.PathologyMeta, render_pathology),
    CategoryTag.consultation_notes: (m.ConsultationMeta, render_consultation),
    CategoryTag.discharge_summary: (m.DischargeMeta, render_discharge),
    CategoryTag.er_visit: (m.ErVisitMeta, render_er_visit),
    CategoryTag.procedure_notes: (m.ProcedureMeta, render_procedure),
    CategoryTag.referral: (m.ReferralMeta, render_referral),
    CategoryTag.prescription: (m.PrescriptionMeta, render_prescription),
    CategoryTag.medication_active: (m.MedicationMeta, partial(render_medication, active=True)),
    CategoryTag.medication_past: (m.MedicationMeta, partial(render_medication, active=False)),
    CategoryTag.vaccination: (m.VaccinationMeta, render_vaccination),
    CategoryTag.medical_certificate: (m.CertificateMeta, render_certificate),
    CategoryTag.invoice: (m.InvoiceMeta, render_invoice),
    CategoryTag.other_visit: (m.OtherVisitMeta, render_other_visit),
    CategoryTag.document: (m.DocumentMeta, render_document),
}


def render_category(tag: Any, metadata: Optional[Mapping[str, Any]]) -> str:
    """Render the category-specific body for a record. Never raises on bad metadata."""
    if not metadata:
        return ""

    category = CategoryTag.parse(tag)
    entry = REGISTRY.get(category) if category else None
    if entry is None:
        if category is None:
            logger.debug(f"Unknown category '{tag}', using generic layout")
        return render_generic(metadata)

    schema, renderer = entry
    try:
        meta = schema.model_validate(metadata)
    except ValidationError as e:
        # fields are validated one by one, so only a bag that is not a mapping ends up here
        logger.warning(f"Metadata for '{category.value}' is not a mapping ({e.error_count()} errors), using generic layout")
        return render_generic(metadata)

    html = renderer(meta)
    if not html:
        logger.debug(f"No specialised content for '{category.value}', using generic layout")
        return render_generic(metadata)
    return html
