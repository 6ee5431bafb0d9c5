from datetime import date
from typing import Any, Optional, Sequence

import yaml

from healthdoc.commons import assembler
from healthdoc.commons.formatting import title_case
from healthdoc.commons.types import HealthRecord, Settings


class DocumentEngine:
    """Engine facade that loads settings and exposes the render/document methods."""

    def __init__(self, config_path_or_obj: Any):
        # path, already-loaded dict or Settings
        if isinstance(config_path_or_obj, Settings):
            self.settings = config_path_or_obj
        else:
            if isinstance(config_path_or_obj, str):
                with open(config_path_or_obj, "r", encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
            elif isinstance(config_path_or_obj, dict):
                raw = config_path_or_obj
            else:
                raw = {}
            self.settings = Settings.model_validate(raw)

        self.labels = dict(self.settings.categories.labels)
        self.app_name = self.settings.app.get("name", "healthdoc")
        self.footer = self.settings.app.get("footer", self.app_name)

    def category_label(self, tag: str) -> str:
        return self.labels.get(tag) or title_case(tag)

    def render_record(self, record: HealthRecord, summary: Optional[str] = None) -> str:
        return assembler.render_record(record, summary)

    def render_bulk(self, records: Sequence[HealthRecord]) -> str:
        return assembler.render_bulk(records, self.labels)

    def build_record_document(
        self, record: HealthRecord, summary: Optional[str] = None, generated_on: Optional[date] = None
    ) -> str:
        meta = [self.category_label(record.category), assembler.record_date_label(record), record.attribution]
        subtitle = " · ".join(p for p in meta if p)
        return assembler.wrap_document(
            record.title,
            self.render_record(record, summary),
            subtitle=subtitle,
            footer=self.footer,
            generated_on=generated_on,
        )

    def build_bulk_document(
        self, records: Sequence[HealthRecord], title: str = "Health Records", generated_on: Optional[date] = None
    ) -> str:
        return assembler.wrap_document(
            title,
            self.render_bulk(records),
            footer=self.footer,
            generated_on=generated_on,
        )
