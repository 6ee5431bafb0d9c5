import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
import yaml

from healthdoc.commons.document_engine import DocumentEngine
from healthdoc.commons.logger import setup_logging
from healthdoc.services.export_service import ExportService
from healthdoc.validation.validators import load_records

app = typer.Typer(add_completion=False, help="Health record document renderer")

DEFAULT_CONFIG = "healthdoc/configs/settings.yaml"


def resource_path(relative_path: str) -> str:
    """Absolute path to a bundled resource, frozen (PyInstaller) or from source."""
    if hasattr(sys, "_MEIPASS"):
        base_path = sys._MEIPASS
    else:
        base_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base_path, relative_path)


def load_cfg(path: Optional[str] = None) -> dict:
    config_path = path or os.getenv("HEALTHDOC_CONFIG") or resource_path(DEFAULT_CONFIG)
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _bootstrap(config: Optional[str]):
    cfg = load_cfg(config)
    logs_root = cfg.get("paths", {}).get("logs_root", "./logs")
    retention = cfg.get("app", {}).get("log_retention", "14 days")
    logger = setup_logging(logs_root, os.getenv("LOG_LEVEL", "INFO"), retention=retention)
    return DocumentEngine(cfg), logger


def _emit(html: str, out: Optional[Path]):
    if out is None:
        typer.echo(html)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(html, encoding="utf-8")


@app.command()
def render(
    record: Path = typer.Argument(..., exists=True, help="record JSON file"),
    summary: bool = typer.Option(False, "--summary", help="include the cached AI summary"),
    out: Optional[Path] = typer.Option(None, "--out", help="write the document here instead of stdout"),
    config: Optional[str] = typer.Option(None, "--config", help="settings.yaml path"),
):
    """Render a single record as a printable HTML document."""
    engine, logger = _bootstrap(config)
    records = load_records([record])
    if not records:
        logger.error(f"No record found in {record}")
        raise typer.Exit(code=1)
    rec = records[0]
    text = (rec.metadata or {}).get("ai_summary") if summary else None
    _emit(engine.build_record_document(rec, summary=text), out)
    if out:
        logger.info(f"Record {rec.id} written to {out}")


@app.command()
def bulk(
    files: List[Path] = typer.Argument(..., exists=True, help="record JSON files"),
    title: str = typer.Option("Health Records", "--title"),
    out: Optional[Path] = typer.Option(None, "--out"),
    config: Optional[str] = typer.Option(None, "--config"),
):
    """Render a summary table of several records."""
    engine, logger = _bootstrap(config)
    records = load_records(files)
    _emit(engine.build_bulk_document(records, title=title), out)
    if out:
        logger.info(f"{len(records)} record(s) written to {out}")


@app.command()
def watch(config: Optional[str] = typer.Option(None, "--config")):
    """Process the inbox backlog, then keep rendering new record files as they arrive."""
    engine, logger = _bootstrap(config)
    logger.info("Starting inbox export")
    svc = ExportService(engine, engine.settings.paths)
    asyncio.run(svc.run_file_mode())


if __name__ == "__main__":
    app()
