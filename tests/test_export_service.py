import asyncio
import json

import pytest
from pydantic import ValidationError

from healthdoc.commons.document_engine import DocumentEngine
from healthdoc.helpers.file_transport import FileSender, FileWatcher
from healthdoc.services.export_service import ExportService
from healthdoc.validation.validators import load_records, validate_bulk_or_raise, validate_record_or_raise

RECORD = {
    "id": 42,
    "category": "discharge_summary",
    "title": "Appendectomy discharge",
    "record_date": "2026-01-14",
    "doctor_name": "Dr. Iyer",
    "metadata": {"ipd_number": "IPD-9", "discharge_dos": ["Rest"], "ai_summary": "Recovered well."},
}


def cfg_paths(tmp_path):
    paths = {name: str(tmp_path / name) for name in ("inbox", "outbox", "archive", "error")}
    (tmp_path / "inbox").mkdir()
    return paths


def test_validate_record_requires_category_and_title():
    with pytest.raises(ValidationError):
        validate_record_or_raise({"id": 1, "title": "x"})
    with pytest.raises(ValidationError):
        validate_record_or_raise({"id": 1, "category": "lab_report", "title": "  "})
    with pytest.raises(ValidationError):
        validate_record_or_raise("{not json")


def test_validate_record_from_json_text():
    rec = validate_record_or_raise(json.dumps(RECORD))
    assert rec.id == 42
    assert rec.metadata["ipd_number"] == "IPD-9"


def test_non_mapping_metadata_is_dropped():
    rec = validate_record_or_raise({"id": 1, "category": "invoice", "title": "Bill", "metadata": ["x"]})
    assert rec.metadata is None


def test_bulk_request_accepts_list_or_object():
    assert len(validate_bulk_or_raise([RECORD, RECORD]).records) == 2
    req = validate_bulk_or_raise({"title": "Mine", "records": [RECORD]})
    assert req.title == "Mine"


def test_load_records_reads_single_and_list_files(tmp_path):
    one = tmp_path / "one.json"
    many = tmp_path / "many.json"
    one.write_text(json.dumps(RECORD), encoding="utf-8")
    many.write_text(json.dumps([RECORD, RECORD]), encoding="utf-8")
    assert len(load_records([one, many])) == 3


def test_file_sender_uses_record_id(tmp_path):
    sender = FileSender(str(tmp_path / "out"), "{record_id}_{timestamp}.html")
    path = sender.send("<p>x</p>", record_id="a/b")
    assert (tmp_path / "out").exists()
    assert path.endswith(".html")
    assert "a_b_" in path


@pytest.mark.asyncio
async def test_backlog_renders_and_archives(tmp_path):
    paths = cfg_paths(tmp_path)
    src = tmp_path / "inbox" / "rec42.json"
    src.write_text(json.dumps(RECORD), encoding="utf-8")

    svc = ExportService(DocumentEngine("./healthdoc/configs/settings.yaml"), paths)
    await svc._process_backlog("*.json")

    outputs = list((tmp_path / "outbox").glob("42_*.html"))
    assert len(outputs) == 1
    html = outputs[0].read_text(encoding="utf-8")
    assert "Appendectomy discharge" in html
    assert "Recovered well." in html
    assert "list-check" in html
    assert not src.exists()
    assert (tmp_path / "archive" / "json" / "rec42.json").exists()


@pytest.mark.asyncio
async def test_invalid_record_goes_to_error(tmp_path):
    paths = cfg_paths(tmp_path)
    bad = tmp_path / "inbox" / "bad.json"
    bad.write_text(json.dumps({"id": 7}), encoding="utf-8")

    svc = ExportService(DocumentEngine({}), paths)
    await svc._process_backlog("*.json")

    assert (tmp_path / "error" / "bad.json").exists()
    assert not bad.exists()
    assert list((tmp_path / "outbox").glob("*.html")) == []


@pytest.mark.asyncio
async def test_unreadable_backlog_file_does_not_stop_the_rest(tmp_path):
    paths = cfg_paths(tmp_path)
    # a directory matching the glob cannot be read as text
    (tmp_path / "inbox" / "a_broken.json").mkdir()
    good = tmp_path / "inbox" / "b_good.json"
    good.write_text(json.dumps(RECORD), encoding="utf-8")

    svc = ExportService(DocumentEngine({}), paths)
    await svc._process_backlog("*.json")

    assert len(list((tmp_path / "outbox").glob("42_*.html"))) == 1
    assert (tmp_path / "archive" / "json" / "b_good.json").exists()


@pytest.mark.asyncio
async def test_watcher_submits_matching_file_once(tmp_path):
    received = []

    async def on_message(text, src):
        received.append(src)

    loop = asyncio.get_running_loop()
    watcher = FileWatcher(str(tmp_path / "inbox"), "*.json", on_message, loop)
    rec = tmp_path / "inbox" / "rec.json"
    rec.write_text(json.dumps(RECORD), encoding="utf-8")
    other = tmp_path / "inbox" / "notes.txt"
    other.write_text("ignored", encoding="utf-8")

    assert watcher.submit(rec) is True
    # the created/modified pair of one write is submitted once
    assert watcher.submit(rec) is False
    assert watcher.submit(other) is False
    assert watcher.submit(tmp_path / "inbox" / "gone.json") is False

    for _ in range(5):
        await asyncio.sleep(0)
    assert received == [str(rec)]
