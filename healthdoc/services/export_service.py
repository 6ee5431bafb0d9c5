import asyncio
import shutil
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from healthdoc.commons.document_engine import DocumentEngine
from healthdoc.commons.logger import logger
from healthdoc.helpers.file_transport import FileSender, FileWatcher
from healthdoc.validation.validators import validate_record_or_raise


class ExportService:
    """Renders record JSON files dropped in the inbox into printable documents in the outbox."""

    def __init__(self, engine: DocumentEngine, paths: Dict[str, str], sender: Optional[FileSender] = None):
        self.engine = engine
        self.paths = paths
        export_cfg = engine.settings.export
        self.sender = sender or FileSender(paths["outbox"], export_cfg.filename_pattern)
        Path(paths["archive"]).mkdir(parents=True, exist_ok=True)
        Path(paths["error"]).mkdir(parents=True, exist_ok=True)

    def _to_error(self, text: str, src: str) -> Path:
        err_name = Path(src).name if src else "record.err.json"
        errp = Path(self.paths["error"]) / err_name
        errp.write_text(text, encoding="utf-8")
        if src and Path(src).exists():
            Path(src).unlink()
        return errp

    async def _process_text(self, text: str, src: str):
        try:
            record = validate_record_or_raise(text)
            summary = (record.metadata or {}).get("ai_summary")
            html = self.engine.build_record_document(record, summary=summary)
            out = self.sender.send(html, record_id=record.id)
            logger.bind(record=record.id).info(f"Document written to {out}")

            if src and Path(src).exists():
                dst_dir = Path(self.paths["archive"]) / "json"
                dst_dir.mkdir(parents=True, exist_ok=True)
                shutil.move(src, dst_dir / Path(src).name)

        except ValidationError as ve:
            errp = self._to_error(text, src)
            logger.error(f"Validation failed for {errp.name}: {ve}")
        except Exception as ex:
            errp = self._to_error(text, src)
            logger.exception(f"Error rendering record: {ex}. Moved to {errp}")

    async def _process_backlog(self, glob_pat: str):
        inbox = Path(self.paths["inbox"])
        files = sorted(inbox.glob(glob_pat))
        if not files:
            return
        logger.info(f"Backlog found: {len(files)} file(s) in {inbox}")
        for f in files:
            try:
                text = await self._read_with_retry(f)
                await self._process_text(text, str(f))
            except Exception as ex:
                # one bad file must not stop the rest of the backlog
                logger.exception(f"Unexpected failure with {f}: {ex}")

    async def _read_with_retry(self, f: Path) -> str:
        try:
            return f.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {f}: {e}; retrying shortly...")
            await asyncio.sleep(0.1)
            return f.read_text(encoding="utf-8")

    async def run_file_mode(self, glob_pat: Optional[str] = None):
        glob_pat = glob_pat or self.engine.settings.export.filename_glob
        loop = asyncio.get_running_loop()

        await self._process_backlog(glob_pat)

        watcher = FileWatcher(self.paths["inbox"], glob_pat, self._process_text, loop)
        watcher.start()
        logger.info(f"Watching {self.paths['inbox']} for records...")
        try:
            await asyncio.Event().wait()
        finally:
            watcher.stop()
