import asyncio
import fnmatch
import re
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple

from watchdog.events import PatternMatchingEventHandler
from watchdog.observers import Observer


class FileSender:
    """Writes rendered documents to the outbox under a templated filename."""

    def __init__(self, outbox: str, pattern: str):
        self.outbox = Path(outbox)
        self.outbox.mkdir(parents=True, exist_ok=True)
        self.pattern = pattern

    def send(self, html_text: str, record_id="record") -> str:
        safe_id = re.sub(r"[^a-zA-Z0-9_\-]", "_", str(record_id))
        fname = self.pattern.format(
            record_id=safe_id, timestamp=datetime.now().strftime("%Y%m%d%H%M%S")
        )
        p = self.outbox / fname
        p.write_text(html_text, encoding="utf-8")
        return str(p)


class FileWatcher:
    """Feeds record files that appear in the inbox to an async callback on `loop`.

    Only names matching `glob` are submitted, and a file is submitted once per
    (mtime, size) so the created/modified burst of a single write counts once.
    """

    def __init__(self, inbox: str, glob: str, on_message_async, loop: asyncio.AbstractEventLoop):
        self.inbox = Path(inbox)
        self.inbox.mkdir(parents=True, exist_ok=True)
        self.glob = glob
        self.loop = loop
        self.on_message_async = on_message_async
        self._seen: Dict[str, Tuple[int, int]] = {}
        self._lock = threading.Lock()

        self.handler = PatternMatchingEventHandler(patterns=[glob], ignore_directories=True)
        self.handler.on_created = lambda e: self.submit(Path(e.src_path))
        self.handler.on_modified = lambda e: self.submit(Path(e.src_path))
        self.handler.on_moved = lambda e: self.submit(Path(e.dest_path))

        self.observer = Observer()

    def _read(self, path: Path) -> Optional[str]:
        # the producer may still be writing
        for _ in range(10):
            try:
                return path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return None
            except OSError:
                time.sleep(0.05)
        return path.read_text(encoding="utf-8")

    def submit(self, path: Path) -> bool:
        """Schedule `path` for processing; False when it is skipped."""
        if not fnmatch.fnmatch(path.name, self.glob) or not path.is_file():
            return False
        try:
            st = path.stat()
        except FileNotFoundError:
            return False
        stamp = (st.st_mtime_ns, st.st_size)
        with self._lock:
            if self._seen.get(str(path)) == stamp:
                return False
            self._seen[str(path)] = stamp

        text = self._read(path)
        if text is None:
            return False
        asyncio.run_coroutine_threadsafe(self.on_message_async(text, str(path)), self.loop)
        return True

    def start(self):
        self.observer.schedule(self.handler, str(self.inbox), recursive=False)
        self.observer.start()

    def stop(self):
        self.observer.stop()
        self.observer.join()
