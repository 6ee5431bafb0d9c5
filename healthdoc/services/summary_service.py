"""
Per-record AI summary state.

The summary text comes from an external fetcher; this service only tracks
idle -> loading -> ready | error for each record, coalesces concurrent
requests into one fetch, and never retries on its own.
"""

import asyncio
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union

from pydantic import BaseModel

from healthdoc.commons.logger import logger
from healthdoc.commons.types import HealthRecord, SummaryResult

RecordId = Union[int, str]


class SummaryFetcher(Protocol):
    async def fetch_summary(self, record_id: RecordId, regenerate: bool) -> SummaryResult: ...


class SummaryStatus(str, Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    error = "error"


class SummaryState(BaseModel):
    status: SummaryStatus = SummaryStatus.idle
    summary: Optional[str] = None
    generated_at: Optional[str] = None
    error: Optional[str] = None


class SummaryService:
    def __init__(self, fetcher: SummaryFetcher):
        self.fetcher = fetcher
        self._states: Dict[RecordId, SummaryState] = {}
        self._inflight: Dict[RecordId, asyncio.Task] = {}

    def state(self, record_id: RecordId) -> SummaryState:
        return self._states.get(record_id, SummaryState())

    def seed(self, record: HealthRecord) -> SummaryState:
        """Use a summary already cached in the record's metadata, if any."""
        meta: Dict[str, Any] = record.metadata or {}
        cached = meta.get("ai_summary")
        if cached and self.state(record.id).status is SummaryStatus.idle:
            self._states[record.id] = SummaryState(
                status=SummaryStatus.ready,
                summary=str(cached),
                generated_at=meta.get("ai_summary_generated_at"),
            )
        return self.state(record.id)

    async def _run(self, record_id: RecordId, regenerate: bool) -> SummaryState:
        try:
            result = await self.fetcher.fetch_summary(record_id, regenerate)
        except asyncio.CancelledError:
            self._states[record_id] = SummaryState()
            raise
        except Exception as ex:
            logger.warning(f"Summary fetch failed for record {record_id}: {ex}")
            st = SummaryState(status=SummaryStatus.error, error=str(ex) or type(ex).__name__)
        else:
            st = SummaryState(
                status=SummaryStatus.ready, summary=result.summary, generated_at=result.generated_at
            )
        finally:
            self._inflight.pop(record_id, None)
        self._states[record_id] = st
        return st

    async def get(self, record_id: RecordId, regenerate: bool = False) -> SummaryState:
        """Current summary for the record, fetching it when idle (or when regenerating)."""
        task = self._inflight.get(record_id)
        if task is not None:
            return await asyncio.shield(task)

        st = self.state(record_id)
        if not regenerate and st.status in (SummaryStatus.ready, SummaryStatus.error):
            return st

        self._states[record_id] = SummaryState(
            status=SummaryStatus.loading, summary=st.summary, generated_at=st.generated_at
        )
        task = asyncio.ensure_future(self._run(record_id, regenerate))
        self._inflight[record_id] = task
        return await asyncio.shield(task)

    async def retry(self, record_id: RecordId) -> SummaryState:
        """Manual retry after an error; same as get() in any other state."""
        if self.state(record_id).status is not SummaryStatus.error:
            return await self.get(record_id)
        self._states[record_id] = SummaryState()
        return await self.get(record_id)
