import asyncio

import pytest

from healthdoc.commons.types import HealthRecord, SummaryResult
from healthdoc.services.summary_service import SummaryService, SummaryStatus


class FakeFetcher:
    def __init__(self, fail_times: int = 0, delay: float = 0.0):
        self.calls = []
        self.fail_times = fail_times
        self.delay = delay

    async def fetch_summary(self, record_id, regenerate):
        self.calls.append((record_id, regenerate))
        if self.delay:
            await asyncio.sleep(self.delay)
        if len(self.calls) <= self.fail_times:
            raise RuntimeError("summary backend unavailable")
        return SummaryResult(summary=f"summary #{len(self.calls)}", generated_at="2026-03-05T10:00:00Z")


@pytest.mark.asyncio
async def test_idle_to_ready():
    svc = SummaryService(FakeFetcher())
    assert svc.state(1).status is SummaryStatus.idle
    st = await svc.get(1)
    assert st.status is SummaryStatus.ready
    assert st.summary == "summary #1"


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_fetch():
    fetcher = FakeFetcher(delay=0.01)
    svc = SummaryService(fetcher)
    first, second = await asyncio.gather(svc.get(5), svc.get(5))
    assert len(fetcher.calls) == 1
    assert first.summary == second.summary


@pytest.mark.asyncio
async def test_failure_is_stored_and_not_retried():
    fetcher = FakeFetcher(fail_times=1)
    svc = SummaryService(fetcher)
    st = await svc.get(3)
    assert st.status is SummaryStatus.error
    assert "unavailable" in st.error

    again = await svc.get(3)
    assert again.status is SummaryStatus.error
    assert len(fetcher.calls) == 1

    retried = await svc.retry(3)
    assert retried.status is SummaryStatus.ready
    assert len(fetcher.calls) == 2


@pytest.mark.asyncio
async def test_regenerate_forces_new_fetch():
    fetcher = FakeFetcher()
    svc = SummaryService(fetcher)
    await svc.get(9)
    st = await svc.get(9, regenerate=True)
    assert st.summary == "summary #2"
    assert fetcher.calls == [(9, False), (9, True)]


@pytest.mark.asyncio
async def test_cached_summary_seeds_ready_state():
    fetcher = FakeFetcher()
    svc = SummaryService(fetcher)
    rec = HealthRecord(id=4, category="lab_report", title="CBC", metadata={"ai_summary": "Cached text"})
    assert svc.seed(rec).status is SummaryStatus.ready
    st = await svc.get(4)
    assert st.summary == "Cached text"
    assert fetcher.calls == []
