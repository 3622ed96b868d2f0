import asyncio

import httpx
import pytest

from mirrorrank import pipeline
from mirrorrank.errors import PreconditionViolation
from mirrorrank.pipeline import rank_mirrors, run_pipeline, score_candidates


def run(coro):
    return asyncio.run(coro)


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _fail_if_called(request):
    raise AssertionError(f"unexpected network call to {request.url}")


def test_fast_mode_orders_by_inverse_score(candidate_factory):
    catalog = [
        candidate_factory(url="b", score=50.0),
        candidate_factory(url="a", score=1.0),
    ]

    async def go():
        async with _client(_fail_if_called) as client:
            entries = await score_candidates(catalog, fast_mode=True, client=client)
            lines = await run_pipeline(catalog, fast_mode=True, client=client)
        return entries, lines

    entries, lines = run(go())
    assert {e.base_url: e.rank for e in entries} == {"b": pytest.approx(0.02), "a": 1.0}
    assert lines == ["Server = a$repo/os/$arch", "Server = b$repo/os/$arch"]


def test_fast_mode_applies_no_threshold(candidate_factory):
    catalog = [candidate_factory(url=f"https://{i}/", score=s) for i, s in enumerate([10.0, 100.0, 2.0])]
    lines = rank_mirrors(catalog, fast_mode=True, min_rank=0.99)
    assert lines == [
        "Server = https://2/$repo/os/$arch",
        "Server = https://0/$repo/os/$arch",
        "Server = https://1/$repo/os/$arch",
    ]


def test_fast_mode_skips_zero_score(candidate_factory):
    catalog = [candidate_factory(url="zero", score=0.0), candidate_factory(url="one", score=1.0)]
    lines = rank_mirrors(catalog, fast_mode=True)
    assert lines == ["Server = one$repo/os/$arch"]


def test_failed_probe_is_excluded(candidate_factory):
    catalog = [
        candidate_factory(url="https://x.example/", score=1.0),
        candidate_factory(url="https://y.example/", score=1.0),
    ]

    async def handler(request):
        if request.url.host == "y.example":
            raise httpx.ConnectTimeout("timed out", request=request)
        await asyncio.sleep(0.1)
        return httpx.Response(200)

    async def go():
        async with _client(handler) as client:
            return await run_pipeline(catalog, client=client)

    assert run(go()) == ["Server = https://x.example/$repo/os/$arch"]


def test_normal_mode_ranks_probed_mirrors_and_applies_cutoff(monkeypatch, candidate_factory):
    catalog = [
        candidate_factory(url="https://slow/", score=1.0),
        candidate_factory(url="https://fast/", score=1.0),
        candidate_factory(url="https://bad-score/", score=30.0),
        candidate_factory(url="http://ineligible/", protocol="http"),
    ]
    latencies = {"https://slow/": 4000.0, "https://fast/": 50.0, "https://bad-score/": 10.0}

    async def fake_probe_all(candidates, timeout, client=None):
        from mirrorrank.pipeline_types import ProbeOutcome

        assert [c.base_url for c in candidates] == list(latencies)
        return [ProbeOutcome(candidate=c, succeeded=True, elapsed_ms=latencies[c.base_url]) for c in candidates]

    monkeypatch.setattr(pipeline, "probe_all", fake_probe_all)
    lines = rank_mirrors(catalog)

    # bad-score: 0.5*~1 + 0.5*exp(-9) ~ 0.50006 is above 0.5; raise the cutoff to drop it
    assert lines == [
        "Server = https://fast/$repo/os/$arch",
        "Server = https://slow/$repo/os/$arch",
        "Server = https://bad-score/$repo/os/$arch",
    ]
    assert rank_mirrors(catalog, min_rank=0.6) == [
        "Server = https://fast/$repo/os/$arch",
        "Server = https://slow/$repo/os/$arch",
    ]


def test_empty_catalog_gives_empty_list():
    assert rank_mirrors([]) == []
    assert rank_mirrors([], fast_mode=True) == []


def test_scoring_contract_failure_propagates(monkeypatch, candidate_factory):
    from mirrorrank.pipeline_types import ProbeOutcome

    async def fake_probe_all(candidates, timeout, client=None):
        return [ProbeOutcome(candidate=c, succeeded=True, elapsed_ms=-5.0) for c in candidates]

    monkeypatch.setattr(pipeline, "probe_all", fake_probe_all)
    with pytest.raises(PreconditionViolation):
        rank_mirrors([candidate_factory()])
