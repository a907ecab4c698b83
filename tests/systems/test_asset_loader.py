import asyncio
from typing import List

import pytest

from character_render.components import RawLayer
from character_render.loader import AssetLoader, LoadOutcome, RawBuckets
from character_render.types import ALL_BUCKET_KEYS, CharacterVersion
from tests.test_utils import (
    NORMAL_FRONT_STAND,
    NORMAL_KEYS,
    FakeDecoder,
    ReportRecorder,
    make_payload,
    raw_string,
)


class Applied:
    def __init__(self) -> None:
        self.calls: List[RawBuckets] = []

    def __call__(self, buckets: RawBuckets) -> None:
        self.calls.append(buckets)


@pytest.mark.asyncio
async def test_nothing_pending() -> None:
    loader = AssetLoader("giko", decode_fn=FakeDecoder(), report_fn=ReportRecorder())
    apply = Applied()
    assert await loader.load(apply) is LoadOutcome.NOTHING_PENDING
    assert apply.calls == []


@pytest.mark.asyncio
async def test_load_decodes_mandatory_and_present_optional_buckets() -> None:
    decoder = FakeDecoder()
    loader = AssetLoader("giko", decode_fn=decoder, report_fn=ReportRecorder())
    alt_key = (CharacterVersion.ALT,) + NORMAL_FRONT_STAND[1:]
    loader.submit_payload(make_payload("a", keys=NORMAL_KEYS + (alt_key,)))
    apply = Applied()

    outcome = await loader.load(apply)

    assert outcome is LoadOutcome.APPLIED and outcome.applied
    assert len(decoder.calls) == 9
    (buckets,) = apply.calls
    assert set(buckets) == set(NORMAL_KEYS) | {alt_key}
    assert [layer.image for layer in buckets[alt_key]] == [raw_string("a", alt_key)]
    assert loader.pending is None


@pytest.mark.asyncio
async def test_second_load_without_new_payload_is_noop() -> None:
    loader = AssetLoader("giko", decode_fn=FakeDecoder(), report_fn=ReportRecorder())
    loader.submit_payload(make_payload("a"))
    apply = Applied()
    assert await loader.load(apply) is LoadOutcome.APPLIED
    assert await loader.load(apply) is LoadOutcome.NOTHING_PENDING
    assert len(apply.calls) == 1


@pytest.mark.asyncio
async def test_newer_submission_supersedes_in_flight_decode() -> None:
    gate = asyncio.Event()
    decoder = FakeDecoder(gates={"a:": gate})
    loader = AssetLoader("giko", decode_fn=decoder, report_fn=ReportRecorder())
    apply = Applied()

    loader.submit_payload(make_payload("a"))
    task_a = asyncio.create_task(loader.load(apply))
    await asyncio.sleep(0)

    loader.submit_payload(make_payload("b"))
    gate.set()
    assert await task_a is LoadOutcome.SUPERSEDED
    assert apply.calls == []

    assert await loader.load(apply) is LoadOutcome.APPLIED
    (buckets,) = apply.calls
    assert buckets[NORMAL_FRONT_STAND][0].image == raw_string("b", NORMAL_FRONT_STAND)


@pytest.mark.asyncio
async def test_stale_decode_finishing_last_does_not_overwrite() -> None:
    gate = asyncio.Event()
    loader = AssetLoader(
        "giko", decode_fn=FakeDecoder(gates={"a:": gate}), report_fn=ReportRecorder()
    )
    apply = Applied()

    loader.submit_payload(make_payload("a"))
    task_a = asyncio.create_task(loader.load(apply))
    await asyncio.sleep(0)
    loader.submit_payload(make_payload("b"))
    assert await loader.load(apply) is LoadOutcome.APPLIED

    gate.set()
    assert await task_a is LoadOutcome.SUPERSEDED
    assert len(apply.calls) == 1
    assert apply.calls[0][NORMAL_FRONT_STAND][0].image.startswith("b:")


@pytest.mark.asyncio
async def test_falsy_elements_are_filtered_and_reported_once() -> None:
    raw = raw_string("a", NORMAL_FRONT_STAND)
    layers = [RawLayer(image="x"), None, RawLayer(image="y"), RawLayer(image="z")]
    reports = ReportRecorder()
    loader = AssetLoader(
        "giko", decode_fn=FakeDecoder(layers={raw: layers}), report_fn=reports
    )
    loader.submit_payload(make_payload("a"))
    apply = Applied()
    await loader.load(apply)

    bucket = apply.calls[0][NORMAL_FRONT_STAND]
    assert len(bucket) < len(layers)
    assert [layer.image for layer in bucket] == ["x", "y", "z"]
    assert len(reports.messages) == 1
    assert "giko" in reports.messages[0]
    assert '"pose": "stand"' in reports.messages[0]


@pytest.mark.asyncio
async def test_decode_error_drops_only_that_bucket() -> None:
    raw = raw_string("a", NORMAL_FRONT_STAND)
    reports = ReportRecorder()
    loader = AssetLoader(
        "giko", decode_fn=FakeDecoder(errors=[raw]), report_fn=reports
    )
    loader.submit_payload(make_payload("a"))
    apply = Applied()
    assert await loader.load(apply) is LoadOutcome.APPLIED
    buckets = apply.calls[0]
    assert NORMAL_FRONT_STAND not in buckets
    assert len(buckets) == 7
    assert len(reports.messages) == 1
    assert "failed to decode" in reports.messages[0]


@pytest.mark.asyncio
async def test_buckets_decode_concurrently() -> None:
    gate = asyncio.Event()
    decoder = FakeDecoder(gates={"a:": gate})
    loader = AssetLoader("giko", decode_fn=decoder, report_fn=ReportRecorder())
    loader.submit_payload(make_payload("a", keys=ALL_BUCKET_KEYS))
    task = asyncio.create_task(loader.load(Applied()))
    for _ in range(3):
        await asyncio.sleep(0)
    # every bucket decode has started while the first is still blocked
    assert len(decoder.calls) == 16
    gate.set()
    assert await task is LoadOutcome.APPLIED
