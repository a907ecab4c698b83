"""Asynchronous asset loader with last-submission-wins semantics.

A payload is first *submitted* (cheap, synchronous) and later *loaded*:
every bucket string is decoded concurrently and the complete bucket set is
handed to an ``apply`` callback in one synchronous step, so a draw request
never observes a half-updated set.

Each submission bumps a generation counter. ``load`` captures the generation
before decoding and compares it afterwards; if a newer payload arrived in the
meantime the decoded buckets are dropped and the outcome is ``superseded``.
In-flight decodes are never cancelled, their results are simply discarded.
"""

import asyncio
import logging
from enum import StrEnum, auto
from typing import Callable, List, Optional, Tuple

from pyrsistent import PMap, PVector, pmap, pvector

from character_render.components import CharacterPayload, RawLayer
from character_render.decoder import decode_image_string
from character_render.diagnostics import (
    format_anomaly,
    format_decode_failure,
    log_report,
)
from character_render.types import BucketKey, DecodeFn, ReportFn

logger = logging.getLogger(__name__)

RawBuckets = PMap[BucketKey, PVector[RawLayer]]
ApplyFn = Callable[[RawBuckets], None]


class LoadOutcome(StrEnum):
    """Result of :meth:`AssetLoader.load`."""

    APPLIED = auto()
    SUPERSEDED = auto()
    NOTHING_PENDING = auto()

    @property
    def applied(self) -> bool:
        return self is LoadOutcome.APPLIED


class AssetLoader:
    """Decodes submitted payloads into raw buckets for one character."""

    def __init__(
        self,
        character: str,
        decode_fn: Optional[DecodeFn] = None,
        report_fn: Optional[ReportFn] = None,
    ):
        self.character = character
        self._decode_fn: DecodeFn = decode_fn or decode_image_string
        self._report_fn: ReportFn = report_fn or log_report
        self._pending: Optional[CharacterPayload] = None
        self._generation = 0

    @property
    def pending(self) -> Optional[CharacterPayload]:
        return self._pending

    @property
    def generation(self) -> int:
        return self._generation

    def submit_payload(self, payload: CharacterPayload) -> None:
        """Replace the pending payload; any in-flight decode becomes stale."""
        self._pending = payload
        self._generation += 1

    async def load(self, apply: ApplyFn) -> LoadOutcome:
        """Decode the pending payload and apply it unless superseded."""
        payload = self._pending
        if payload is None:
            return LoadOutcome.NOTHING_PENDING
        generation = self._generation
        self._pending = None

        buckets = await self.decode(payload)

        if generation != self._generation:
            logger.debug(
                "Discarding superseded decode",
                extra={"character": self.character, "generation": generation},
            )
            return LoadOutcome.SUPERSEDED

        apply(buckets)
        logger.debug(
            "Applied %d buckets",
            len(buckets),
            extra={"character": self.character, "generation": generation},
        )
        return LoadOutcome.APPLIED

    async def decode(self, payload: CharacterPayload) -> RawBuckets:
        """Decode every bucket of ``payload`` concurrently.

        Buckets whose decode raised are left out; falsy elements are filtered
        out of the others. Both are reported through the diagnostics
        collaborator.
        """
        results = await asyncio.gather(
            *(
                self._decode_bucket(key, raw, payload.is_base64)
                for key, raw in payload.images.items()
            )
        )
        return pmap({key: layers for key, layers in results if layers is not None})

    async def _decode_bucket(
        self, key: BucketKey, raw: str, is_base64: bool
    ) -> Tuple[BucketKey, Optional[PVector[RawLayer]]]:
        version, side, pose = key
        context = {
            "version": str(version),
            "side": str(side),
            "pose": str(pose),
            "is_base64": is_base64,
        }
        try:
            decoded: List[Optional[RawLayer]] = list(
                await self._decode_fn(raw, is_base64)
            )
        except Exception:
            logger.exception(
                "Failed to decode bucket",
                extra={"character": self.character, "bucket": ",".join(map(str, key))},
            )
            self._report_fn(format_decode_failure(self.character, context))
            return key, None

        layers = [layer for layer in decoded if layer]
        if len(layers) != len(decoded):
            self._report_fn(format_anomaly(self.character, context))
        return key, pvector(layers)
