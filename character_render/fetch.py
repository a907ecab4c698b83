"""Routing of fetched character payloads.

The HTTP request itself is made by the host. This module knows the endpoint
shape (``/api/characters/<quality>?v=<client version>``), hands each
character its wire record and drives the concurrent loads.
"""

import asyncio
import logging
from typing import Any, List, Mapping
from urllib.parse import urlencode

from character_render.character import Character
from character_render.components import CharacterPayload
from character_render.diagnostics import log_report
from character_render.types import RenderQuality, ReportFn

logger = logging.getLogger(__name__)

CHARACTERS_PATH = "/api/characters/"


def quality_for(crisp_mode: bool) -> RenderQuality:
    return RenderQuality.CRISP if crisp_mode else RenderQuality.REGULAR


def characters_endpoint(quality: RenderQuality, client_version: str) -> str:
    """Return the relative URL serving every character's payload."""
    return (
        CHARACTERS_PATH
        + str(RenderQuality(quality))
        + "?"
        + urlencode({"v": client_version})
    )


def route_payloads(
    characters: Mapping[str, Character],
    wire: Mapping[str, Any],
    report_fn: ReportFn = log_report,
) -> List[str]:
    """Submit each character's wire record; return the names that got one.

    Characters absent from ``wire`` keep their current state. Records that
    fail validation are reported and skipped.
    """
    routed: List[str] = []
    for name, character in characters.items():
        record = wire.get(name)
        if record is None:
            logger.warning("No payload for character", extra={"character": name})
            continue
        try:
            payload = CharacterPayload.from_wire(record)
        except ValueError as e:
            logger.warning("Rejected payload: %s", e, extra={"character": name})
            report_fn(f"ERROR! invalid character payload, {name}: {e}")
            continue
        character.set_payload(payload)
        routed.append(name)
    return routed


async def load_all(characters: Mapping[str, Character]) -> List[str]:
    """Load every character concurrently; return names whose load applied."""
    names = list(characters)
    results = await asyncio.gather(*(characters[name].load() for name in names))
    return [name for name, applied in zip(names, results) if applied]
