"""Static character catalog.

``CHARACTER_CATALOG`` lists every character the client knows about, in
picker order. It is plain data; :func:`build_characters` turns it into the
process-wide name -> :class:`Character` registry once at startup.
"""

from typing import Iterable, Optional

from pyrsistent import PMap, pmap

from character_render.character import Character
from character_render.components import CatalogEntry
from character_render.events import AnnualEvent, no_active_events
from character_render.types import (
    CharacterFormat,
    DecodeFn,
    DrawableFactory,
    EventPredicate,
    ReportFn,
)

PNG = CharacterFormat.PNG


def _seasonal(name: str, event: AnnualEvent) -> CatalogEntry:
    return CatalogEntry(name=name, is_event=True, hidden_during=event)


def _hidden(name: str, fmt: CharacterFormat = CharacterFormat.SVG) -> CatalogEntry:
    return CatalogEntry(name=name, hidden=True, format=fmt)


CHARACTER_CATALOG: tuple[CatalogEntry, ...] = (
    # seasonal
    _seasonal("shobon_raincoat", AnnualEvent.RAINY),
    _seasonal("shii_raincoat", AnnualEvent.RAINY),
    _seasonal("tokita_naito", AnnualEvent.SPOOKTOBER),
    _seasonal("pumpkinhead", AnnualEvent.SPOOKTOBER),
    _seasonal("naito_yurei", AnnualEvent.SPOOKTOBER),
    _seasonal("shiinigami", AnnualEvent.SPOOKTOBER),
    _seasonal("giko_hat", AnnualEvent.CHRISTMAS_TIME),
    _seasonal("shii_hat", AnnualEvent.CHRISTMAS_TIME),
    _seasonal("shobon_hat", AnnualEvent.CHRISTMAS_TIME),
    # normal characters
    CatalogEntry(name="giko"),
    CatalogEntry(name="shii"),
    CatalogEntry(name="shobon"),
    CatalogEntry(name="zonu"),
    CatalogEntry(name="naito"),
    CatalogEntry(name="hikki"),
    CatalogEntry(name="george"),
    CatalogEntry(name="salmon"),
    CatalogEntry(name="nida"),
    CatalogEntry(name="chotto_toorimasu_yo"),
    CatalogEntry(name="dokuo"),
    _hidden("tabako_dokuo"),
    CatalogEntry(name="onigiri"),
    CatalogEntry(name="tinpopo"),
    # furoshiki
    CatalogEntry(name="uzukumari"),
    CatalogEntry(name="furoshiki"),
    _seasonal("golden_furoshiki", AnnualEvent.GOLDEN_WEEK),
    CatalogEntry(name="furoshiki_shobon"),
    CatalogEntry(name="furoshiki_shii"),
    CatalogEntry(name="sakura_furoshiki_shii"),
    # giko
    CatalogEntry(name="hotsuma_giko"),
    CatalogEntry(name="kimono_giko"),
    _hidden("hentai_giko"),
    _hidden("giko_basketball"),
    _hidden("tikan_giko"),
    _hidden("hungry_giko"),
    _hidden("giko_shamisen"),
    _hidden("prison_giko"),
    _hidden("giko_cop", PNG),
    _hidden("giko_islam", PNG),
    _hidden("long_giko", PNG),
    _hidden("mol_giko", PNG),
    _hidden("mitsu_giko"),
    _hidden("gacha"),
    # shii
    _hidden("shii_syakuhati"),
    CatalogEntry(name="kimono_shii"),
    CatalogEntry(name="shii_pianica"),
    CatalogEntry(name="shii_uniform"),
    CatalogEntry(name="shii_toast"),
    CatalogEntry(name="shii_shintaisou"),
    _hidden("shii_islam", PNG),
    # shobon
    _hidden("baba_shobon"),
    # naito
    CatalogEntry(name="naitoapple"),
    CatalogEntry(name="panda_naito"),
    _hidden("wild_panda_naito"),
    _hidden("kaminarisama_naito"),
    _hidden("funkynaito"),
    _hidden("mikan_naito"),
    _hidden("taiko_naito"),
    _hidden("rikishi_naito"),
    _hidden("shar_naito"),
    _hidden("dark_naito_walking"),
    _hidden("akai", PNG),
    # toorimasu
    _hidden("bif_alien", PNG),
    _hidden("bif_wizard", PNG),
    # other
    _hidden("himawari"),
    _hidden("youkanman"),
    _hidden("ika"),
    CatalogEntry(name="goatse", is_event=True, hidden=True, format=PNG),
    _hidden("habbo", PNG),
    _hidden("takenoko"),
)


def build_characters(
    event_predicate: EventPredicate = no_active_events,
    entries: Iterable[CatalogEntry] = CHARACTER_CATALOG,
    decode_fn: Optional[DecodeFn] = None,
    drawable_factory: Optional[DrawableFactory] = None,
    report_fn: Optional[ReportFn] = None,
) -> PMap[str, Character]:
    """Construct every catalog character.

    Raises:
        ValueError: If two entries share a name.
    """
    characters: dict[str, Character] = {}
    for entry in entries:
        if entry.name in characters:
            raise ValueError(f"Duplicate character name in catalog: {entry.name}")
        characters[entry.name] = Character(
            entry,
            event_predicate=event_predicate,
            decode_fn=decode_fn,
            drawable_factory=drawable_factory,
            report_fn=report_fn,
        )
    return pmap(characters)
