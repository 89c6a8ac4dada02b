"""Decode tenhou.net/6 compact call strings into call events.

A call string is a run of two-digit tile codes with exactly one marker letter
spliced in. The letter gives the call kind, its position gives the seat the
tile came from:

    c275226    chi 7p with 5pr 6p from kamicha (marker must lead)
    12p1212    pon 2m from toimen
    3737p37    pon 7s from shimocha
    m39393939  daiminkan 9s from kamicha
    131313m13  daiminkan 3m from shimocha
    41k414141  kakan 1z, the pon was from toimen
    424242a42  ankan 2z (marker always at index 6)
    r35        reach, discarding 5s ("r60" discards the drawn tile)

The token right after the marker is the called tile; the other tokens, in
order, are the consumed tiles. Ankan has no called tile, all four are
consumed.
"""

from typing import Dict, List, NamedTuple

from convlog.core.tile import Pai, TSUMOGIRI_CODE
from convlog.engine.errors import DecodeError
from convlog.engine.event import (
    Ankan, Chi, Dahai, Daiminkan, Event, Kakan, Pon, Reach,
)


class NakiLayout(NamedTuple):
    length: int
    offsets: Dict[int, int]  # marker index -> target seat offset from actor


# Markers that can appear in a take table / a discard table.
TAKE_MARKERS = "cpm"
DISCARD_MARKERS = "kar"

NAKI_LAYOUTS = {
    "c": NakiLayout(7, {0: 3}),
    "p": NakiLayout(7, {0: 3, 2: 2, 4: 1}),
    "m": NakiLayout(9, {0: 3, 2: 2, 6: 1}),
    "k": NakiLayout(9, {0: 3, 2: 2, 4: 1}),
    "a": NakiLayout(9, {6: 0}),
    "r": NakiLayout(3, {0: 0}),
}

_TAKE_CALLS = {"c": Chi, "p": Pon, "m": Daiminkan}

# ASCII only; str.isdigit() also accepts fullwidth digits
_DIGITS = "0123456789"


def _split(naki: str, allowed: str):
    """Locate the marker and cut the rest into two-character tokens.

    Returns (marker, marker index, tokens).
    """
    markers = [(i, ch) for i, ch in enumerate(naki) if ch not in _DIGITS]
    if len(markers) != 1:
        raise DecodeError(naki, "invalid naki string")
    idx, marker = markers[0]
    if marker not in allowed:
        raise DecodeError(naki, "invalid naki string")

    layout = NAKI_LAYOUTS[marker]
    if len(naki) != layout.length or idx not in layout.offsets:
        raise DecodeError(naki, "invalid naki string")

    body = naki[:idx] + naki[idx + 1:]
    tokens = [body[i:i + 2] for i in range(0, len(body), 2)]
    return marker, idx, tokens


def _pai(token: str, naki: str) -> Pai:
    try:
        pai = Pai.from_code(token)
    except DecodeError:
        raise DecodeError(naki, "invalid pai in naki string") from None
    if pai is Pai.UNKNOWN:
        raise DecodeError(naki, "invalid pai in naki string")
    return pai


def decode_take_naki(actor: int, naki: str) -> Event:
    """Decode a chi/pon/daiminkan string found in a take table."""
    marker, idx, tokens = _split(naki, TAKE_MARKERS)
    pais = [_pai(tok, naki) for tok in tokens]
    pai = pais.pop(idx // 2)
    target = (actor + NAKI_LAYOUTS[marker].offsets[idx]) % 4

    return _TAKE_CALLS[marker](
        actor=actor,
        target=target,
        pai=pai,
        consumed=tuple(pais),
    )


def decode_discard_naki(actor: int, naki: str) -> List[Event]:
    """Decode a kakan/ankan/reach string found in a discard table.

    Reach expands to two events: the declaration and the riichi discard. A
    tsumogiri riichi discard is left unresolved (pai UNKNOWN).
    """
    marker, idx, tokens = _split(naki, DISCARD_MARKERS)

    if marker == "r":
        if tokens[0] == str(TSUMOGIRI_CODE):
            dahai = Dahai(actor=actor, pai=Pai.UNKNOWN, tsumogiri=True)
        else:
            dahai = Dahai(actor=actor, pai=_pai(tokens[0], naki), tsumogiri=False)
        return [Reach(actor=actor), dahai]

    pais = [_pai(tok, naki) for tok in tokens]
    if marker == "a":
        return [Ankan(actor=actor, consumed=tuple(pais))]

    pai = pais.pop(idx // 2)
    return [Kakan(
        actor=actor,
        pai=pai,
        consumed=tuple(pais),
        target=(actor + NAKI_LAYOUTS[marker].offsets[idx]) % 4,
    )]


def _marker_index(marker: str, offset: int) -> int:
    for idx, off in NAKI_LAYOUTS[marker].offsets.items():
        if off == offset:
            return idx
    raise ValueError(f"no {marker!r} layout for seat offset {offset}")


def _codes(pais) -> List[str]:
    return [f"{p.code:02d}" for p in pais]


def encode_naki(event: Event) -> str:
    """Rebuild the tenhou call string of a decoded call event."""
    if isinstance(event, Ankan):
        codes = _codes(event.consumed)
        return "".join(codes[:3]) + "a" + codes[3]

    if isinstance(event, Chi):
        marker = "c"
    elif isinstance(event, Pon):
        marker = "p"
    elif isinstance(event, Daiminkan):
        marker = "m"
    elif isinstance(event, Kakan):
        marker = "k"
    else:
        raise ValueError(f"cannot encode {event.type} as a naki string")

    idx = _marker_index(marker, (event.target - event.actor) % 4)
    codes = _codes(event.consumed)
    codes.insert(idx // 2, marker + _codes([event.pai])[0])
    return "".join(codes)


def encode_reach(dahai: Dahai) -> str:
    """Rebuild the reach string of a riichi discard."""
    if dahai.tsumogiri:
        return f"r{TSUMOGIRI_CODE}"
    return "r" + _codes([dahai.pai])[0]
