"""mjai event taxonomy emitted by the converter.

Every event is a frozen dataclass; the class-level ``event_type`` doubles as
the mjai ``type`` discriminator. Fields are named exactly as mjai names them.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import ClassVar, Optional, Tuple

from convlog.core.tile import Pai


class EventType(Enum):
    START_GAME = "start_game"
    START_KYOKU = "start_kyoku"
    TSUMO = "tsumo"
    DAHAI = "dahai"
    CHI = "chi"
    PON = "pon"
    DAIMINKAN = "daiminkan"
    KAKAN = "kakan"
    ANKAN = "ankan"
    REACH = "reach"
    REACH_ACCEPTED = "reach_accepted"
    DORA = "dora"
    HORA = "hora"
    RYUKYOKU = "ryukyoku"
    END_KYOKU = "end_kyoku"
    END_GAME = "end_game"


# Priority for resolving calls on the same discard (lower wins)
CALL_PRIORITY = {
    EventType.DAIMINKAN: 1,
    EventType.PON: 1,
    EventType.CHI: 2,
}


def _mjai_value(value):
    if isinstance(value, Pai):
        return value.to_mjai()
    if isinstance(value, (list, tuple)):
        return [_mjai_value(v) for v in value]
    return value


@dataclass(frozen=True)
class Event:
    """Base class of all events."""
    event_type: ClassVar[EventType]

    @property
    def type(self) -> str:
        return self.event_type.value

    def to_mjai(self) -> dict:
        """Plain dict in mjai field order, ready for JSON encoding.

        Fields flagged ``mjai=False`` are internal; optional fields are
        dropped while unset.
        """
        out = {"type": self.event_type.value}
        for f in fields(self):
            if not f.metadata.get("mjai", True):
                continue
            value = getattr(self, f.name)
            if value is None and f.metadata.get("optional", False):
                continue
            out[f.name] = _mjai_value(value)
        return out


@dataclass(frozen=True)
class StartGame(Event):
    event_type: ClassVar[EventType] = EventType.START_GAME
    kyoku_first: int
    aka_flag: bool
    names: Tuple[str, ...]


@dataclass(frozen=True)
class StartKyoku(Event):
    event_type: ClassVar[EventType] = EventType.START_KYOKU
    bakaze: Pai
    dora_marker: Pai
    kyoku: int  # 1-4 within the wind
    honba: int
    kyotaku: int
    oya: int
    scores: Tuple[int, ...]
    tehais: Tuple[Tuple[Pai, ...], ...]


@dataclass(frozen=True)
class Tsumo(Event):
    event_type: ClassVar[EventType] = EventType.TSUMO
    actor: int
    pai: Pai


@dataclass(frozen=True)
class Dahai(Event):
    event_type: ClassVar[EventType] = EventType.DAHAI
    actor: int
    pai: Pai
    tsumogiri: bool

    @property
    def is_unresolved(self) -> bool:
        """Tsumogiri whose tile is not known until the draw is replayed."""
        return self.tsumogiri and self.pai is Pai.UNKNOWN

    def fill_tsumogiri(self, last_tsumo: Pai) -> "Dahai":
        if not self.tsumogiri:
            return self
        return replace(self, pai=last_tsumo)


@dataclass(frozen=True)
class CallEvent(Event):
    """A call on another seat's discard (chi, pon, daiminkan)."""
    actor: int
    target: int
    pai: Pai
    consumed: Tuple[Pai, ...]

    @property
    def priority(self) -> int:
        return CALL_PRIORITY[self.event_type]

    def takes_discard(self, discarder: int, pai: Pai) -> bool:
        """Whether this call claims ``pai`` discarded by ``discarder``."""
        return self.target == discarder and self.pai == pai


@dataclass(frozen=True)
class Chi(CallEvent):
    event_type: ClassVar[EventType] = EventType.CHI


@dataclass(frozen=True)
class Pon(CallEvent):
    event_type: ClassVar[EventType] = EventType.PON


@dataclass(frozen=True)
class Daiminkan(CallEvent):
    event_type: ClassVar[EventType] = EventType.DAIMINKAN


@dataclass(frozen=True)
class Kakan(Event):
    event_type: ClassVar[EventType] = EventType.KAKAN
    actor: int
    pai: Pai
    consumed: Tuple[Pai, ...]
    # Seat the original pon was called from; mjai does not carry it.
    target: int = field(default=-1, metadata={"mjai": False})


@dataclass(frozen=True)
class Ankan(Event):
    event_type: ClassVar[EventType] = EventType.ANKAN
    actor: int
    consumed: Tuple[Pai, ...]


@dataclass(frozen=True)
class Reach(Event):
    event_type: ClassVar[EventType] = EventType.REACH
    actor: int


@dataclass(frozen=True)
class ReachAccepted(Event):
    event_type: ClassVar[EventType] = EventType.REACH_ACCEPTED
    actor: int


@dataclass(frozen=True)
class Dora(Event):
    event_type: ClassVar[EventType] = EventType.DORA
    dora_marker: Pai


@dataclass(frozen=True)
class Hora(Event):
    event_type: ClassVar[EventType] = EventType.HORA
    actor: int
    target: int
    deltas: Tuple[int, ...]
    ura_markers: Optional[Tuple[Pai, ...]] = field(
        default=None, metadata={"optional": True})


@dataclass(frozen=True)
class Ryukyoku(Event):
    event_type: ClassVar[EventType] = EventType.RYUKYOKU
    deltas: Tuple[int, ...]


@dataclass(frozen=True)
class EndKyoku(Event):
    event_type: ClassVar[EventType] = EventType.END_KYOKU


@dataclass(frozen=True)
class EndGame(Event):
    event_type: ClassVar[EventType] = EventType.END_GAME


# Events that open a kan and therefore reveal a new dora indicator
KAN_EVENTS = (Daiminkan, Kakan, Ankan)
