"""tenhou.net/6 log data model.

Only the parts the converter needs are kept. Per seat and per kyoku the log
has a starting hand, a take table and a discard table:

  take table:    tiles drawn, or call strings (chi / pon / daiminkan)
  discard table: tiles discarded, 60 for tsumogiri, or call strings
                 (kakan / ankan / reach)
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Union

from convlog.core.tile import Pai, TSUMOGIRI_CODE


class ActionKind(Enum):
    PAI = "pai"              # a real tile
    TSUMOGIRI = "tsumogiri"  # discard the tile just drawn
    NAKI = "naki"            # compact call string


@dataclass(frozen=True)
class ActionItem:
    """One entry of a take or discard table."""
    kind: ActionKind
    pai: Pai = Pai.UNKNOWN
    naki: str = ""

    @classmethod
    def from_raw(cls, raw: Union[int, str]) -> "ActionItem":
        """Build from the raw JSON value (int tile code or call string)."""
        if isinstance(raw, str):
            return cls(ActionKind.NAKI, naki=raw)
        if raw == TSUMOGIRI_CODE:
            return cls(ActionKind.TSUMOGIRI)
        return cls(ActionKind.PAI, pai=Pai.from_code(raw))

    def __repr__(self):
        if self.kind is ActionKind.PAI:
            return f"ActionItem({self.pai.to_mjai()})"
        if self.kind is ActionKind.NAKI:
            return f"ActionItem({self.naki!r})"
        return "ActionItem(tsumogiri)"


@dataclass
class ActionTable:
    haipai: Tuple[Pai, ...]
    takes: List[ActionItem] = field(default_factory=list)
    discards: List[ActionItem] = field(default_factory=list)


@dataclass
class KyokuMeta:
    kyoku_num: int  # 0=E1, 1=E2, ..., 4=S1, ...
    honba: int
    kyotaku: int    # riichi sticks on the table

    @property
    def label(self) -> str:
        """Short label like 'E1' or 'S3-2' (with honba)."""
        label = f"{'ESWN'[self.kyoku_num // 4 % 4]}{self.kyoku_num % 4 + 1}"
        if self.honba:
            label += f"-{self.honba}"
        return label


@dataclass
class HoraDetail:
    who: int
    target: int     # == who for tsumo
    score_deltas: Tuple[int, ...]


@dataclass
class Hora:
    details: List[HoraDetail]


@dataclass
class Ryukyoku:
    score_deltas: Tuple[int, ...]


EndStatus = Union[Hora, Ryukyoku]


@dataclass
class Kyoku:
    meta: KyokuMeta
    scoreboard: Tuple[int, ...]
    dora_indicators: List[Pai]
    action_tables: List[ActionTable]  # one per seat
    end_status: EndStatus
    ura_indicators: List[Pai] = field(default_factory=list)


class GameLength(IntEnum):
    """Value is mjai's ``kyoku_first``."""
    HANCHAN = 0
    TONPUU = 4


@dataclass
class Log:
    names: List[str]
    game_length: GameLength = GameLength.HANCHAN
    has_aka: bool = True
    kyokus: List[Kyoku] = field(default_factory=list)
