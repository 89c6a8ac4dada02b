"""Tile definition with dual encoding (tenhou numeric code / mjai string)."""

from enum import IntEnum
from types import MappingProxyType

from convlog.engine.errors import DecodeError


class Pai(IntEnum):
    """A tile, valued by its tenhou.net/6 numeric code."""
    UNKNOWN = 0

    MAN1 = 11
    MAN2 = 12
    MAN3 = 13
    MAN4 = 14
    MAN5 = 15
    MAN6 = 16
    MAN7 = 17
    MAN8 = 18
    MAN9 = 19

    PIN1 = 21
    PIN2 = 22
    PIN3 = 23
    PIN4 = 24
    PIN5 = 25
    PIN6 = 26
    PIN7 = 27
    PIN8 = 28
    PIN9 = 29

    SOU1 = 31
    SOU2 = 32
    SOU3 = 33
    SOU4 = 34
    SOU5 = 35
    SOU6 = 36
    SOU7 = 37
    SOU8 = 38
    SOU9 = 39

    EAST = 41
    SOUTH = 42
    WEST = 43
    NORTH = 44
    HAKU = 45
    HATSU = 46
    CHUN = 47

    AKA_MAN5 = 51  # 赤5m
    AKA_PIN5 = 52  # 赤5p
    AKA_SOU5 = 53  # 赤5s

    @classmethod
    def from_code(cls, code) -> "Pai":
        """Parse a tenhou numeric code (int or its decimal text)."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            raise DecodeError(str(code), "invalid pai code") from None

    @classmethod
    def from_str(cls, s: str) -> "Pai":
        """Parse an mjai tile string like '5mr' or 'E'."""
        pai = _PAI_BY_STRING.get(s)
        if pai is None:
            raise DecodeError(s, "invalid pai string")
        return pai

    @property
    def code(self) -> int:
        return int(self)

    def to_mjai(self) -> str:
        return MJAI_PAI_STRINGS[self]

    def __str__(self):
        return MJAI_PAI_STRINGS[self]

    def __repr__(self):
        return f"Pai({MJAI_PAI_STRINGS[self]})"


_SUIT_CHARS = {1: "m", 2: "p", 3: "s"}
_HONOR_STRINGS = ["E", "S", "W", "N", "P", "F", "C"]


def _mjai_string(pai: Pai) -> str:
    code = pai.code
    if pai is Pai.UNKNOWN:
        return "?"
    if code >= 51:
        return f"5{_SUIT_CHARS[code - 50]}r"
    if code >= 41:
        return _HONOR_STRINGS[code - 41]
    return f"{code % 10}{_SUIT_CHARS[code // 10]}"


# Built once; both directions are read-only.
MJAI_PAI_STRINGS = MappingProxyType({pai: _mjai_string(pai) for pai in Pai})
_PAI_BY_STRING = MappingProxyType({s: pai for pai, s in MJAI_PAI_STRINGS.items()})

# Tsumogiri marker in tenhou discard tables (also the reach sentinel "r60").
TSUMOGIRI_CODE = 60
