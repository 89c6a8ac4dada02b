"""Parse tenhou.net/6 JSON logs into structured per-kyoku tables.

Top level keys used:
  name = player names
  rule = {"disp": "般南喰赤", "aka": 1, ...}
  log  = one entry per kyoku:

    [[kyoku_num, honba, kyotaku], scores, dora, ura,
     haipai0, takes0, discards0, ..., haipai3, takes3, discards3,
     end_status]

End status is ["和了", deltas, detail, deltas, detail, ...] for wins, where
each detail starts with [who, target, pao_who, ...]; any other head is a
ryukyoku, ["流局", deltas] or e.g. ["九種九牌"] without deltas.
"""

import json
import logging

from convlog.core.tile import Pai
from convlog.engine.errors import DecodeError
from convlog.tenhou.log import (
    ActionItem, ActionTable, GameLength, Hora, HoraDetail, Kyoku, KyokuMeta,
    Log, Ryukyoku,
)

logger = logging.getLogger(__name__)

HORA_HEAD = "和了"
NUM_SEATS = 4

# meta, scores, dora, ura, 4 x (haipai, takes, discards), end status
_KYOKU_ENTRY_LEN = 4 + NUM_SEATS * 3 + 1


def load_log(path: str) -> Log:
    """Load a tenhou.net/6 JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    log = parse_log(data)
    logger.debug("loaded %s: %d kyoku", path, len(log.kyokus))
    return log


def parse_log(data: dict) -> Log:
    """Parse an already decoded tenhou.net/6 JSON object."""
    if not isinstance(data, dict) or "log" not in data:
        raise DecodeError(_excerpt(data), "not a tenhou.net/6 log")

    raw_names = data.get("name", [])
    if not isinstance(raw_names, list):
        raise DecodeError(_excerpt(raw_names), "malformed player names")
    names = [str(n) for n in raw_names][:NUM_SEATS]
    names += [""] * (NUM_SEATS - len(names))

    rule = data.get("rule", {})
    if not isinstance(rule, dict):
        raise DecodeError(_excerpt(rule), "malformed rule")
    disp = str(rule.get("disp", ""))
    game_length = GameLength.TONPUU if "東" in disp else GameLength.HANCHAN
    has_aka = any(rule.get(key, 0) for key in ("aka", "aka51", "aka52", "aka53"))

    if not isinstance(data["log"], list):
        raise DecodeError(_excerpt(data["log"]), "malformed kyoku list")
    kyokus = [_parse_kyoku(entry) for entry in data["log"]]

    return Log(
        names=names,
        game_length=game_length,
        has_aka=bool(has_aka),
        kyokus=kyokus,
    )


def _parse_kyoku(entry: list) -> Kyoku:
    if not isinstance(entry, list) or len(entry) != _KYOKU_ENTRY_LEN:
        raise DecodeError(_excerpt(entry), "malformed kyoku entry")

    try:
        kyoku_num, honba, kyotaku = (int(x) for x in entry[0])
        scoreboard = tuple(int(x) for x in entry[1])
    except (TypeError, ValueError):
        raise DecodeError(_excerpt(entry[:2]), "malformed kyoku header") from None
    if len(scoreboard) != NUM_SEATS:
        raise DecodeError(_excerpt(entry[1]), "malformed scoreboard")

    dora_indicators = _table(entry[2], Pai.from_code, "dora indicators")
    ura_indicators = _table(entry[3], Pai.from_code, "ura indicators")

    action_tables = []
    for seat in range(NUM_SEATS):
        base = 4 + seat * 3
        haipai, takes, discards = entry[base:base + 3]
        action_tables.append(ActionTable(
            haipai=tuple(_table(haipai, Pai.from_code, "haipai")),
            takes=_table(takes, ActionItem.from_raw, "action table"),
            discards=_table(discards, ActionItem.from_raw, "action table"),
        ))

    return Kyoku(
        meta=KyokuMeta(kyoku_num=kyoku_num, honba=honba, kyotaku=kyotaku),
        scoreboard=scoreboard,
        dora_indicators=dora_indicators,
        ura_indicators=ura_indicators,
        action_tables=action_tables,
        end_status=_parse_end_status(entry[-1]),
    )


def _parse_end_status(raw: list):
    if not isinstance(raw, list) or not raw:
        raise DecodeError(_excerpt(raw), "malformed end status")

    if raw[0] != HORA_HEAD:
        deltas = _deltas(raw[1]) if len(raw) > 1 else (0,) * NUM_SEATS
        return Ryukyoku(score_deltas=deltas)

    body = raw[1:]
    if not body or len(body) % 2 != 0:
        raise DecodeError(_excerpt(raw), "malformed hora status")

    details = []
    for i in range(0, len(body), 2):
        deltas, detail = body[i], body[i + 1]
        try:
            who, target = int(detail[0]), int(detail[1])
        except (TypeError, ValueError, IndexError):
            raise DecodeError(_excerpt(detail), "malformed hora detail") from None
        details.append(HoraDetail(who=who, target=target,
                                  score_deltas=_deltas(deltas)))
    return Hora(details=details)


def _table(raw, convert, what: str) -> list:
    if not isinstance(raw, list):
        raise DecodeError(_excerpt(raw), f"malformed {what}")
    return [convert(x) for x in raw]


def _deltas(raw) -> tuple:
    try:
        deltas = tuple(int(x) for x in raw)
    except (TypeError, ValueError):
        raise DecodeError(_excerpt(raw), "malformed score deltas") from None
    if len(deltas) != NUM_SEATS:
        raise DecodeError(_excerpt(raw), "malformed score deltas")
    return deltas


def _excerpt(value, limit: int = 80) -> str:
    text = json.dumps(value, ensure_ascii=False, default=str)
    if len(text) > limit:
        text = text[:limit - 3] + "..."
    return text

