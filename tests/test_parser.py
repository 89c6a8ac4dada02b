"""Tests for the tenhou.net/6 loader"""

import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from kyoku_builder import raw_kyoku, raw_log

from convlog.core.tile import Pai
from convlog.engine.errors import DecodeError
from convlog.tenhou.log import ActionKind, GameLength, Hora, KyokuMeta, Ryukyoku
from convlog.tenhou.parser import load_log, parse_log


def simple_entry(**kwargs):
    return raw_kyoku(
        takes=[[11, 12], ["p252525"], [13], [14]],
        discards=[[60, "r35"], [21], [22], ["424242a42"]],
        **kwargs,
    )


class TestParseLog:
    def test_header(self):
        log = parse_log(raw_log(simple_entry()))
        assert log.names == ["A", "B", "C", "D"]
        assert log.game_length is GameLength.HANCHAN
        assert log.has_aka
        assert len(log.kyokus) == 1

    def test_tonpuu_without_aka(self):
        data = raw_log(simple_entry(), disp="般東喰")
        data["rule"] = {"disp": "般東喰", "aka": 0}
        log = parse_log(data)
        assert log.game_length is GameLength.TONPUU
        assert int(log.game_length) == 4
        assert not log.has_aka

    def test_short_name_list_is_padded(self):
        log = parse_log(raw_log(simple_entry(), names=("A", "B")))
        assert log.names == ["A", "B", "", ""]

    def test_kyoku_tables(self):
        kyoku = parse_log(raw_log(simple_entry(kyoku_num=5, honba=1))).kyokus[0]
        assert kyoku.meta.kyoku_num == 5
        assert kyoku.meta.honba == 1
        assert kyoku.scoreboard == (25000, 25000, 25000, 25000)
        assert kyoku.dora_indicators[0] is Pai.PIN1
        assert len(kyoku.action_tables) == 4

        table = kyoku.action_tables[0]
        assert len(table.haipai) == 13
        assert table.takes[0].pai is Pai.MAN1
        assert table.discards[0].kind is ActionKind.TSUMOGIRI
        assert table.discards[1].kind is ActionKind.NAKI
        assert table.discards[1].naki == "r35"
        assert kyoku.action_tables[1].takes[0].naki == "p252525"

    def test_not_a_log(self):
        with pytest.raises(DecodeError):
            parse_log({"name": ["A"]})
        with pytest.raises(DecodeError):
            parse_log([1, 2, 3])

    def test_malformed_entry(self):
        entry = simple_entry()
        with pytest.raises(DecodeError):
            parse_log(raw_log(entry[:-1]))

    def test_bad_tile_code(self):
        entry = simple_entry()
        entry[5] = [11, 99]
        with pytest.raises(DecodeError) as exc:
            parse_log(raw_log(entry))
        assert exc.value.text == "99"

    @pytest.mark.parametrize("index,value", [
        (2, 21),        # dora indicators
        (3, None),      # ura indicators
        (4, "11"),      # haipai
        (5, 11),        # takes
        (6, {"a": 1}),  # discards
    ])
    def test_table_not_a_list(self, index, value):
        entry = simple_entry()
        entry[index] = value
        with pytest.raises(DecodeError):
            parse_log(raw_log(entry))

    def test_rule_not_a_dict(self):
        data = raw_log(simple_entry())
        data["rule"] = None
        with pytest.raises(DecodeError):
            parse_log(data)

    def test_names_not_a_list(self):
        data = raw_log(simple_entry())
        data["name"] = "ABCD"
        with pytest.raises(DecodeError):
            parse_log(data)

    def test_kyoku_list_not_a_list(self):
        with pytest.raises(DecodeError):
            parse_log({"log": 1})


class TestEndStatus:
    def test_hora(self):
        end = ["和了", [-1000, 1000, 0, 0], [1, 0, 1, "30符1飜1000点", "立直(1飜)"]]
        kyoku = parse_log(raw_log(simple_entry(end=end))).kyokus[0]
        assert isinstance(kyoku.end_status, Hora)
        detail = kyoku.end_status.details[0]
        assert (detail.who, detail.target) == (1, 0)
        assert detail.score_deltas == (-1000, 1000, 0, 0)

    def test_double_ron(self):
        end = ["和了",
               [-2000, 2000, 0, 0], [1, 0, 1, "..."],
               [-1000, 0, 1000, 0], [2, 0, 2, "..."]]
        kyoku = parse_log(raw_log(simple_entry(end=end))).kyokus[0]
        assert [d.who for d in kyoku.end_status.details] == [1, 2]

    def test_ryukyoku(self):
        end = ["流局", [1500, -1500, 1500, -1500]]
        kyoku = parse_log(raw_log(simple_entry(end=end))).kyokus[0]
        assert isinstance(kyoku.end_status, Ryukyoku)
        assert kyoku.end_status.score_deltas == (1500, -1500, 1500, -1500)

    def test_abortive_draw_without_deltas(self):
        kyoku = parse_log(raw_log(simple_entry(end=["九種九牌"]))).kyokus[0]
        assert kyoku.end_status.score_deltas == (0, 0, 0, 0)

    def test_malformed_hora(self):
        with pytest.raises(DecodeError):
            parse_log(raw_log(simple_entry(end=["和了", [0, 0, 0, 0]])))
        with pytest.raises(DecodeError):
            parse_log(raw_log(simple_entry(end=["和了", [0, 0, 0], [1, 0, 1]])))


class TestLoadLog:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "log.json"
        path.write_text(json.dumps(raw_log(simple_entry()), ensure_ascii=False),
                        encoding="utf-8")
        log = load_log(str(path))
        assert log.names[0] == "A"
        assert len(log.kyokus) == 1


class TestKyokuLabel:
    def test_labels(self):
        assert KyokuMeta(kyoku_num=0, honba=0, kyotaku=0).label == "E1"
        assert KyokuMeta(kyoku_num=6, honba=2, kyotaku=0).label == "S3-2"
