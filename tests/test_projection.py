"""Tests for projection.py - per-seat event sequences"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from convlog.core.tile import Pai
from convlog.engine.errors import DecodeError, InvariantViolation
from convlog.engine.event import Ankan, Chi, Dahai, Kakan, Pon, Reach, Tsumo
from convlog.engine.projection import (
    discard_actions_to_events, take_actions_to_events,
)
from convlog.tenhou.log import ActionItem, ActionKind


def items(*raw):
    return [ActionItem.from_raw(x) for x in raw]


class TestActionItem:
    def test_from_raw(self):
        assert ActionItem.from_raw(60).kind is ActionKind.TSUMOGIRI
        assert ActionItem.from_raw(23) == ActionItem(ActionKind.PAI, pai=Pai.PIN3)
        assert ActionItem.from_raw("p252525") == ActionItem(ActionKind.NAKI, naki="p252525")

    def test_invalid_code(self):
        with pytest.raises(DecodeError):
            ActionItem.from_raw(61)


class TestTakes:
    def test_draws_and_calls(self):
        events = take_actions_to_events(1, items(11, "p252525", 47, "c131112"))
        assert events[0] == Tsumo(actor=1, pai=Pai.MAN1)
        assert isinstance(events[1], Pon)
        assert events[2] == Tsumo(actor=1, pai=Pai.CHUN)
        assert isinstance(events[3], Chi)
        assert len(events) == 4

    def test_tsumogiri_in_takes(self):
        with pytest.raises(InvariantViolation):
            take_actions_to_events(0, items(11, 60))

    def test_kan_string_in_takes(self):
        with pytest.raises(DecodeError):
            take_actions_to_events(0, items("424242a42"))


class TestDiscards:
    def test_plain_and_tsumogiri(self):
        events = discard_actions_to_events(2, items(33, 60))
        assert events[0] == Dahai(actor=2, pai=Pai.SOU3, tsumogiri=False)
        assert events[1].tsumogiri
        assert events[1].pai is Pai.UNKNOWN

    def test_kans(self):
        events = discard_actions_to_events(0, items("k16161616", "424242a42"))
        assert isinstance(events[0], Kakan)
        assert isinstance(events[1], Ankan)

    def test_reach_expands_to_two_events(self):
        events = discard_actions_to_events(0, items(11, "r60", 12))
        assert [type(e) for e in events] == [Dahai, Reach, Dahai, Dahai]
        assert events[2].is_unresolved

    def test_counts_match_tables(self):
        raw = [11, 60, "r35", "424242a42", 60]
        events = discard_actions_to_events(3, items(*raw))
        # one event per entry, plus one for the reach pairing
        assert len(events) == len(raw) + 1
