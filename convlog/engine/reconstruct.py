"""Rebuild the globally ordered event stream of a single kyoku.

The tenhou log keeps each seat's takes and discards apart; the only ordering
information left is that every take of the current actor is followed by one
of its discards, and that a call in someone's take table names the seat and
the tile it was taken from. The reconstructor walks the four tables with one
cursor each and replays the turn order:

  take -> (reach_accepted) -> discard -> (dora) -> next actor

Kan dora timing: ankan reveals right away, daiminkan and kakan reveal after
the next discard.
"""

import logging
from typing import List, Optional, Sequence

from convlog.core.tile import Pai
from convlog.engine.errors import InsufficientData
from convlog.engine.event import (
    Ankan, CallEvent, Dahai, Daiminkan, Dora, EndKyoku, Event, Hora, Kakan,
    Reach, ReachAccepted, Ryukyoku, StartKyoku, Tsumo,
)
from convlog.engine.projection import (
    discard_actions_to_events, take_actions_to_events,
)
from convlog.tenhou import log as tenhou

logger = logging.getLogger(__name__)

NUM_SEATS = 4


class SeatCursor:
    """Index-based read position into an immutable sequence.

    peek() never consumes; next() returns None once the sequence is spent.
    """
    __slots__ = ('_items', '_pos')

    def __init__(self, items: Sequence):
        self._items = tuple(items)
        self._pos = 0

    def peek(self):
        if self._pos < len(self._items):
            return self._items[self._pos]
        return None

    def next(self):
        item = self.peek()
        if item is not None:
            self._pos += 1
        return item

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._items)

    @property
    def position(self) -> int:
        return self._pos

    def __len__(self):
        return len(self._items)


class KyokuReconstructor:
    """State machine for one kyoku. Use reconstruct_kyoku() for one-shot calls."""

    def __init__(self, kyoku: tenhou.Kyoku, include_ura_markers: bool = True):
        self.kyoku = kyoku
        self.include_ura_markers = include_ura_markers
        self.kyoku_num = kyoku.meta.kyoku_num
        self.honba = kyoku.meta.honba

        self.takes = [
            SeatCursor(take_actions_to_events(seat, table.takes))
            for seat, table in enumerate(kyoku.action_tables)
        ]
        self.discards = [
            SeatCursor(discard_actions_to_events(seat, table.discards))
            for seat, table in enumerate(kyoku.action_tables)
        ]
        self.dora_feed = SeatCursor(kyoku.dora_indicators)

        self.oya = self.kyoku_num % NUM_SEATS
        self.actor = self.oya
        self.reach_pending: Optional[int] = None
        self.reached: set = set()
        self.last_tsumo = Pai.UNKNOWN
        self.last_dahai = Pai.UNKNOWN
        self.need_new_dora = False

        self.events: List[Event] = []
        self.is_finished = False

    def run(self) -> List[Event]:
        """Convert the whole kyoku; returns the emitted events."""
        if self.is_finished:
            return self.events

        self._start_kyoku()

        while True:
            take = self._next_take()

            if isinstance(take, Tsumo):
                self.last_tsumo = take.pai

            # A reach is accepted once the next take happens without ron.
            if self.reach_pending is not None:
                self._emit(ReachAccepted(actor=self.reach_pending))
                self.reach_pending = None

            # Daiminkan: its discard slot is empty, the rinshan draw is the
            # actor's next take.
            if isinstance(take, Daiminkan):
                self._emit(take)
                self.discards[self.actor].next()
                self.need_new_dora = True
                continue

            self._emit(take)

            # Tsumo agari or kyuushu kyuuhai.
            if self.discards[self.actor].exhausted:
                self._end_kyoku()
                break

            discard = self._next_discard()
            self._emit(discard)

            if self.need_new_dora:
                self._emit(Dora(dora_marker=self._next_dora()))
                self.need_new_dora = False

            if isinstance(discard, Reach):
                self.reach_pending = self.actor
                self.reached.add(self.actor)
                self._emit(self._next_discard())

            # Ron or exhaustive draw.
            if all(cursor.exhausted for cursor in self.takes):
                self._end_kyoku()
                break

            if isinstance(discard, Ankan):
                self._emit(Dora(dora_marker=self._next_dora()))
                continue
            if isinstance(discard, Kakan):
                self.need_new_dora = True
                continue

            self.actor = self._next_actor()

        self.is_finished = True
        logger.debug("kyoku %s: %d events", self.kyoku.meta.label, len(self.events))
        return self.events

    def _emit(self, event: Event):
        self.events.append(event)

    def _start_kyoku(self):
        tables = self.kyoku.action_tables
        self._emit(StartKyoku(
            bakaze=Pai(Pai.EAST + min(self.kyoku_num // NUM_SEATS, 3)),
            dora_marker=self._next_dora(),
            kyoku=self.kyoku_num % NUM_SEATS + 1,
            honba=self.honba,
            kyotaku=self.kyoku.meta.kyotaku,
            oya=self.oya,
            scores=tuple(self.kyoku.scoreboard),
            tehais=tuple(tuple(table.haipai) for table in tables),
        ))

    def _next_take(self) -> Event:
        take = self.takes[self.actor].next()
        if take is None:
            raise InsufficientData("takes", self.kyoku_num, self.honba, self.actor)
        return take

    def _next_discard(self) -> Event:
        discard = self.discards[self.actor].next()
        if discard is None:
            raise InsufficientData("discards", self.kyoku_num, self.honba, self.actor)
        if isinstance(discard, Dahai):
            discard = discard.fill_tsumogiri(self.last_tsumo)
            self.last_dahai = discard.pai
        return discard

    def _next_dora(self) -> Pai:
        marker = self.dora_feed.next()
        if marker is None:
            raise InsufficientData("dora", self.kyoku_num, self.honba)
        return marker

    def _next_actor(self) -> int:
        """Seat that takes the next turn after the actor's discard.

        A seat whose pending take calls the discarded tile from the actor
        jumps in; pon and daiminkan go before chi. Two calls of equal rank on
        one tile cannot both be legal and are not disambiguated.
        """
        candidates = []
        for seat in range(NUM_SEATS):
            if seat == self.actor:
                continue
            take = self.takes[seat].peek()
            if isinstance(take, CallEvent) and take.takes_discard(self.actor, self.last_dahai):
                candidates.append((take.priority, seat))

        if not candidates:
            return (self.actor + 1) % NUM_SEATS
        return min(candidates, key=lambda c: c[0])[1]

    def _end_kyoku(self):
        end_status = self.kyoku.end_status
        if isinstance(end_status, tenhou.Hora):
            for detail in end_status.details:
                ura = None
                if (self.include_ura_markers and self.kyoku.ura_indicators
                        and detail.who in self.reached):
                    ura = tuple(self.kyoku.ura_indicators)
                self._emit(Hora(
                    actor=detail.who,
                    target=detail.target,
                    deltas=tuple(detail.score_deltas),
                    ura_markers=ura,
                ))
        else:
            self._emit(Ryukyoku(deltas=tuple(end_status.score_deltas)))
        self._emit(EndKyoku())


def reconstruct_kyoku(kyoku: tenhou.Kyoku, include_ura_markers: bool = True) -> List[Event]:
    """Convert one kyoku into its ordered mjai events (start_kyoku..end_kyoku)."""
    return KyokuReconstructor(kyoku, include_ura_markers).run()
