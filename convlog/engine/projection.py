"""Project one seat's take and discard tables into event sequences."""

from typing import List, Sequence

from convlog.core.naki import decode_discard_naki, decode_take_naki
from convlog.core.tile import Pai
from convlog.engine.errors import InvariantViolation
from convlog.engine.event import Dahai, Event, Tsumo
from convlog.tenhou.log import ActionItem, ActionKind


def take_actions_to_events(actor: int, takes: Sequence[ActionItem]) -> List[Event]:
    """Tsumo for drawn tiles, chi/pon/daiminkan for call strings."""
    events = []
    for take in takes:
        if take.kind is ActionKind.TSUMOGIRI:
            raise InvariantViolation(actor=actor)
        if take.kind is ActionKind.PAI:
            events.append(Tsumo(actor=actor, pai=take.pai))
        else:
            events.append(decode_take_naki(actor, take.naki))
    return events


def discard_actions_to_events(actor: int, discards: Sequence[ActionItem]) -> List[Event]:
    """Dahai for discards, kakan/ankan/reach for call strings.

    Tsumogiri dahai keep pai UNKNOWN; the reconstructor fills them in once the
    preceding draw is known. Reach yields two events (reach, dahai).
    """
    events = []
    for discard in discards:
        if discard.kind is ActionKind.PAI:
            events.append(Dahai(actor=actor, pai=discard.pai, tsumogiri=False))
        elif discard.kind is ActionKind.TSUMOGIRI:
            events.append(Dahai(actor=actor, pai=Pai.UNKNOWN, tsumogiri=True))
        else:
            events.extend(decode_discard_naki(actor, discard.naki))
    return events
