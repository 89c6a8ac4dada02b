"""Game-level conversion - tenhou.net/6 log to mjai event stream."""

import logging
from typing import List, Optional

from convlog.engine.errors import ConvertError
from convlog.engine.event import EndGame, Event, StartGame
from convlog.engine.reconstruct import reconstruct_kyoku
from convlog.tenhou.log import Log

logger = logging.getLogger(__name__)


class ConvertConfig:
    """Conversion configuration."""

    def __init__(
        self,
        skip_failed_rounds: bool = False,  # drop a broken kyoku instead of aborting
        include_ura_markers: bool = True,  # ura indicators on hora after riichi
    ):
        self.skip_failed_rounds = skip_failed_rounds
        self.include_ura_markers = include_ura_markers


class ConvertResult:
    """Events of a converted game plus the kyoku that were skipped."""

    def __init__(self):
        self.events: List[Event] = []
        self.kyoku_events: List[tuple] = []  # (kyoku label, events) pairs
        self.skipped: List[tuple] = []  # (kyoku label, error) pairs

    @property
    def is_complete(self) -> bool:
        return not self.skipped


def convert_log(log: Log, config: Optional[ConvertConfig] = None) -> ConvertResult:
    """Convert a whole game, keeping per-kyoku results apart.

    Raises the first ConvertError unless config.skip_failed_rounds is set.
    """
    config = config or ConvertConfig()
    result = ConvertResult()

    result.events.append(StartGame(
        kyoku_first=int(log.game_length),
        aka_flag=log.has_aka,
        names=tuple(log.names),
    ))

    for kyoku in log.kyokus:
        try:
            events = reconstruct_kyoku(kyoku, config.include_ura_markers)
        except ConvertError as e:
            if not config.skip_failed_rounds:
                raise
            logger.warning("skipping kyoku %s: %s", kyoku.meta.label, e)
            result.skipped.append((kyoku.meta.label, e))
            continue
        result.kyoku_events.append((kyoku.meta.label, events))
        result.events.extend(events)

    result.events.append(EndGame())
    return result


def tenhou_to_mjai(log: Log, config: Optional[ConvertConfig] = None) -> List[Event]:
    """Transform a tenhou.net/6 log into mjai events, start_game to end_game."""
    return convert_log(log, config).events
