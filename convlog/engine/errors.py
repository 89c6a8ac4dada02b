"""Conversion errors. All of them abort the kyoku being converted."""

from typing import Optional


class ConvertError(Exception):
    """Base class for every failure raised while converting a log."""
    pass


class DecodeError(ConvertError):
    """A tile code, call string or container field could not be decoded."""

    def __init__(self, text: str, reason: str = "invalid encoding"):
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class InsufficientData(ConvertError):
    """A take, discard or dora indicator sequence ran out too early.

    sequence is one of "takes", "discards" or "dora".
    """

    def __init__(self, sequence: str, kyoku: int, honba: int,
                 actor: Optional[int] = None):
        self.sequence = sequence
        self.kyoku = kyoku
        self.honba = honba
        self.actor = actor
        msg = (f"insufficient {sequence} sequence size: "
               f"at kyoku={kyoku} honba={honba}")
        if actor is not None:
            msg += f" for actor={actor}"
        super().__init__(msg)


class InvariantViolation(ConvertError):
    """The input tables break a structural rule of the format."""

    def __init__(self, message: str = "tsumogiri should not exist in take table",
                 actor: Optional[int] = None):
        self.actor = actor
        if actor is not None:
            message = f"{message} (actor={actor})"
        super().__init__(message)
