"""Sequence state: the revealed steps plus the finished flag."""

from typing import Literal, NotRequired, TypedDict


class StepDefinition(TypedDict):
    title: str
    description: NotRequired[str]


class RevealedStep(TypedDict):
    id: str  # Unique per reveal, also across resets.
    title: str
    description: str | None
    status: Literal["pending", "completed"]


class SequenceState(TypedDict):
    steps: list[RevealedStep]  # Reveal order. Only the last one is rendered.
    finished: bool


class CycleState(SequenceState, total=False):
    target: str  # Identifier the user confirmed.
    outcome: Literal["completed", "ignored"]
