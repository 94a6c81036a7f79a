from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from weatherwindow.errors import ErrorKind

from .models import NormalizedResponse

LOADING_MESSAGE = "Fetching weather…"


@dataclass(frozen=True)
class Idle:
    displayed: Optional[NormalizedResponse] = None
    last_query: Optional[str] = None
    generation: int = 0
    status: str = ""


@dataclass(frozen=True)
class Loading:
    query: str
    silent: bool = False
    displayed: Optional[NormalizedResponse] = None
    last_query: Optional[str] = None
    generation: int = 0
    status: str = ""


@dataclass(frozen=True)
class Loaded:
    response: NormalizedResponse
    last_query: Optional[str] = None
    generation: int = 0
    status: str = ""

    @property
    def displayed(self) -> NormalizedResponse:
        return self.response


@dataclass(frozen=True)
class Failed:
    kind: ErrorKind
    status: str
    displayed: Optional[NormalizedResponse] = None
    last_query: Optional[str] = None
    generation: int = 0


ViewState = Union[Idle, Loading, Loaded, Failed]


def begin_fetch(state: ViewState, query: str, *, silent: bool = False) -> Loading:
    """Start a new fetch; the returned state carries the generation to complete it with."""
    return Loading(
        query=query,
        silent=silent,
        displayed=state.displayed,
        last_query=query,
        generation=state.generation + 1,
        status="" if silent else LOADING_MESSAGE,
    )


def complete_fetch(state: ViewState, response: NormalizedResponse, generation: int) -> ViewState:
    if generation != state.generation:
        return state
    return Loaded(response=response, last_query=state.last_query, generation=generation)


def fail_fetch(state: ViewState, kind: ErrorKind, message: str, generation: Optional[int] = None) -> ViewState:
    """Record a failure, keeping whatever was displayed before.

    ``generation=None`` marks a failure that happened before any request was
    dispatched (bad input, missing key, no position); it always applies.
    """
    if generation is not None and generation != state.generation:
        return state
    return Failed(
        kind=kind,
        status=message,
        displayed=state.displayed,
        last_query=state.last_query,
        generation=state.generation,
    )


def report_status(state: ViewState, message: str) -> ViewState:
    """Replace the status line without touching the displayed data."""
    return replace(state, status=message)
