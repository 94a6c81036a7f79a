from __future__ import annotations

from bisect import bisect_left
from typing import Sequence, Tuple, Union

from .models import NormalizedResponse, Sample, Window, WindowPair

WINDOW_SPAN_SECONDS = 24 * 3600

EMPTY_WINDOW = Window(start=None, end=None, samples=())


Epoch = Union[int, float]


def _slice(samples: Sequence[Sample], epochs: Sequence[Epoch], start: Epoch, end: Epoch) -> Tuple[Sample, ...]:
    lo = bisect_left(epochs, start)
    hi = bisect_left(epochs, end)
    return tuple(samples[lo:hi])


def extract_windows(response: NormalizedResponse) -> WindowPair:
    """Split ``response.samples`` into the 24 hours before and after the anchor.

    ``previous`` covers ``[anchor - 24h, anchor)`` and ``next`` covers
    ``[anchor, anchor + 24h)``. Samples are expected sorted by epoch, which
    :func:`normalize_response` guarantees. No anchor or no samples gives two
    empty windows.
    """
    anchor = response.anchor
    if anchor is None:
        return WindowPair(previous=EMPTY_WINDOW, next=EMPTY_WINDOW)
    now = anchor.epoch_seconds
    start_prev = now - WINDOW_SPAN_SECONDS
    end_next = now + WINDOW_SPAN_SECONDS
    samples = response.samples
    if not samples:
        return WindowPair(
            previous=Window(start=start_prev, end=now),
            next=Window(start=now, end=end_next),
        )
    epochs = [s.epoch_seconds for s in samples]
    return WindowPair(
        previous=Window(start=start_prev, end=now, samples=_slice(samples, epochs, start_prev, now)),
        next=Window(start=now, end=end_next, samples=_slice(samples, epochs, now, end_next)),
    )
