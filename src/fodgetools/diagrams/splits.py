from __future__ import annotations

from functools import lru_cache
from typing import List, NamedTuple, Tuple

from fodgetools.errors import InvalidRequestError

FlavSplit = Tuple[int, ...]


class VertexSpec(NamedTuple):
    """A vertex to be attached: its order and the sizes of its traces."""

    order: int
    flav_split: FlavSplit


def _split_cost(s: int, n_legs: int) -> int:
    # splitting off an odd trace from an even number of legs forces a
    # second odd trace, so both are paid for at once
    return 4 if (s % 2 and n_legs % 2 == 0) else 2


@lru_cache(maxsize=None)
def _valid_flav_splits(order: int, n_legs: int, smallest_split: int) -> Tuple[FlavSplit, ...]:
    if order < 2:
        return ()
    splits: List[FlavSplit] = [(n_legs,)]
    if order == 2:
        return tuple(splits)

    for s in range(smallest_split, n_legs // 2 + 1):
        for rest in _valid_flav_splits(order - _split_cost(s, n_legs), n_legs - s, s):
            splits.append(tuple(sorted(rest + (s,))))
    return tuple(splits)


def valid_flav_splits(order: int, n_legs: int, smallest_split: int = 2) -> List[FlavSplit]:
    """
    Flavour splits a single vertex of the given order may carry.

    The unsplit trace (n_legs,) always comes first. Every further trace costs
    two powers of momentum, or four for an odd trace split off an even
    number of legs. No trace is smaller than smallest_split.

    Returns
    -------
    list of tuples, each sorted ascending and summing to n_legs
    """
    return list(_valid_flav_splits(order, n_legs, smallest_split))


def valid_vertices(order: int, n_legs: int) -> List[VertexSpec]:
    return [VertexSpec(order, fs) for fs in valid_flav_splits(order, n_legs)]


def parse_flav_splits(text: str) -> List[FlavSplit]:
    """
    Parse a whitespace separated list of comma separated splits.

    "2,2,4 3,5" gives [(2, 2, 4), (3, 5)].
    """
    out: List[FlavSplit] = []
    for token in text.split():
        try:
            parts = [int(x) for x in token.split(",") if x]
        except ValueError as exc:
            raise InvalidRequestError(f"bad flavour split {token!r}") from exc
        if not parts or any(x <= 0 for x in parts):
            raise InvalidRequestError(f"bad flavour split {token!r}")
        out.append(tuple(sorted(parts)))
    return out
