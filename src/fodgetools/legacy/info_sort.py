from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, List, NamedTuple, Sequence, TypeVar

T = TypeVar("T")


class SortInfo(NamedTuple):
    items: List
    whence: List[int]
    whither: List[int]
    rank: List[int]
    unique: List[int]


def info_sort(items: Sequence[T], compare: Callable[[T, T], int]) -> SortInfo:
    """
    Stable sort under a three-way comparison, keeping track of positions.

    Returns
    -------
    SortInfo with
      items    the sorted items
      whence   whence[i] is the input position of items[i]
      whither  whither[j] is the sorted position of input item j
      rank     equality class of each sorted item, 0, 1, ... in order
      unique   unique[i] is the sorted position of the first item equal
               to items[i]
    """
    whence = sorted(range(len(items)), key=cmp_to_key(lambda i, j: compare(items[i], items[j])))
    out = [items[i] for i in whence]

    whither = [0] * len(items)
    for pos, i in enumerate(whence):
        whither[i] = pos

    rank: List[int] = []
    unique: List[int] = []
    r = -1
    first = 0
    for pos, x in enumerate(out):
        if pos == 0 or compare(out[pos - 1], x) != 0:
            r += 1
            first = pos
        rank.append(r)
        unique.append(first)

    return SortInfo(out, whence, whither, rank, unique)
