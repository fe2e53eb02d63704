# intvec.py
# Growable int sequence used as the currency of candidate word id sets.

from typing import Iterable, Iterator, List

from errors import IndexFault


class IntVec:
    """
    Ordered, growable sequence of ints:
      - append(v)
      - get(i) -> int, raising IndexFault outside [0, len)
      - copy() -> IntVec, independent of this one
    Word graph buckets and decoded follower lists are ascending by
    construction, which is what intersect() relies on.
    """

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[int] = ()):
        self._data: List[int] = list(values)

    def append(self, val: int) -> None:
        self._data.append(val)

    def get(self, pos: int) -> int:
        if pos < 0 or pos >= len(self._data):
            raise IndexFault(f"invalid vector index {pos} not in [0, {len(self._data)})")
        return self._data[pos]

    def copy(self) -> "IntVec":
        return IntVec(self._data)

    def tolist(self) -> List[int]:
        return list(self._data)

    def __getitem__(self, pos: int) -> int:
        return self.get(pos)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, IntVec):
            return self._data == other._data
        if isinstance(other, list):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return "[" + ", ".join(str(v) for v in self._data) + "]"


def intersect(a: IntVec, b: IntVec) -> IntVec:
    """Return the values common to ``a`` and ``b``. Both must be ascending."""
    ret = IntVec()
    ai = bi = 0
    a_len, b_len = len(a), len(b)
    while ai < a_len and bi < b_len:
        av, bv = a.get(ai), b.get(bi)
        if av == bv:
            ret.append(av)
            ai += 1
            bi += 1
        elif av < bv:
            ai += 1
        else:
            bi += 1
    return ret
