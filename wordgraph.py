# wordgraph.py
# Dictionary, encoded follower lists and the prefix bucket table.

import io
from typing import BinaryIO, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from adjacency import decode, encode
from errors import CorpusCorrupt
from intvec import IntVec
from utils import PREFIX_LEN, PREFIX_SPACE


def _readline(stream: BinaryIO) -> bytes:
    """Read one line and strip only its trailing newline."""
    line = stream.readline()
    if not line:
        raise CorpusCorrupt("corrupted wordgraph file: unexpected end of file")
    if line.endswith(b"\n"):
        line = line[:-1]
    return line


class WordGraph:
    """
    Read-only word graph:
      - WordGraph.build(stream) / load(path) / from_bytes(data) -> WordGraph
      - word(id), followers_encoded(id), followers(id)
      - bucket(prefix_id), prefix(prefix_id)
    Word id 0 is the sentinel; real words are 1..n_words-1. Prefix buckets
    are numbered in the order their prefix was first seen.
    """

    __slots__ = ("_words", "_followers", "_prefixes", "_buckets")

    def __init__(
        self,
        words: List[Optional[str]],
        followers: List[bytes],
        prefixes: List[str],
        buckets: List[IntVec],
    ):
        self._words = words
        self._followers = followers
        self._prefixes = prefixes
        self._buckets = buckets

    # ---------- Construction ----------
    @classmethod
    def build(cls, stream: BinaryIO) -> "WordGraph":
        """
        Parse a word graph from a binary stream. Raises CorpusCorrupt on any
        structural problem; nothing is deferred to generation time.
        """
        header = stream.readline()
        try:
            n_words = int(header.strip())
        except ValueError:
            raise CorpusCorrupt(f"corrupted wordgraph file: bad word count {header[:40]!r}") from None
        if n_words < 1:
            raise CorpusCorrupt(f"corrupted wordgraph file: bad word count {n_words}")

        words: List[Optional[str]] = [None]
        prefixes: List[str] = []
        buckets: List[IntVec] = []
        prefix_index: Dict[str, int] = {}

        for i in range(1, n_words):
            raw = _readline(stream)
            try:
                word = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise CorpusCorrupt(f"corrupted wordgraph file: word #{i} is not UTF-8") from None
            if len(word) < PREFIX_LEN:
                raise CorpusCorrupt(f"corrupted wordgraph file: word #{i} {word!r} is shorter than {PREFIX_LEN}")
            words.append(word)

            prefix = word[:PREFIX_LEN].lower()
            idx = prefix_index.get(prefix)
            if idx is None:
                if len(prefixes) == PREFIX_SPACE:
                    raise CorpusCorrupt("corrupted wordgraph file: too many prefixes")
                idx = len(prefixes)
                prefix_index[prefix] = idx
                prefixes.append(prefix)
                buckets.append(IntVec())
            buckets[idx].append(i)

        if len(prefixes) != PREFIX_SPACE:
            raise CorpusCorrupt(
                f"corrupted wordgraph file: not enough prefixes ({len(prefixes)} of {PREFIX_SPACE})"
            )

        followers: List[bytes] = []
        for _ in range(n_words):
            followers.append(_readline(stream))
        return cls(words, followers, prefixes, buckets)

    @classmethod
    def from_bytes(cls, data: bytes) -> "WordGraph":
        return cls.build(io.BytesIO(data))

    @classmethod
    def load(cls, path: str) -> "WordGraph":
        with open(path, "rb") as f:
            return cls.build(f)

    # ---------- Queries ----------
    @property
    def n_words(self) -> int:
        """Word count including the sentinel."""
        return len(self._words)

    def word(self, word_id: int) -> Optional[str]:
        return self._words[word_id]

    def iter_words(self) -> Iterator[tuple]:
        """Yield (id, text) for every real word in id order."""
        for i in range(1, len(self._words)):
            yield i, self._words[i]

    def followers_encoded(self, word_id: int) -> bytes:
        return self._followers[word_id]

    def followers(self, word_id: int) -> IntVec:
        """Decode the follower list of ``word_id``. Not cached."""
        return decode(self._followers[word_id])

    def bucket(self, prefix_id: int) -> IntVec:
        return self._buckets[prefix_id]

    def prefix(self, prefix_id: int) -> str:
        return self._prefixes[prefix_id]

    @property
    def n_prefixes(self) -> int:
        return len(self._prefixes)

    # ---------- Debugging ----------
    def dump(self, start: int, stop: int) -> Iterator[str]:
        """Yield one debug line per word id in [start, stop)."""
        stop = min(stop, len(self._words))
        for i in range(max(start, 0), stop):
            enc = self._followers[i][:30].decode("latin-1")
            yield f"#{i}: {self._words[i]}: {enc} {self.followers(i)!r}"


def write_wordgraph(words: Sequence[str], followers: Mapping[int, Iterable[int]]) -> bytes:
    """
    Serialise ``words`` (assigned ids 1..len(words)) and their follower ids
    into the format WordGraph.build() reads. Ids missing from ``followers``
    get an empty follower list; id 0 is the sentinel's line.
    """
    n_words = len(words) + 1
    lines = [str(n_words).encode("ascii")]
    lines.extend(w.encode("utf-8") for w in words)
    for i in range(n_words):
        lines.append(encode(sorted(set(followers.get(i, ())))))
    return b"\n".join(lines) + b"\n"
