# chain.py
# Constrained passphrase generation over a WordGraph.

import os
import struct
from typing import Callable, Iterator, List, NamedTuple

from errors import RandomSourceFault
from intvec import IntVec, intersect
from utils import PREFIX_SPACE, vlog


class Passphrase(NamedTuple):
    prefixes: List[str]
    word_ids: List[int]
    words: List[str]
    # per position: reached through a bigram link from the previous word
    linked: List[bool]
    # backward narrowing steps that had to be abandoned
    mismatches: int

    @property
    def password(self) -> str:
        return "".join(self.prefixes)


def random_prefix_ids(length: int, randbytes: Callable[[int], bytes] = os.urandom) -> List[int]:
    """Draw ``length`` prefix ids, one unsigned 32-bit value each, masked to the prefix space."""
    nbytes = 4 * length
    try:
        raw = randbytes(nbytes)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceFault(f"unable to get secure random numbers: {e}") from e
    if raw is None or len(raw) != nbytes:
        got = 0 if raw is None else len(raw)
        raise RandomSourceFault(f"unable to read random numbers: wanted {nbytes} bytes, got {got}")
    return [v & (PREFIX_SPACE - 1) for v in struct.unpack(f"<{length}I", raw)]


def narrow_backward(graph, word_sets: List[IntVec]) -> int:
    """
    Working backwards, keep only the words that link to some word of the
    next position. A position that would end up empty keeps its full set
    and counts as a mismatch. Returns the mismatch count.
    """
    mismatch = 0
    for i in range(len(word_sets) - 2, -1, -1):
        next_words = word_sets[i + 1]
        new_words = IntVec()
        for word in word_sets[i]:
            if len(intersect(next_words, graph.followers(word))):
                new_words.append(word)
        if len(new_words):
            word_sets[i] = new_words
        else:
            mismatch += 1
    return mismatch


def select_forward(graph, word_sets: List[IntVec], hook: int = 0):
    """
    Working forwards from ``hook``, pick the lowest linked id at each
    position, or the lowest candidate when no link exists.
    Returns (word_ids, linked).
    """
    chosen, linked = [], []
    last_word = hook
    for words in word_sets:
        common = intersect(words, graph.followers(last_word))
        # lowest id first: biases the phrase towards more common words
        last_word = (common if len(common) else words).get(0)
        chosen.append(last_word)
        linked.append(bool(len(common)))
    return chosen, linked


def generate(graph, length: int, hook: int = 0, randbytes: Callable[[int], bytes] = os.urandom) -> Passphrase:
    if length < 1:
        raise ValueError(f"chain length must be positive, got {length}")
    prefix_ids = random_prefix_ids(length, randbytes)
    word_sets = [graph.bucket(p).copy() for p in prefix_ids]

    mismatch = narrow_backward(graph, word_sets)
    word_ids, linked = select_forward(graph, word_sets, hook)
    if mismatch:
        vlog(f"{mismatch} position(s) without a bigram-consistent candidate")

    return Passphrase(
        prefixes=[graph.prefix(p) for p in prefix_ids],
        word_ids=word_ids,
        words=[graph.word(w) for w in word_ids],
        linked=linked,
        mismatches=mismatch,
    )


def generate_many(
    graph, length: int, count: int, hook: int = 0, randbytes: Callable[[int], bytes] = os.urandom
) -> Iterator[Passphrase]:
    """Yield ``count`` independent passphrases."""
    if count < 0:
        raise ValueError(f"passphrase count must not be negative, got {count}")
    for _ in range(count):
        yield generate(graph, length, hook, randbytes)
