import os
import sys
import struct
import itertools
import string

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest

from wordgraph import WordGraph, write_wordgraph

# First 1024 three-letter prefixes: aaa, aab, ..., bnj
PREFIXES = ["".join(t) for t in itertools.islice(itertools.product(string.ascii_lowercase, repeat=3), 1025)]


def base_words(n_prefixes=1024):
    """One word per prefix; word id i has prefix PREFIXES[i - 1]."""
    return [p + "o" for p in PREFIXES[:n_prefixes]]


def fixed_random(*prefix_ids):
    """Stand-in for os.urandom returning the given 32-bit values."""
    data = struct.pack(f"<{len(prefix_ids)}I", *prefix_ids)

    def randbytes(n):
        assert n == len(data)
        return data

    return randbytes


@pytest.fixture
def make_graph():
    def _make(extra_words=(), followers=None, n_prefixes=1024):
        words = base_words(n_prefixes) + list(extra_words)
        return WordGraph.from_bytes(write_wordgraph(words, followers or {}))
    return _make


@pytest.fixture
def corpus_file(tmp_path):
    def _write(extra_words=(), followers=None):
        path = tmp_path / "wordlist_bigrams.txt"
        path.write_bytes(write_wordgraph(base_words() + list(extra_words), followers or {}))
        return path
    return _write
