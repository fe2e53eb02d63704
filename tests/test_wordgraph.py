import io

import pytest

from conftest import PREFIXES, base_words
from wordgraph import WordGraph, write_wordgraph
from errors import CorpusCorrupt


def test_build_with_1024_prefixes(make_graph):
    graph = make_graph()
    assert graph.n_words == 1025
    assert graph.n_prefixes == 1024
    assert graph.word(1) == "aaao"
    assert graph.prefix(0) == "aaa"
    assert graph.bucket(0) == [1]
    assert graph.bucket(1023) == [1024]


def test_build_with_1023_prefixes_fails():
    data = write_wordgraph(base_words(1023), {})
    with pytest.raises(CorpusCorrupt, match="not enough prefixes"):
        WordGraph.from_bytes(data)


def test_build_with_1025_prefixes_fails():
    data = write_wordgraph(base_words(1025), {})
    with pytest.raises(CorpusCorrupt, match="too many prefixes"):
        WordGraph.from_bytes(data)


def test_buckets_share_lowercased_prefix(make_graph):
    graph = make_graph(extra_words=["AAAbar", "aabzz"])
    assert graph.bucket(0) == [1, 1025]
    assert graph.bucket(1) == [2, 1026]
    assert graph.prefix(0) == "aaa"
    assert graph.prefix(1) == "aab"


def test_followers_decoded_on_demand(make_graph):
    graph = make_graph(followers={1: [2, 3, 4, 500], 0: [7]})
    assert graph.followers(1) == [2, 3, 4, 500]
    assert graph.followers(0) == [7]
    assert len(graph.followers(2)) == 0


def test_follower_line_with_spaces_is_kept(make_graph):
    # delta 32 encodes as a continuation byte with zero payload: a space
    graph = make_graph(followers={5: [33]})
    assert graph.followers_encoded(5) == b" A"
    assert graph.followers(5) == [33]


@pytest.mark.parametrize("header", [b"", b"abc\n", b"0\n", b"-4\n"])
def test_bad_header(header):
    with pytest.raises(CorpusCorrupt):
        WordGraph.build(io.BytesIO(header + b"aaao\n"))


def test_short_word_fails():
    words = base_words()
    words[10] = "ab"
    with pytest.raises(CorpusCorrupt, match="shorter"):
        WordGraph.from_bytes(write_wordgraph(words, {}))


def test_missing_follower_lines_fails():
    data = write_wordgraph(base_words(), {})
    truncated = b"".join(data.splitlines(keepends=True)[:-3])
    with pytest.raises(CorpusCorrupt):
        WordGraph.from_bytes(truncated)


def test_truncated_word_section_fails():
    data = b"1030\n" + b"\n".join(w.encode() for w in base_words()[:5]) + b"\n"
    with pytest.raises(CorpusCorrupt):
        WordGraph.from_bytes(data)


def test_huge_word_count_with_few_lines_fails():
    data = b"100000000000\n" + b"\n".join(w.encode() for w in base_words()[:5]) + b"\n"
    with pytest.raises(CorpusCorrupt, match="unexpected end of file"):
        WordGraph.from_bytes(data)


def test_load_from_file(corpus_file):
    path = corpus_file(followers={1: [2]})
    graph = WordGraph.load(str(path))
    assert graph.word(1024) == PREFIXES[1023] + "o"
    assert graph.followers(1) == [2]


def test_dump_lines(make_graph):
    graph = make_graph(followers={1: [2, 3]})
    lines = list(graph.dump(1, 3))
    assert lines[0] == "#1: aaao: A` [2, 3]"
    assert lines[1] == "#2: aabo:  []"
