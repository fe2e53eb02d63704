import argparse
import time
import requests
from colorama import Fore, Style
import utils
from utils import (
    BITS_PER_WORD,
    DEFAULT_COUNT,
    DEFAULT_LENGTH,
    PREFIX_LEN,
    WORDGRAPH_PATH,
    colorize,
    log_with_time,
    vlog,
)
from errors import PassphraseError
from wordgraph import WordGraph
from fuzzy import find_nearest
from chain import generate_many


def load_wordgraph(location=WORDGRAPH_PATH):
    """Load the word graph from a local path or an http(s) URL."""
    t0 = time.time()
    if location.startswith(("http://", "https://")):
        vlog(f"⟳ Downloading word graph from {location}…")
        resp = requests.get(location, timeout=30)
        resp.raise_for_status()
        graph = WordGraph.from_bytes(resp.content)
    else:
        vlog(f"⟳ Loading word graph from {location}…")
        graph = WordGraph.load(location)
    vlog(f"Word graph loaded ({graph.n_words - 1} words, {graph.n_prefixes} prefixes)", t0)
    return graph


def parse_positionals(values, graph=None):
    """
    Interpret positional arguments: the first positive integer is the chain
    length, the second the passphrase count; anything else is a hook word
    (resolved against ``graph``, the last one wins).
    Returns (length, count, hook_id).
    """
    length = count = 0
    hook = 0
    for value in values:
        try:
            number = int(value)
        except ValueError:
            number = 0
        if length == 0:
            if number > 0:
                length = number
                continue
        elif count == 0:
            if number > 0:
                count = number
                continue
        if graph is not None:
            hook = find_nearest(graph, value)
    return length or DEFAULT_LENGTH, count or DEFAULT_COUNT, hook


def parse_range(text):
    start, _, stop = text.partition(":")
    try:
        return int(start), int(stop)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START:STOP, got {text!r}") from None


def print_header(graph, length, count, hook=0):
    pass_len = length * PREFIX_LEN
    print(f"Generating {count} passwords with {length * BITS_PER_WORD} bits of entropy")
    if hook:
        print(f"    hook: {graph.word(hook)}")
    print(f"{'Password':<{pass_len}}    Mnemonic")
    print("-" * pass_len + "    " + "-" * (length * 4))


def format_passphrase(phrase, hook_word=None, color=True):
    """Render one table row: prefixes, then the (optional) hook and the words."""
    line = colorize(phrase.password, Fore.GREEN, color) + "   "
    if hook_word:
        line += " " + colorize(hook_word, Fore.YELLOW, color)
    for word, linked in zip(phrase.words, phrase.linked):
        line += " " + (word if linked else colorize(word, Style.DIM, color))
    return line


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate memorable passphrases from bigram-linked words",
        epilog="Usage: <number of bits/10> <number of passwords> <start word>",
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="ARG",
        help=f"Chain length (default: {DEFAULT_LENGTH}), passphrase count (default: {DEFAULT_COUNT}), hook word",
    )
    parser.add_argument(
        "--wordgraph", type=str, default=WORDGRAPH_PATH, help=f"Path or URL of the word graph (default: {WORDGRAPH_PATH})"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--dump", type=parse_range, default=None, metavar="START:STOP", help="Print words and decoded followers for ids in [START, STOP) and exit"
    )
    return parser


def run_passgen(argv=None):
    args = build_parser().parse_args(argv)

    utils.start_time = time.time()
    utils.VERBOSE = args.verbose
    color = not args.no_color

    try:
        graph = load_wordgraph(args.wordgraph)
    except FileNotFoundError:
        log_with_time(f"Unable to open {args.wordgraph}", color=Fore.RED)
        return 1
    except (PassphraseError, OSError, requests.RequestException) as e:
        log_with_time(f"Error loading word graph: {e}", color=Fore.RED)
        return 1

    if args.dump:
        start, stop = args.dump
        for line in graph.dump(start, stop):
            print(line)
        return 0

    length, count, hook = parse_positionals(args.args, graph)
    hook_word = graph.word(hook) if hook else None

    print_header(graph, length, count, hook)
    t0 = time.time()
    mismatches = 0
    done = 0
    try:
        for phrase in generate_many(graph, length, count, hook):
            mismatches += phrase.mismatches
            print(format_passphrase(phrase, hook_word, color), flush=True)
            done += 1
    except PassphraseError as e:
        log_with_time(f"Generation failed, table incomplete ({done} of {count} passwords): {e}", color=Fore.RED)
        return 1
    vlog(f"Generated {count} passphrase(s), {mismatches} unlinked position(s)", t0)
    return 0


def main():
    raise SystemExit(run_passgen())
