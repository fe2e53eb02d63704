# --- utils.py ---

import time
from colorama import Fore, Style, init

init()

# Prefix length of each chain position
PREFIX_LEN = 3

# Number of distinct prefixes in a valid word graph (2**BITS_PER_WORD)
PREFIX_SPACE = 1024
BITS_PER_WORD = 10

# Command line defaults
DEFAULT_LENGTH = 5
DEFAULT_COUNT = 32
WORDGRAPH_PATH = "wordlist_bigrams.txt"

VERBOSE = False
start_time = None


def log_with_time(msg, color=Fore.LIGHTBLUE_EX):
    """Print ``msg`` with a timestamp."""
    global start_time
    if start_time is None:
        start_time = time.time()
    elapsed = time.time() - start_time
    mins = int(elapsed // 60)
    secs = elapsed % 60
    timestamp = Style.DIM + f"[{mins:02}:{secs:06.3f}]" + Style.RESET_ALL
    print(f"{timestamp} {color}{msg}{Style.RESET_ALL}", flush=True)

def vlog(msg, t0=None):
    if VERBOSE:
        if t0 is not None:
            elapsed = time.time() - t0
            log_with_time(f"{msg} (took {elapsed:.3f}s)")
        else:
            log_with_time(msg)

def colorize(text, color, enabled=True):
    if not enabled or not color:
        return text
    return f"{color}{text}{Style.RESET_ALL}"
