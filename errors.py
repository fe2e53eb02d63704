# errors.py
# Failure conditions of the word graph engine. Bigram mismatches are not
# errors: they are counted on the Passphrase instead.


class PassphraseError(Exception):
    """Base class for every fatal condition raised by this package."""


class CorpusCorrupt(PassphraseError):
    """The word graph file is structurally invalid."""


class DecodeFault(PassphraseError):
    """An encoded follower string is malformed."""


class RandomSourceFault(PassphraseError):
    """The secure random source failed or returned a short read."""


class IndexFault(PassphraseError, IndexError):
    """Access outside the populated range of an IntVec."""
