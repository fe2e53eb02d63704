# adjacency.py
# Compact printable encoding of ascending follower id lists.
#
#   input:                 [1, 2, 3, 5, 80]
#   subtract previous:     [1, 1, 1, 2, 75]
#   subtract 1:            [0, 0, 0, 1, 74]
#   contract zero runs:    [run(3), 1, 74]
#   encode:                b"bA*B"
#
# Run tokens are single bytes >= 0x60 holding (run length - 1) in the low
# 5 bits. Other deltas are base-32 varints, low bits first: continuation
# bytes are 0x20 | payload, the final byte is 0x40 | payload.

from typing import Iterable, Union

from errors import DecodeFault
from intvec import IntVec

RUN_FLAG = 0x60
CONTINUE_FLAG = 0x20
FINAL_FLAG = 0x40
PAYLOAD_MASK = 0x1F
MAX_RUN = PAYLOAD_MASK + 1


def decode(enc: Union[bytes, str]) -> IntVec:
    """Decode an encoded follower string into its ascending id list."""
    if isinstance(enc, str):
        try:
            enc = enc.encode("latin-1")
        except UnicodeEncodeError:
            raise DecodeFault(f"follower string {enc[:30]!r} is not a byte string") from None
    end = enc.find(b"\0")
    if end < 0:
        end = len(enc)

    dec = IntVec()
    pos = 0
    last_num = 0
    zero_run = 0
    while pos < end or zero_run:
        delta = 0
        if zero_run:
            zero_run -= 1
        elif enc[pos] >= RUN_FLAG:
            # this byte yields one value itself, zero_run more follow
            zero_run = enc[pos] & PAYLOAD_MASK
            pos += 1
        else:
            shift = 0
            while True:
                if pos >= end:
                    raise DecodeFault(f"truncated varint in follower string {enc[:end]!r}")
                val = enc[pos]
                pos += 1
                delta |= (val & PAYLOAD_MASK) << shift
                shift += 5
                if not val & CONTINUE_FLAG:
                    break
        last_num += delta + 1
        dec.append(last_num)
    return dec


def _write_varint(out: bytearray, value: int) -> None:
    while True:
        payload = value & PAYLOAD_MASK
        value >>= 5
        if value:
            out.append(CONTINUE_FLAG | payload)
        else:
            out.append(FINAL_FLAG | payload)
            return


def _write_run(out: bytearray, run: int) -> None:
    while run:
        chunk = min(run, MAX_RUN)
        out.append(RUN_FLAG | (chunk - 1))
        run -= chunk


def encode(values: Iterable[int]) -> bytes:
    """Encode strictly ascending positive ids; inverse of decode()."""
    out = bytearray()
    last_num = 0
    run = 0
    for v in values:
        delta = v - last_num - 1
        if delta < 0:
            raise ValueError(f"follower ids must be strictly ascending and positive, got {v} after {last_num}")
        last_num = v
        if delta == 0:
            run += 1
            continue
        _write_run(out, run)
        run = 0
        _write_varint(out, delta)
    _write_run(out, run)
    return bytes(out)
