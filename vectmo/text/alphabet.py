"""Fixed 96-symbol ASCII alphabet with O(1) index lookups in both directions.

Symbol order:
- `'!'` through `'~'` (94 printable characters, in code-point order)
- `' '` (index 94)
- `'\\n'` (index 95)

Any other character is "unsupported": lookups return `INVALID_INDEX` and all
counting code silently skips it.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


SUPPORTED_CHARS: str = "".join(chr(code) for code in range(ord("!"), ord("~") + 1)) + " \n"
ALPHABET_SIZE: int = len(SUPPORTED_CHARS)
INVALID_INDEX: int = -1

IntArray = NDArray[np.int64]


def _build_lookup() -> IntArray:
    lookup = np.full(256, INVALID_INDEX, dtype=np.int64)
    for idx, char in enumerate(SUPPORTED_CHARS):
        lookup[ord(char)] = idx
    lookup.flags.writeable = False
    return lookup


_INDEX_BY_CODE: IntArray = _build_lookup()

if ALPHABET_SIZE != 96 or len(set(SUPPORTED_CHARS)) != ALPHABET_SIZE:
    raise RuntimeError("Supported alphabet must hold exactly 96 distinct symbols.")


def index_of(char: str) -> int:
    """Return the alphabet index of `char`, or `INVALID_INDEX` if unsupported."""

    if len(char) != 1:
        return INVALID_INDEX
    code = ord(char)
    if code >= 256:
        return INVALID_INDEX
    return int(_INDEX_BY_CODE[code])


def char_at(index: int) -> str | None:
    """Return the symbol stored at `index`, or `None` outside `[0, ALPHABET_SIZE)`."""

    idx = int(index)
    if idx < 0 or idx >= ALPHABET_SIZE:
        return None
    return SUPPORTED_CHARS[idx]


def is_supported(char: str) -> bool:
    return index_of(char) != INVALID_INDEX


def encode(text: str) -> IntArray:
    """Map every character of `text` to its alphabet index (`-1` if unsupported)."""

    if not text:
        return np.empty(0, dtype=np.int64)
    codes = np.fromiter((ord(c) for c in text), dtype=np.int64, count=len(text))
    indices = np.full(codes.shape, INVALID_INDEX, dtype=np.int64)
    in_table = codes < 256
    indices[in_table] = _INDEX_BY_CODE[codes[in_table]]
    return indices
