from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .project_constants import UNIT_DECIMALS

WORD_BITS = 256


@dataclass(frozen=True)
class DrawResult:
    token: str
    random_word: int
    winner_index: int
    winner: str
    amount: int
    entrants: Tuple[str, ...]


def to_tokens(raw_amount: int) -> float:
    return round(raw_amount / (10**UNIT_DECIMALS), 4)


def winner_index(random_word: int, entrant_count: int) -> int:
    # Plain modulo: slightly favours low indices when entrant_count does not
    # divide 2**256.
    return random_word % entrant_count


def pick_winner(random_words: Sequence[int], entrants: Sequence[str]) -> Tuple[int, str]:
    idx = winner_index(random_words[0], len(entrants))
    return idx, entrants[idx]


def derive_words(seed: str, token: str, count: int) -> List[int]:
    """Deterministic 256-bit words for (seed, token), one per requested word."""
    words: List[int] = []
    for i in range(count):
        digest = hashlib.sha256(f"{seed}|{token}|{i}".encode("utf-8")).hexdigest()
        words.append(int(digest, 16))
    return words
