from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from .draw import DrawResult, derive_words, winner_index

LOCAL_SOURCE_PREFIX = "local:"


def build_audit(result: DrawResult, entrance_fee: int, seed_source: str) -> Dict[str, Any]:
    return {
        "metadata": {
            "tool": "interval-lottery",
            "version": "1.0.0",
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "request_token": result.token,
            "seed_source": seed_source,
            "random_word": str(result.random_word),  # big int; store as string
            "entrance_fee": entrance_fee,
            "entrant_count": len(result.entrants),
            "winner_index": result.winner_index,
        },
        "winner": {
            "address": result.winner,
            "amount": result.amount,
        },
        # Slot order matters: the index maps into this list.
        "all_entrants": list(result.entrants),
    }


def write_audit(audit: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(audit, f, indent=2)


def verify_audit(audit_path: str) -> Dict[str, Any]:
    with open(audit_path, "r", encoding="utf-8") as f:
        audit = json.load(f)

    meta = audit["metadata"]
    entrants = list(audit["all_entrants"])
    random_word = int(meta["random_word"])

    if len(entrants) != int(meta["entrant_count"]):
        raise RuntimeError(
            f"Entrant count mismatch: audit={meta['entrant_count']} recomputed={len(entrants)}"
        )
    if not entrants:
        raise RuntimeError("Audit lists no entrants.")

    # Local draws can be replayed from the seed; remote words are taken as given.
    source = str(meta["seed_source"])
    if source.startswith(LOCAL_SOURCE_PREFIX):
        seed = source[len(LOCAL_SOURCE_PREFIX):]
        expected_word = derive_words(seed, meta["request_token"], 1)[0]
        if expected_word != random_word:
            raise RuntimeError(
                f"Random word mismatch: audit={random_word} recomputed={expected_word}"
            )

    idx = winner_index(random_word, len(entrants))
    if idx != int(meta["winner_index"]):
        raise RuntimeError(
            f"Winner index mismatch: audit={meta['winner_index']} recomputed={idx}"
        )

    winner_expected = audit["winner"]["address"]
    if entrants[idx] != winner_expected:
        raise RuntimeError(
            f"Winner mismatch: audit={winner_expected} recomputed={entrants[idx]}"
        )

    pot = int(audit["winner"]["amount"])
    if pot < len(entrants) * int(meta["entrance_fee"]):
        raise RuntimeError(f"Payout {pot} is below the fees collected from {len(entrants)} entries")

    return {
        "ok": True,
        "request_token": meta["request_token"],
        "random_word": random_word,
        "winner": entrants[idx],
        "winner_index": idx,
        "amount": pot,
    }
