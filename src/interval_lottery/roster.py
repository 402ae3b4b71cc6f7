from __future__ import annotations

from typing import List, Tuple

import base58

from .project_constants import ADDRESS_BYTES


def is_valid_address(address: str) -> bool:
    try:
        raw = base58.b58decode(address)
    except ValueError:
        return False
    return len(raw) == ADDRESS_BYTES


def address_from_bytes(raw: bytes) -> str:
    if len(raw) != ADDRESS_BYTES:
        raise ValueError(f"Address must be {ADDRESS_BYTES} bytes, got {len(raw)}")
    return base58.b58encode(raw).decode("ascii")


def load_roster(path: str, default_amount: int) -> List[Tuple[str, int]]:
    """
    One entry per line: ``address`` or ``address,amount``.
    Blank lines and ``#`` comments are skipped. Order is kept (it decides
    which slot each entry gets); repeated addresses are separate entries.
    """
    out: List[Tuple[str, int]] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            w = line.split("#", 1)[0].strip()
            if not w:
                continue
            addr, _, amount = w.partition(",")
            addr = addr.strip()
            if not is_valid_address(addr):
                raise ValueError(f"{path}:{lineno}: not a valid address: {addr!r}")
            try:
                paid = int(amount.strip(), 0) if amount.strip() else default_amount
            except ValueError:
                raise ValueError(f"{path}:{lineno}: bad amount {amount.strip()!r}") from None
            out.append((addr, paid))
    return out
