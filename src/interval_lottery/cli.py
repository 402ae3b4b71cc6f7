from __future__ import annotations

import argparse
import hashlib
import logging
import time
from typing import List, Optional, Tuple

from .clock import ManualClock
from .config import Settings
from .draw import DrawResult, to_tokens
from .errors import LotteryError
from .lottery import Lottery
from .oracle import HttpCoordinator, LocalCoordinator
from .roster import address_from_bytes, load_roster
from .rpc import RpcClient
from .treasury import InMemoryTreasury
from .verify import LOCAL_SOURCE_PREFIX, build_audit, verify_audit, write_audit


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def demo_entrants(count: int, fee: int) -> List[Tuple[str, int]]:
    return [
        (address_from_bytes(hashlib.sha256(f"entrant-{i}".encode("utf-8")).digest()), fee)
        for i in range(count)
    ]


def _entries(args: argparse.Namespace, settings: Settings) -> List[Tuple[str, int]]:
    if args.roster:
        return load_roster(args.roster, default_amount=settings.entrance_fee)
    return demo_entrants(args.entrants, settings.entrance_fee)


def _open_round(
    settings: Settings, entries: List[Tuple[str, int]], oracle, clock: ManualClock
) -> Tuple[Lottery, InMemoryTreasury]:
    treasury = InMemoryTreasury()
    lottery = Lottery(settings.oracle_config(), oracle, treasury, clock=clock)
    for addr, paid in entries:
        lottery.enter(addr, paid)
    return lottery, treasury


def cmd_simulate(args: argparse.Namespace) -> int:
    settings = Settings.from_env(oracle_url_override=args.oracle_url)
    log = logging.getLogger("simulate")

    entries = _entries(args, settings)
    clock = ManualClock(start=time.time())

    rpc: Optional[RpcClient] = None
    if settings.oracle_url:
        rpc = RpcClient(settings.oracle_url, timeout_s=args.timeout)
        oracle = HttpCoordinator(rpc)
        seed_source = "rpc:lottery_getRequestStatus"
    else:
        oracle = LocalCoordinator(seed=args.seed)
        seed_source = f"{LOCAL_SOURCE_PREFIX}{args.seed}"

    try:
        lottery, treasury = _open_round(settings, entries, oracle, clock)
        log.info("Entries recorded   : %d", lottery.number_of_entrants)
        log.info("Pot                : %s", to_tokens(lottery.balance))

        clock.advance(settings.interval + 1)
        token = lottery.perform_upkeep()

        results: List[DrawResult] = []
        if isinstance(oracle, LocalCoordinator):
            results.append(oracle.fulfill(token))
        else:
            for _ in range(args.max_polls):
                results = oracle.pump()
                if results:
                    break
                time.sleep(args.poll_interval)
            else:
                raise SystemExit(f"Request {token} was not fulfilled after {args.max_polls} polls.")
    finally:
        if rpc is not None:
            rpc.close()

    result = results[0]

    audit = build_audit(result, settings.entrance_fee, seed_source)
    write_audit(audit, args.out)

    print("========================================")
    print("INTERVAL LOTTERY DRAW")
    print("========================================")
    print(f"Request token : {result.token}")
    print(f"Random word   : {result.random_word}")
    print(f"Entrants      : {len(result.entrants)}")
    print("----------------------------------------")
    print("WINNER")
    print(f"Address       : {result.winner}")
    print(f"Slot          : {result.winner_index}")
    print(f"Prize         : {to_tokens(result.amount)}")
    print(f"Paid out      : {to_tokens(treasury.total_paid)}")
    print("----------------------------------------")
    print(f"Wrote audit: {args.out}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    clock = ManualClock(start=0.0)
    lottery, _ = _open_round(settings, _entries(args, settings), LocalCoordinator(), clock)
    clock.advance(args.elapsed)

    eligible, diag = lottery.check_upkeep()
    print(f"Upkeep needed : {eligible}")
    print(f"Balance       : {to_tokens(diag.balance)}")
    print(f"Entrants      : {diag.entrant_count}")
    print(f"Phase         : {diag.phase.name}")
    print(f"Elapsed       : {args.elapsed}s of {settings.interval}s")
    return 0 if eligible else 1


def cmd_verify(args: argparse.Namespace) -> int:
    result = verify_audit(args.audit)
    print("AUDIT VERIFIED")
    print(f"Winner        : {result['winner']}")
    print(f"Slot          : {result['winner_index']}")
    print(f"Prize         : {to_tokens(result['amount'])}")
    print(f"Request token : {result['request_token']}")
    return 0


def _add_entry_source(p: argparse.ArgumentParser) -> None:
    p.add_argument("--roster", default=None, help="File with one address[,amount] per line.")
    p.add_argument(
        "--entrants", type=int, default=4, help="Number of demo entrants when no roster is given."
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="interval-lottery",
        description="Recurring fee-based lottery settled by an external randomness oracle.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("simulate", help="Run one full round and write an audit JSON.")
    _add_entry_source(s)
    s.add_argument("--seed", default="local", help="Seed for the local coordinator.")
    s.add_argument("--oracle-url", default=None, help="Remote coordinator URL (else local).")
    s.add_argument("--timeout", type=float, default=60.0, help="RPC timeout seconds.")
    s.add_argument("--poll-interval", type=float, default=2.0, help="Seconds between polls.")
    s.add_argument("--max-polls", type=int, default=30, help="Polls before giving up.")
    s.add_argument("--out", default="audit.json", help="Audit output JSON path.")
    s.set_defaults(func=cmd_simulate)

    c = sub.add_parser("check", help="Report whether a round built from entries may close.")
    _add_entry_source(c)
    c.add_argument("--elapsed", type=float, default=0.0, help="Seconds since the round opened.")
    c.set_defaults(func=cmd_check)

    v = sub.add_parser("verify", help="Verify an existing audit.json deterministically.")
    v.add_argument("--audit", required=True, help="Path to audit.json.")
    v.set_defaults(func=cmd_verify)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        code = args.func(args)
    except LotteryError as e:
        logging.getLogger("cli").error("%s", e)
        code = 2
    raise SystemExit(code)
