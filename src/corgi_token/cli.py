from __future__ import annotations

import argparse
import logging

from .audit import verify_audit, write_audit
from .config import Settings
from .errors import LedgerError
from .ledger import Ledger
from .operations import apply_operation, load_operations
from .units import format_tokens


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def create_ledger(settings: Settings) -> Ledger:
    return Ledger(
        name=settings.name,
        symbol=settings.symbol,
        initial_supply=settings.initial_supply,
        initial_holder=settings.owner,
    )


def cmd_info(args: argparse.Namespace) -> int:
    settings = Settings.from_env(owner_override=args.owner, supply_override=args.supply)
    print(f"Name          : {settings.name}")
    print(f"Symbol        : {settings.symbol}")
    print(f"Initial supply: {format_tokens(settings.initial_supply)} ({settings.initial_supply} raw)")
    print(f"Owner         : {settings.owner}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    settings = Settings.from_env(owner_override=args.owner, supply_override=args.supply)
    log = logging.getLogger("run")

    operations = load_operations(args.script)
    log.info("Operations loaded : %d", len(operations))

    try:
        ledger = create_ledger(settings)
    except LedgerError as e:
        raise SystemExit(f"Cannot create ledger: {e}")
    status = 0
    applied = 0
    for i, operation in enumerate(operations):
        try:
            apply_operation(ledger, operation)
        except LedgerError as e:
            log.error("Operation %d rejected: %s", i, operation.describe())
            log.error("%s: %s", type(e).__name__, e)
            status = 1
            break
        applied += 1
    log.info("Operations applied: %d", applied)

    write_audit(ledger, args.out)

    print("========================================")
    print(f"{ledger.name()} ({ledger.symbol()}) LEDGER")
    print("========================================")
    print(f"Total supply  : {format_tokens(ledger.total_supply())}")
    print(f"Holders       : {len(ledger.balances())}")
    print(f"Events        : {len(ledger.events)}")
    print("----------------------------------------")
    print(f"Wrote audit: {args.out}")
    return status


def cmd_verify(args: argparse.Namespace) -> int:
    result = verify_audit(args.audit)
    print("AUDIT VERIFIED")
    print(f"Token         : {result['name']} ({result['symbol']})")
    print(f"Total supply  : {format_tokens(result['total_supply'])}")
    print(f"Holders       : {result['holders']}")
    print(f"Events        : {result['events']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="corgi-token",
        description="Fixed-supply fungible token ledger.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--owner", default=None, help="Override TOKEN_OWNER (else use env).")
    p.add_argument(
        "--supply", default=None, help="Override TOKEN_INITIAL_SUPPLY in whole tokens."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    i = sub.add_parser("info", help="Show the configured token parameters.")
    i.set_defaults(func=cmd_info)

    r = sub.add_parser("run", help="Apply an operations script and write an audit JSON.")
    r.add_argument("--script", required=True, help="Path to operations JSON.")
    r.add_argument("--out", default="audit.json", help="Audit output JSON path.")
    r.set_defaults(func=cmd_run)

    v = sub.add_parser("verify", help="Replay an existing audit.json and check it.")
    v.add_argument("--audit", required=True, help="Path to audit.json.")
    v.set_defaults(func=cmd_verify)

    return p


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.verbose)
    raise SystemExit(args.func(args))
