from __future__ import annotations

import json
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from .address import ZERO_ADDRESS, Address
from .events import Transfer, event_from_dict
from .ledger import Ledger
from .project_constants import UINT256_MAX

TOOL_NAME = "corgi-token"
TOOL_VERSION = "1.0.0"


def build_audit(ledger: Ledger) -> Dict[str, Any]:
    owner = ledger.owner()
    balances = ledger.balances()
    return {
        "metadata": {
            "tool": TOOL_NAME,
            "version": TOOL_VERSION,
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "name": ledger.name(),
            "symbol": ledger.symbol(),
            "decimals": ledger.decimals(),
            "owner": str(owner) if owner is not None else None,
            "total_supply": str(ledger.total_supply()),  # big int; store as string for safety
        },
        # Deterministic order so anyone can diff two audits.
        "balances": [
            {"address": str(addr), "balance": str(bal)}
            for addr, bal in sorted(balances.items(), key=lambda x: str(x[0]))
        ],
        "events": [e.to_dict() for e in ledger.events],
    }


def write_audit(ledger: Ledger, out_path: str) -> Dict[str, Any]:
    audit = build_audit(ledger)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(audit, f, indent=2)
    return audit


def replay_transfers(audit: Dict[str, Any]) -> Tuple[Dict[Address, int], int]:
    """
    Rebuilds balances and supply purely from the Transfer events.
    Transfers from the zero address mint; transfers to it burn.
    """
    balances: Dict[Address, int] = defaultdict(int)
    supply = 0
    for i, raw in enumerate(audit["events"]):
        event = event_from_dict(raw)
        if not isinstance(event, Transfer):
            continue
        if event.value < 0 or event.value > UINT256_MAX:
            raise RuntimeError(f"Event {i}: Transfer value {event.value} outside uint256 range")
        if event.sender == ZERO_ADDRESS:
            supply += event.value
        else:
            balances[event.sender] -= event.value
            if balances[event.sender] < 0:
                raise RuntimeError(
                    f"Event {i}: {event.sender} balance went negative during replay"
                )
        if event.recipient == ZERO_ADDRESS:
            supply -= event.value
        else:
            balances[event.recipient] += event.value
    return {a: b for a, b in balances.items() if b}, supply


def verify_audit(audit_path: str) -> Dict[str, Any]:
    with open(audit_path, "r", encoding="utf-8") as f:
        audit = json.load(f)

    meta = audit["metadata"]
    total_supply = int(meta["total_supply"])
    expected = {Address.from_hex(e["address"]): int(e["balance"]) for e in audit["balances"]}
    negative = sorted(str(a) for a, b in expected.items() if b < 0)
    if negative:
        raise RuntimeError(f"Negative balance in audit snapshot for: {', '.join(negative)}")
    expected = {a: b for a, b in expected.items() if b}

    balances, supply = replay_transfers(audit)

    if supply != total_supply:
        raise RuntimeError(
            f"Total supply mismatch: audit={total_supply} recomputed={supply}"
        )
    if sum(balances.values()) != supply:
        raise RuntimeError(
            f"Balances do not sum to supply: sum={sum(balances.values())} supply={supply}"
        )
    if ZERO_ADDRESS in expected:
        raise RuntimeError("Zero address holds a balance in the audit snapshot.")
    if balances != expected:
        diff = sorted(
            str(a) for a in set(balances) | set(expected) if balances.get(a, 0) != expected.get(a, 0)
        )
        raise RuntimeError(f"Balance mismatch for: {', '.join(diff)}")

    return {
        "ok": True,
        "name": meta.get("name"),
        "symbol": meta.get("symbol"),
        "total_supply": supply,
        "holders": len(balances),
        "events": len(audit["events"]),
    }
