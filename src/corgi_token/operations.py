from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .address import Address
from .ledger import Ledger
from .units import parse_tokens

log = logging.getLogger("operations")


@dataclass(frozen=True)
class Operation:
    op: str
    caller: Address
    args: Dict[str, Any]

    def describe(self) -> str:
        parts = ", ".join(f"{k}={v}" for k, v in self.args.items())
        return f"{self.op}(caller={self.caller}, {parts})"


# op name -> (address arguments, takes an amount)
OPERATIONS: Dict[str, tuple] = {
    "transfer": (("to",), True),
    "approve": (("spender",), True),
    "transfer_from": (("from", "to"), True),
    "burn": ((), True),
    "burn_from": (("account",), True),
    "transfer_ownership": (("new_owner",), False),
    "renounce_ownership": ((), False),
}


def _parse_amount(item: Dict[str, Any]) -> int:
    if "amount" in item:
        raw = item["amount"]
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise RuntimeError(f"amount must be an integer or digit string, got {raw!r}")
        try:
            return int(raw)
        except ValueError as e:
            raise RuntimeError(f"amount is not an integer: {raw!r}") from e
    if "tokens" in item:
        try:
            return parse_tokens(str(item["tokens"]))
        except ValueError as e:
            raise RuntimeError(str(e)) from e
    raise RuntimeError("Operation needs 'amount' (raw units) or 'tokens'.")


def parse_operation(item: Dict[str, Any]) -> Operation:
    """
    Accepts e.g.
      {"op": "transfer", "caller": "0x..", "to": "0x..", "amount": "50000000000000000000"}
      {"op": "burn", "caller": "0x..", "tokens": "1000"}
    """
    if not isinstance(item, dict):
        raise RuntimeError(f"Operation must be a JSON object, got {item!r}")
    name = item.get("op")
    if name not in OPERATIONS:
        raise RuntimeError(f"Unknown op {name!r}. Expected one of: {', '.join(OPERATIONS)}")
    addr_fields, has_amount = OPERATIONS[name]

    try:
        caller = Address.from_hex(item["caller"])
        args: Dict[str, Any] = {f: Address.from_hex(item[f]) for f in addr_fields}
    except KeyError as e:
        raise RuntimeError(f"{name}: missing field {e}") from e
    except ValueError as e:
        raise RuntimeError(f"{name}: {e}") from e
    except (AttributeError, TypeError) as e:
        raise RuntimeError(f"{name}: addresses must be 0x hex strings") from e

    if has_amount:
        args["amount"] = _parse_amount(item)
    return Operation(op=name, caller=caller, args=args)


def load_operations(path: str) -> List[Operation]:
    """
    Supports:
    1) A JSON list of operation objects
    2) {"operations": [...]}
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            j = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Operations file is not valid JSON: {e}") from e

    if isinstance(j, dict) and isinstance(j.get("operations"), list):
        j = j["operations"]
    if not isinstance(j, list):
        raise RuntimeError(
            "Could not find operations in file. Expected a JSON list or {\"operations\": [...]}."
        )
    return [parse_operation(item) for item in j]


def apply_operation(ledger: Ledger, operation: Operation) -> Any:
    a = operation.args
    dispatch: Dict[str, Callable[[], Any]] = {
        "transfer": lambda: ledger.transfer(operation.caller, a["to"], a["amount"]),
        "approve": lambda: ledger.approve(operation.caller, a["spender"], a["amount"]),
        "transfer_from": lambda: ledger.transfer_from(
            operation.caller, a["from"], a["to"], a["amount"]
        ),
        "burn": lambda: ledger.burn(operation.caller, a["amount"]),
        "burn_from": lambda: ledger.burn_from(operation.caller, a["account"], a["amount"]),
        "transfer_ownership": lambda: ledger.transfer_ownership(
            operation.caller, a["new_owner"]
        ),
        "renounce_ownership": lambda: ledger.renounce_ownership(operation.caller),
    }
    log.debug("Applying %s", operation.describe())
    return dispatch[operation.op]()
