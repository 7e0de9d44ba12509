from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar, Union

from .address import Address

log = logging.getLogger("events")


@dataclass(frozen=True)
class Transfer:
    sender: Address
    recipient: Address
    value: int

    name = "Transfer"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "from": str(self.sender),
            "to": str(self.recipient),
            "value": str(self.value),  # big int; store as string for safety
        }


@dataclass(frozen=True)
class Approval:
    owner: Address
    spender: Address
    value: int

    name = "Approval"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "owner": str(self.owner),
            "spender": str(self.spender),
            "value": str(self.value),
        }


@dataclass(frozen=True)
class OwnershipTransferred:
    previous_owner: Optional[Address]
    new_owner: Optional[Address]

    name = "OwnershipTransferred"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "previous_owner": _opt_str(self.previous_owner),
            "new_owner": _opt_str(self.new_owner),
        }


Event = Union[Transfer, Approval, OwnershipTransferred]
Subscriber = Callable[[Event], None]
E = TypeVar("E", Transfer, Approval, OwnershipTransferred)


def _opt_str(a: Optional[Address]) -> Optional[str]:
    return str(a) if a is not None else None


def _opt_addr(s: Optional[str]) -> Optional[Address]:
    return Address.from_hex(s) if s is not None else None


def event_from_dict(d: Dict[str, Any]) -> Event:
    kind = d.get("event")
    if kind == Transfer.name:
        return Transfer(Address.from_hex(d["from"]), Address.from_hex(d["to"]), int(d["value"]))
    if kind == Approval.name:
        return Approval(
            Address.from_hex(d["owner"]), Address.from_hex(d["spender"]), int(d["value"])
        )
    if kind == OwnershipTransferred.name:
        return OwnershipTransferred(
            _opt_addr(d.get("previous_owner")), _opt_addr(d.get("new_owner"))
        )
    raise RuntimeError(f"Unknown event kind: {kind!r}")


class EventLog:
    """
    Append-only record of everything a ledger emitted, in emission order.
    Subscribers are called synchronously after each append.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def append(self, event: Event) -> None:
        self._events.append(event)
        for callback in list(self._subscribers):
            # The operation is already committed; a broken listener can't undo it.
            try:
                callback(event)
            except Exception:
                log.exception("Subscriber %r failed on %s", callback, event.name)

    def of_type(self, kind: Type[E]) -> List[E]:
        return [e for e in self._events if isinstance(e, kind)]

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, idx: int) -> Event:
        return self._events[idx]
