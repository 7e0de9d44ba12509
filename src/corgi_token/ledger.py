from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Tuple

from .address import ZERO_ADDRESS, Address
from .errors import (
    ArithmeticOverflow,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAmount,
    InvalidApprover,
    InvalidOwner,
    InvalidRecipient,
    InvalidSender,
    InvalidSpender,
    NotOwner,
)
from .events import Approval, EventLog, OwnershipTransferred, Transfer
from .project_constants import INFINITE_ALLOWANCE, TOKEN_DECIMALS, UINT256_MAX

log = logging.getLogger("ledger")


def check_amount(amount: Any) -> int:
    # bool is an int subclass; True is not an amount.
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(amount)
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmount(amount)
    return amount


def checked_add(a: int, b: int) -> int:
    c = a + b
    if c > UINT256_MAX:
        raise ArithmeticOverflow(c)
    return c


class Ledger:
    """
    Balances, allowances and total supply of a single fungible token.

    The whole supply is minted to `initial_holder` at construction, who also
    becomes the owner. After that the tables change only through transfer,
    approve, transfer_from, burn and burn_from. Each mutation validates
    everything first and then applies under the ledger lock, so a raised
    LedgerError always leaves the state untouched.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        initial_supply: int,
        initial_holder: Address,
    ) -> None:
        if initial_holder.is_zero:
            raise InvalidRecipient(initial_holder)
        if isinstance(initial_supply, int) and initial_supply > UINT256_MAX:
            raise ArithmeticOverflow(initial_supply)
        supply = check_amount(initial_supply)

        self._name = name
        self._symbol = symbol
        self._lock = threading.RLock()
        self._balances: Dict[Address, int] = {}
        self._allowances: Dict[Tuple[Address, Address], int] = {}
        self._total_supply = 0
        self._owner: Optional[Address] = initial_holder
        self.events = EventLog()

        self.events.append(OwnershipTransferred(ZERO_ADDRESS, initial_holder))
        self._mint(initial_holder, supply)
        log.debug("Created %s (%s) supply=%d holder=%s", name, symbol, supply, initial_holder)

    # Queries

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def decimals(self) -> int:
        return TOKEN_DECIMALS

    def total_supply(self) -> int:
        with self._lock:
            return self._total_supply

    def balance_of(self, account: Address) -> int:
        with self._lock:
            return self._balances.get(account, 0)

    def allowance(self, owner: Address, spender: Address) -> int:
        with self._lock:
            return self._allowances.get((owner, spender), 0)

    def owner(self) -> Optional[Address]:
        with self._lock:
            return self._owner

    def balances(self) -> Dict[Address, int]:
        """Snapshot of all nonzero balances."""
        with self._lock:
            return {a: b for a, b in self._balances.items() if b}

    # Mutations

    def transfer(self, caller: Address, to: Address, amount: int) -> bool:
        amount = check_amount(amount)
        with self._lock:
            self._move(caller, to, amount)
        return True

    def approve(self, caller: Address, spender: Address, amount: int) -> bool:
        amount = check_amount(amount)
        if caller.is_zero:
            raise InvalidApprover(caller)
        if spender.is_zero:
            raise InvalidSpender(spender)
        with self._lock:
            self._allowances[(caller, spender)] = amount
            self.events.append(Approval(caller, spender, amount))
        log.debug("Approve %s -> %s: %d", caller, spender, amount)
        return True

    def transfer_from(
        self, caller: Address, sender: Address, to: Address, amount: int
    ) -> bool:
        amount = check_amount(amount)
        if to.is_zero:
            raise InvalidRecipient(to)
        with self._lock:
            remaining = self._check_allowance(sender, caller, amount)
            self._check_move(sender, to, amount)
            self._allowances[(sender, caller)] = remaining
            self._move(sender, to, amount)
        return True

    def burn(self, caller: Address, amount: int) -> bool:
        amount = check_amount(amount)
        with self._lock:
            self._burn(caller, amount)
        return True

    def burn_from(self, caller: Address, account: Address, amount: int) -> bool:
        amount = check_amount(amount)
        with self._lock:
            remaining = self._check_allowance(account, caller, amount)
            self._check_debit(account, amount)
            self._allowances[(account, caller)] = remaining
            self._burn(account, amount)
        return True

    def transfer_ownership(self, caller: Address, new_owner: Address) -> None:
        if new_owner.is_zero:
            raise InvalidOwner(new_owner)
        with self._lock:
            self._set_owner(caller, new_owner)

    def renounce_ownership(self, caller: Address) -> None:
        with self._lock:
            self._set_owner(caller, None)

    # Internals; callers hold the lock

    def _check_debit(self, account: Address, amount: int) -> int:
        if account.is_zero:
            raise InvalidSender(account)
        balance = self._balances.get(account, 0)
        if balance < amount:
            raise InsufficientBalance(account, balance, amount)
        return balance - amount

    def _check_move(self, sender: Address, to: Address, amount: int) -> None:
        if to.is_zero:
            raise InvalidRecipient(to)
        self._check_debit(sender, amount)
        if sender != to:
            checked_add(self._balances.get(to, 0), amount)

    def _check_allowance(self, owner: Address, spender: Address, amount: int) -> int:
        current = self._allowances.get((owner, spender), 0)
        if current == INFINITE_ALLOWANCE:
            return current
        if current < amount:
            raise InsufficientAllowance(owner, spender, current, amount)
        return current - amount

    def _move(self, sender: Address, to: Address, amount: int) -> None:
        self._check_move(sender, to, amount)
        self._balances[sender] = self._balances.get(sender, 0) - amount
        self._balances[to] = self._balances.get(to, 0) + amount
        self.events.append(Transfer(sender, to, amount))
        log.debug("Transfer %s -> %s: %d", sender, to, amount)

    def _mint(self, to: Address, amount: int) -> None:
        supply = checked_add(self._total_supply, amount)
        balance = checked_add(self._balances.get(to, 0), amount)
        self._total_supply = supply
        self._balances[to] = balance
        self.events.append(Transfer(ZERO_ADDRESS, to, amount))

    def _burn(self, account: Address, amount: int) -> None:
        self._balances[account] = self._check_debit(account, amount)
        self._total_supply -= amount
        self.events.append(Transfer(account, ZERO_ADDRESS, amount))
        log.debug("Burn %s: %d (supply=%d)", account, amount, self._total_supply)

    def _set_owner(self, caller: Address, new_owner: Optional[Address]) -> None:
        if self._owner is None or caller != self._owner:
            raise NotOwner(caller)
        previous = self._owner
        self._owner = new_owner
        self.events.append(OwnershipTransferred(previous, new_owner))
        log.info("Ownership %s -> %s", previous, new_owner)
