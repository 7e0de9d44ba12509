"""
Ledger failures.

Every rejected operation raises one of these before touching any table,
so a caught error always means "nothing happened".
"""

from __future__ import annotations

from typing import Any

from .address import Address


class LedgerError(RuntimeError):
    pass


class InsufficientBalance(LedgerError):
    def __init__(self, account: Address, balance: int, needed: int) -> None:
        super().__init__(
            f"Insufficient balance for {account}: balance={balance} needed={needed}"
        )
        self.account = account
        self.balance = balance
        self.needed = needed


class InsufficientAllowance(LedgerError):
    def __init__(
        self, owner: Address, spender: Address, allowance: int, needed: int
    ) -> None:
        super().__init__(
            f"Insufficient allowance {owner} -> {spender}: "
            f"allowance={allowance} needed={needed}"
        )
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed


class InvalidAddress(LedgerError):
    role = "address"

    def __init__(self, address: Address | None) -> None:
        super().__init__(f"Invalid {self.role}: {address}")
        self.address = address


class InvalidRecipient(InvalidAddress):
    role = "recipient"


class InvalidSender(InvalidAddress):
    role = "sender"


class InvalidSpender(InvalidAddress):
    role = "spender"


class InvalidApprover(InvalidAddress):
    role = "approver"


class InvalidOwner(InvalidAddress):
    role = "owner"


class ArithmeticOverflow(LedgerError):
    def __init__(self, value: int) -> None:
        super().__init__(f"Arithmetic overflow: {value} exceeds uint256")
        self.value = value


class InvalidAmount(LedgerError):
    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid amount: {value!r} (expected int in uint256 range)")
        self.value = value


class NotOwner(LedgerError):
    def __init__(self, caller: Address) -> None:
        super().__init__(f"Caller {caller} is not the owner")
        self.caller = caller
