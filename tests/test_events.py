import logging

import pytest

from corgi_token.address import ZERO_ADDRESS
from corgi_token.events import (
    Approval,
    EventLog,
    OwnershipTransferred,
    Transfer,
    event_from_dict,
)


class TestEventLog:
    def test_subscribe_sees_operations(self, ledger, owner, addr1):
        seen = []
        unsubscribe = ledger.events.subscribe(seen.append)
        ledger.transfer(owner, addr1, 5)
        ledger.approve(owner, addr1, 9)
        unsubscribe()
        ledger.burn(owner, 1)
        assert seen == [Transfer(owner, addr1, 5), Approval(owner, addr1, 9)]

    def test_failed_operation_emits_nothing(self, ledger, owner, addr1):
        seen = []
        ledger.events.subscribe(seen.append)
        try:
            ledger.transfer(addr1, owner, 1)
        except RuntimeError:
            pass
        assert seen == []

    def test_broken_subscriber_does_not_undo(self, ledger, owner, addr1, caplog):
        def boom(event):
            raise ValueError("listener down")

        ledger.events.subscribe(boom)
        with caplog.at_level(logging.ERROR, logger="events"):
            assert ledger.transfer(owner, addr1, 5) is True
        assert ledger.balance_of(addr1) == 5
        assert "listener down" in caplog.text

    def test_of_type(self, ledger, owner, addr1):
        ledger.approve(owner, addr1, 1)
        assert ledger.events.of_type(Approval) == [Approval(owner, addr1, 1)]
        assert len(ledger.events.of_type(Transfer)) == 1

    def test_empty_log(self):
        log = EventLog()
        assert len(log) == 0
        assert list(log) == []


class TestEventDicts:
    def test_transfer_dict(self, make_address):
        e = Transfer(make_address(1), ZERO_ADDRESS, 10**30)
        d = e.to_dict()
        assert d["event"] == "Transfer"
        assert d["value"] == str(10**30)
        assert event_from_dict(d) == e

    def test_ownership_dict_with_renounce(self, make_address):
        e = OwnershipTransferred(make_address(1), None)
        assert e.to_dict()["new_owner"] is None
        assert event_from_dict(e.to_dict()) == e

    def test_unknown_kind(self):
        with pytest.raises(RuntimeError, match="Mint"):
            event_from_dict({"event": "Mint"})
