from decimal import Decimal

import pytest

from corgi_token.project_constants import INITIAL_SUPPLY, UINT256_MAX
from corgi_token.units import format_tokens, parse_tokens, to_tokens


class TestUnits:
    def test_to_tokens(self):
        assert to_tokens(50 * 10**18) == Decimal(50)
        assert to_tokens(5 * 10**17) == Decimal("0.5")
        assert to_tokens(INITIAL_SUPPLY + 1) == Decimal("100000000000.000000000000000001")

    def test_format_tokens(self):
        assert format_tokens(INITIAL_SUPPLY) == "100,000,000,000"
        assert format_tokens(1) == "0.000000000000000001"
        assert format_tokens(1_500_000_000_000_000_000) == "1.5"

    def test_parse_tokens(self):
        assert parse_tokens("50") == 50 * 10**18
        assert parse_tokens("0.5") == 5 * 10**17
        assert parse_tokens("100_000_000_000") == INITIAL_SUPPLY
        assert parse_tokens(str(UINT256_MAX) + "e-18") == UINT256_MAX

    @pytest.mark.parametrize("text", ["-1", "abc", "0.0000000000000000001", "NaN", "Infinity"])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            parse_tokens(text)
