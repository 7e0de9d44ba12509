import pytest

from corgi_token.config import Settings
from corgi_token.project_constants import INITIAL_SUPPLY

OWNER = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("TOKEN_NAME", "TOKEN_SYMBOL", "TOKEN_INITIAL_SUPPLY", "TOKEN_OWNER"):
        monkeypatch.delenv(var, raising=False)
    # Keep a developer's .env out of the picture.
    monkeypatch.setattr("corgi_token.config.load_dotenv", lambda: False)


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", OWNER)
        s = Settings.from_env()
        assert s.name == "CorgiCoin"
        assert s.symbol == "CORGI"
        assert s.initial_supply == INITIAL_SUPPLY
        assert str(s.owner) == OWNER

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", OWNER)
        monkeypatch.setenv("TOKEN_NAME", "Shiba")
        monkeypatch.setenv("TOKEN_SYMBOL", "SHIB")
        monkeypatch.setenv("TOKEN_INITIAL_SUPPLY", "1000.5")
        s = Settings.from_env()
        assert (s.name, s.symbol) == ("Shiba", "SHIB")
        assert s.initial_supply == 1000 * 10**18 + 5 * 10**17

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", "0x" + "11" * 20)
        monkeypatch.setenv("TOKEN_INITIAL_SUPPLY", "5")
        s = Settings.from_env(owner_override=OWNER, supply_override="7")
        assert str(s.owner) == OWNER
        assert s.initial_supply == 7 * 10**18

    def test_missing_owner(self):
        with pytest.raises(RuntimeError, match="TOKEN_OWNER"):
            Settings.from_env()

    def test_zero_owner(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", "0x" + "00" * 20)
        with pytest.raises(RuntimeError, match="zero address"):
            Settings.from_env()

    def test_bad_owner(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", "0xnope")
        with pytest.raises(RuntimeError, match="Bad TOKEN_OWNER"):
            Settings.from_env()

    def test_bad_supply(self, monkeypatch):
        monkeypatch.setenv("TOKEN_OWNER", OWNER)
        monkeypatch.setenv("TOKEN_INITIAL_SUPPLY", "-3")
        with pytest.raises(RuntimeError, match="TOKEN_INITIAL_SUPPLY"):
            Settings.from_env()
