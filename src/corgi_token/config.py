from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from .address import Address
from .project_constants import INITIAL_SUPPLY, TOKEN_DECIMALS, TOKEN_NAME, TOKEN_SYMBOL
from .units import parse_tokens


@dataclass(frozen=True)
class Settings:
    name: str
    symbol: str
    initial_supply: int  # raw units
    owner: Address

    @staticmethod
    def from_env(
        owner_override: str | None = None,
        supply_override: str | None = None,
    ) -> "Settings":
        load_dotenv()

        name = os.getenv("TOKEN_NAME", "").strip() or TOKEN_NAME
        symbol = os.getenv("TOKEN_SYMBOL", "").strip() or TOKEN_SYMBOL

        # If user provides --supply / --owner, trust it over the environment.
        supply_text = supply_override or os.getenv("TOKEN_INITIAL_SUPPLY", "").strip()
        if supply_text:
            try:
                initial_supply = parse_tokens(supply_text)
            except ValueError as e:
                raise RuntimeError(
                    f"Bad TOKEN_INITIAL_SUPPLY (whole tokens, up to {TOKEN_DECIMALS} decimals): {e}"
                ) from e
        else:
            initial_supply = INITIAL_SUPPLY

        owner_text = owner_override or os.getenv("TOKEN_OWNER", "").strip()
        if not owner_text:
            raise RuntimeError(
                "Missing TOKEN_OWNER (0x address credited with the supply). "
                "Put it in .env or export it."
            )
        try:
            owner = Address.from_hex(owner_text)
        except ValueError as e:
            raise RuntimeError(f"Bad TOKEN_OWNER: {e}") from e
        if owner.is_zero:
            raise RuntimeError("TOKEN_OWNER must not be the zero address.")

        return Settings(name=name, symbol=symbol, initial_supply=initial_supply, owner=owner)
