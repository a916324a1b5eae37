"""Stand-ins for the price pair and router used by reward programs."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TOKEN_PRICE = 1_000_000
DEFAULT_TOKEN_DECIMALS = 18
ZERO_ADDRESS = bytes(32)


@dataclass(frozen=True)
class TokenPayment:
    """An amount of a token, identified by ticker and nonce."""

    token_identifier: str
    token_nonce: int
    amount: int


class PairMock:
    """Prices every token at one dollar, expressed in the USDC token."""

    def __init__(self, usdc_token_id: str) -> None:
        self.usdc_token_id = usdc_token_id

    def get_safe_price_by_timestamp_offset(
        self,
        pair_address: bytes,
        timestamp_offset: int,
        input_payment: TokenPayment,
    ) -> TokenPayment:
        """Return the USDC value of ``input_payment``; the pair and offset are ignored."""
        amount = input_payment.amount * DEFAULT_TOKEN_PRICE // 10**DEFAULT_TOKEN_DECIMALS
        return TokenPayment(self.usdc_token_id, 0, amount)


class RouterMock:
    """Knows one pair: any token against USDC."""

    def __init__(self, pair_address: bytes, usdc_token_id: str) -> None:
        self.pair_address = pair_address
        self.usdc_token_id = usdc_token_id

    def get_pair(self, first_token_id: str, second_token_id: str) -> bytes:
        """Return the pair address if either token is USDC, else the zero address."""
        if self.usdc_token_id in (first_token_id, second_token_id):
            return self.pair_address
        return ZERO_ADDRESS