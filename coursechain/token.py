"""A minimal fungible token contract."""

from __future__ import annotations

from enum import IntEnum

from coursechain.env import Env

_I128_MAX = 2**127 - 1


class TokenErrorCode(IntEnum):
    """Error codes reported by the token contract."""

    ALREADY_INITIALIZED = 1
    NOT_INITIALIZED = 2
    INVALID_AMOUNT = 3
    INSUFFICIENT_BALANCE = 4


class TokenError(Exception):
    """A token contract call failed."""

    def __init__(self, code: TokenErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


class Token:
    """Token balances administered by a single admin who alone may mint."""

    def __init__(self, env: Env) -> None:
        self.env = env
        self._admin: str | None = None
        self._balances: dict[str, int] = {}

    def initialize(self, admin: str) -> None:
        """Set the admin; may be done once only."""
        if self._admin is not None:
            raise TokenError(TokenErrorCode.ALREADY_INITIALIZED)
        self.env.require_auth(admin)
        self._admin = admin

    def mint(self, to: str, amount: int) -> None:
        """Create `amount` new tokens for `to`; admin only."""
        if self._admin is None:
            raise TokenError(TokenErrorCode.NOT_INITIALIZED)
        self.env.require_auth(self._admin)
        if amount <= 0:
            raise TokenError(TokenErrorCode.INVALID_AMOUNT)
        self._set_balance(to, self.balance(to) + amount)

    def balance(self, address: str) -> int:
        """Return the balance held by `address`."""
        return self._balances.get(address, 0)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move `amount` tokens from `sender` to `to`."""
        self.env.require_auth(sender)
        if amount <= 0:
            raise TokenError(TokenErrorCode.INVALID_AMOUNT)
        sender_balance = self.balance(sender)
        if sender_balance < amount:
            raise TokenError(TokenErrorCode.INSUFFICIENT_BALANCE)
        self._set_balance(sender, sender_balance - amount)
        self._set_balance(to, self.balance(to) + amount)

    def _set_balance(self, address: str, amount: int) -> None:
        if amount > _I128_MAX:
            raise OverflowError("balance exceeds the 128-bit range")
        self._balances[address] = amount