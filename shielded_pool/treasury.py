"""
Governed treasury and fee configuration.

The surrounding protocol owns one `TreasuryAndFeeAdmin` and passes it to the
places that charge fees. It is created uninitialized, initialized exactly once
and afterwards only mutated by the administrator.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from threading import Lock
from typing import Callable, List, Optional, Tuple

from shielded_pool.address import to_address
from shielded_pool.errors import (
    AlreadyInitialized,
    DomainError,
    InvalidRate,
    NotInitialized,
    Unauthorized,
)
from shielded_pool.fees import BASIS_POINTS, get_fee

logger = logging.getLogger(__name__)


class FeeKind(Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    NFT = "nft"


def check_rate(rate: int) -> int:
    if isinstance(rate, bool) or not isinstance(rate, int) or rate < 0:
        raise InvalidRate(rate)
    if rate >= BASIS_POINTS:
        raise InvalidRate(rate)
    return rate


@dataclass(frozen=True)
class FeeConfig:
    # all rates in basis points
    deposit_fee: int
    withdraw_fee: int
    nft_fee: int

    @staticmethod
    def default() -> "FeeConfig":
        return FeeConfig(deposit_fee=25, withdraw_fee=25, nft_fee=25)

    def validate(self):
        for rate in (self.deposit_fee, self.withdraw_fee, self.nft_fee):
            check_rate(rate)

    def rate(self, kind: FeeKind) -> int:
        match kind:
            case FeeKind.DEPOSIT:
                return self.deposit_fee
            case FeeKind.WITHDRAW:
                return self.withdraw_fee
            case FeeKind.NFT:
                return self.nft_fee
        raise ValueError(f"unknown fee kind {kind}")


@dataclass(frozen=True)
class TreasuryConfig:
    treasury: str


@dataclass(frozen=True)
class TreasuryChange:
    treasury: str


@dataclass(frozen=True)
class FeeChange:
    deposit_fee: int
    withdraw_fee: int
    nft_fee: int


Event = TreasuryChange | FeeChange
Listener = Callable[[Event], None]


@dataclass(frozen=True)
class _Governed:
    treasury: TreasuryConfig
    fees: FeeConfig
    administrator: str


class TreasuryAndFeeAdmin:
    def __init__(self):
        self._lock = Lock()
        self._state: Optional[_Governed] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener):
        with self._lock:
            self._listeners.append(listener)

    def _snapshot(self) -> _Governed:
        with self._lock:
            state = self._state
        if state is None:
            raise NotInitialized()
        return state

    def _emit(self, event: Event, listeners: Tuple[Listener, ...]):
        # the change is already committed, a failing listener must not undo that
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("listener failed on %s", event)

    def initialize(
        self,
        treasury,
        deposit_fee: int,
        withdraw_fee: int,
        nft_fee: int,
        administrator,
    ):
        fees = FeeConfig(deposit_fee, withdraw_fee, nft_fee)
        with self._lock:
            if self._state is not None:
                raise AlreadyInitialized()
            fees.validate()
            state = _Governed(
                treasury=TreasuryConfig(to_address(treasury)),
                fees=fees,
                administrator=to_address(administrator),
            )
            self._state = state
            listeners = tuple(self._listeners)

        logger.info(
            "initialized treasury=%s fees=%s administrator=%s",
            state.treasury.treasury,
            fees,
            state.administrator,
        )
        self._emit(TreasuryChange(state.treasury.treasury), listeners)
        self._emit(FeeChange(deposit_fee, withdraw_fee, nft_fee), listeners)

    def _authorize(self, state: Optional[_Governed], caller) -> _Governed:
        if state is None:
            raise NotInitialized()
        try:
            authorized = to_address(caller) == state.administrator
        except DomainError:
            authorized = False
        if not authorized:
            logger.warning("rejected governance call from %s", caller)
            raise Unauthorized(caller)
        return state

    def change_treasury(self, new_treasury, *, caller):
        with self._lock:
            state = self._authorize(self._state, caller)
            # the zero address is a valid "no treasury" setting
            treasury = to_address(new_treasury)
            if state.treasury.treasury == treasury:
                return
            self._state = replace(state, treasury=TreasuryConfig(treasury))
            listeners = tuple(self._listeners)

        logger.info("treasury changed to %s", treasury)
        self._emit(TreasuryChange(treasury), listeners)

    def change_fee(self, deposit_fee: int, withdraw_fee: int, nft_fee: int, *, caller):
        fees = FeeConfig(deposit_fee, withdraw_fee, nft_fee)
        with self._lock:
            state = self._authorize(self._state, caller)
            try:
                fees.validate()
            except InvalidRate:
                logger.warning("rejected fee change %s", fees)
                raise
            if state.fees == fees:
                return
            self._state = replace(state, fees=fees)
            listeners = tuple(self._listeners)

        logger.info("fees changed to %s", fees)
        self._emit(FeeChange(deposit_fee, withdraw_fee, nft_fee), listeners)

    def treasury(self) -> str:
        return self._snapshot().treasury.treasury

    def administrator(self) -> str:
        return self._snapshot().administrator

    def fees(self) -> FeeConfig:
        return self._snapshot().fees

    def deposit_fee(self) -> int:
        return self.fees().deposit_fee

    def withdraw_fee(self) -> int:
        return self.fees().withdraw_fee

    def nft_fee(self) -> int:
        return self.fees().nft_fee

    def fee_for(self, kind: FeeKind, amount: int, is_inclusive: bool) -> Tuple[int, int]:
        return get_fee(amount, is_inclusive, self.fees().rate(kind))
