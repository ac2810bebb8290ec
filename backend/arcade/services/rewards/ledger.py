"""Ledger collaborator: token transfers and badge mints.

The ledger is a trusted external service reached through two calls,
``transfer`` and ``mint``. Both take a timeout and either return a
``TxResult`` or raise ``RewardIssuanceFailure`` (``LedgerTimeout`` when
the call ran out of time).
"""

import time
import uuid
from dataclasses import dataclass
from typing import Optional

from arcade.errors import LedgerTimeout, RewardIssuanceFailure


@dataclass(frozen=True)
class TxResult:
    tx_id: str
    asset_id: Optional[int] = None


class Ledger:
    def transfer(self, address: str, amount: int, memo: str, timeout: float) -> TxResult:
        raise NotImplementedError

    def mint(self, address: str, metadata: dict, timeout: float) -> TxResult:
        raise NotImplementedError


class SimulatedLedger(Ledger):
    """Confirms every call after a fixed delay."""

    def __init__(self, delay: float = 2.0, sleep=time.sleep):
        self.delay = delay
        self._sleep = sleep

    def _confirm(self, timeout):
        if timeout is not None and self.delay > timeout:
            self._sleep(timeout)
            raise LedgerTimeout(f'Ledger did not confirm within {timeout}s')
        if self.delay:
            self._sleep(self.delay)
        return f'SIM{uuid.uuid4().hex[:24].upper()}'

    def transfer(self, address, amount, memo, timeout):
        if amount <= 0:
            raise RewardIssuanceFailure('Transfer amount must be positive')
        return TxResult(tx_id=self._confirm(timeout))

    def mint(self, address, metadata, timeout):
        if not metadata or not metadata.get('name'):
            raise RewardIssuanceFailure('Badge metadata is missing a name')
        tx_id = self._confirm(timeout)
        return TxResult(tx_id=tx_id, asset_id=uuid.uuid4().int % 10**9)
