"""Algorand node access for wallet balances."""

from decimal import Decimal

import httpx

MICRO_ALGOS_PER_ALGO = 1_000_000


def micro_algos_to_algos(micro_algos: int) -> float:
    return float(Decimal(int(micro_algos)) / MICRO_ALGOS_PER_ALGO)


def algos_to_micro_algos(algos) -> int:
    return int((Decimal(str(algos)) * MICRO_ALGOS_PER_ALGO).to_integral_value())


class AlgodClient:
    def __init__(self, base_url: str, token: str = '', timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> 'AlgodClient':
        return cls(
            config.get('ALGOD_URL', 'https://testnet-api.algonode.cloud'),
            config.get('ALGOD_TOKEN', ''),
            float(config.get('ALGOD_TIMEOUT_SEC', 10)),
        )

    def account_information(self, address: str) -> dict:
        """Raw ``/v2/accounts/<address>`` document. Raises httpx.HTTPError."""
        headers = {'X-Algo-API-Token': self.token} if self.token else {}
        resp = httpx.get(f"{self.base_url}/v2/accounts/{address}", headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def balance(self, address: str) -> dict:
        micro = int(self.account_information(address).get('amount', 0))
        return {
            'address': address,
            'microAlgos': micro,
            'algos': micro_algos_to_algos(micro),
        }
