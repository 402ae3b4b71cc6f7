from __future__ import annotations

import itertools
from typing import Any, Dict, List

import httpx

from .config import OracleConfig
from .errors import OracleError


class RpcClient:
    """JSON-RPC client for a remote randomness coordinator."""

    def __init__(self, rpc_url: str, timeout_s: float = 60.0) -> None:
        self.rpc_url = rpc_url
        self.client = httpx.Client(timeout=timeout_s)
        self._ids = itertools.count(1)

    def close(self) -> None:
        self.client.close()

    def _post(self, method: str, params: List[Any]) -> Dict[str, Any]:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        resp = self.client.post(self.rpc_url, json=payload)
        resp.raise_for_status()
        data = resp.json()
        if "error" in data:
            raise OracleError(f"RPC error: {data['error']}")
        return data

    def request_random_words(self, config: OracleConfig) -> str:
        """Returns the request id the coordinator assigned."""
        data = self._post(
            "lottery_requestRandomWords",
            [
                {
                    "keyHash": config.gas_lane,
                    "subId": config.subscription_id,
                    "minimumRequestConfirmations": config.request_confirmations,
                    "callbackGasLimit": config.callback_gas_limit,
                    "numWords": config.num_words,
                }
            ],
        )
        token = data.get("result")
        if not isinstance(token, str) or not token:
            raise OracleError(f"Coordinator returned no request id: {data!r}")
        return token

    def get_request_status(self, token: str) -> List[int] | None:
        """
        Returns the random words once the request is fulfilled, else None.
        Words may arrive as ints or 0x-prefixed hex strings.
        """
        data = self._post("lottery_getRequestStatus", [token])
        result = data.get("result")
        if not result or not result.get("fulfilled"):
            return None
        words = result.get("randomWords") or []
        if not words:
            raise OracleError(f"Request {token} fulfilled without random words")
        return [w if isinstance(w, int) else int(w, 0) for w in words]
