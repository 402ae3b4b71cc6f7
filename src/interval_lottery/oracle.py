"""
Randomness oracle integrations.

The round core only knows the ``RandomnessOracle`` capability: ask for words,
hand over the callback to invoke later. The coordinators here sit on the trust
boundary and own its contract: one unique token per request, the callback
fires at most once per token, only for tokens they issued, with at least one
word.
"""
from __future__ import annotations

import hashlib
import itertools
import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

import base58

from .config import OracleConfig
from .draw import derive_words
from .errors import OracleError, UnknownRequest
from .rpc import RpcClient

log = logging.getLogger(__name__)

FulfillCallback = Callable[[str, Sequence[int]], object]


class RandomnessOracle(Protocol):
    def request_random_words(self, config: OracleConfig, callback: FulfillCallback) -> str: ...


class LocalCoordinator:
    """
    In-process oracle for development and tests.

    Requests stay pending until ``fulfill`` is called, which stands in for the
    confirmation delay of a real coordinator.
    """

    def __init__(self, seed: str = "local") -> None:
        self.seed = seed
        self._nonce = itertools.count(1)
        self._pending: Dict[str, Tuple[FulfillCallback, OracleConfig]] = {}
        self.issued: List[str] = []

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def request_random_words(self, config: OracleConfig, callback: FulfillCallback) -> str:
        nonce = next(self._nonce)
        digest = hashlib.sha256(f"{self.seed}:{nonce}".encode("utf-8")).digest()
        token = base58.b58encode(digest[:16]).decode("ascii")
        self._pending[token] = (callback, config)
        self.issued.append(token)
        log.info("Random words requested: token=%s words=%d confirmations=%d",
                 token, config.num_words, config.request_confirmations)
        return token

    def fulfill(self, token: str, words: Optional[Sequence[int]] = None) -> object:
        """
        Deliver words for ``token``; derived from the seed when not given.

        The request is taken out while its callback runs, so it cannot be
        delivered twice, and put back if the callback raises, so a failed
        settlement can be delivered again.
        """
        entry = self._pending.get(token)
        if entry is None:
            raise UnknownRequest(token)
        callback, config = entry
        if words is None:
            words = derive_words(self.seed, token, config.num_words)
        if not words:
            raise OracleError("At least one random word is required")

        del self._pending[token]
        try:
            return callback(token, list(words))
        except Exception:
            self._pending[token] = entry
            raise


class HttpCoordinator:
    """
    Relay to a remote coordinator over JSON-RPC.

    ``pump`` polls every outstanding request and hands fulfilled ones to their
    callback exactly once.
    """

    def __init__(self, rpc: RpcClient) -> None:
        self.rpc = rpc
        self._pending: Dict[str, FulfillCallback] = {}

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def request_random_words(self, config: OracleConfig, callback: FulfillCallback) -> str:
        token = self.rpc.request_random_words(config)
        if token in self._pending:
            raise OracleError(f"Coordinator reissued request id {token}")
        self._pending[token] = callback
        log.info("Random words requested from %s: token=%s", self.rpc.rpc_url, token)
        return token

    def pump(self) -> List[object]:
        """Returns what each delivered callback returned."""
        delivered: List[object] = []
        for token in list(self._pending):
            if token not in self._pending:
                # delivered by a nested pump from inside a callback
                continue
            words = self.rpc.get_request_status(token)
            if words is None:
                log.debug("Request %s not fulfilled yet", token)
                continue
            callback = self._pending.pop(token)
            try:
                result = callback(token, words)
            except Exception:
                self._pending[token] = callback
                raise
            delivered.append(result)
        return delivered
