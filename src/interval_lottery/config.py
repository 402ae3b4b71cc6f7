from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from . import project_constants as rules
from .errors import ConfigError


@dataclass(frozen=True)
class OracleConfig:
    entrance_fee: int
    interval: int
    subscription_id: int
    gas_lane: str
    request_confirmations: int
    callback_gas_limit: int
    num_words: int


@dataclass(frozen=True)
class Settings:
    entrance_fee: int = rules.ENTRANCE_FEE
    interval: int = rules.INTERVAL_SECONDS
    subscription_id: int = rules.SUBSCRIPTION_ID
    gas_lane: str = rules.GAS_LANE
    request_confirmations: int = rules.REQUEST_CONFIRMATIONS
    callback_gas_limit: int = rules.CALLBACK_GAS_LIMIT
    num_words: int = rules.NUM_WORDS
    oracle_url: Optional[str] = None

    @staticmethod
    def from_env(oracle_url_override: str | None = None) -> "Settings":
        load_dotenv()

        settings = Settings(
            entrance_fee=_env_int("LOTTERY_ENTRANCE_FEE", rules.ENTRANCE_FEE),
            interval=_env_int("LOTTERY_INTERVAL", rules.INTERVAL_SECONDS),
            subscription_id=_env_int("LOTTERY_SUBSCRIPTION_ID", rules.SUBSCRIPTION_ID),
            gas_lane=os.getenv("LOTTERY_GAS_LANE", "").strip() or rules.GAS_LANE,
            request_confirmations=_env_int(
                "LOTTERY_REQUEST_CONFIRMATIONS", rules.REQUEST_CONFIRMATIONS
            ),
            callback_gas_limit=_env_int(
                "LOTTERY_CALLBACK_GAS_LIMIT", rules.CALLBACK_GAS_LIMIT
            ),
            num_words=_env_int("LOTTERY_NUM_WORDS", rules.NUM_WORDS),
            # If user provides --oracle-url, trust it.
            oracle_url=oracle_url_override or (os.getenv("ORACLE_URL", "").strip() or None),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.entrance_fee <= 0:
            raise ConfigError(f"Entrance fee must be positive, got {self.entrance_fee}")
        if self.interval <= 0:
            raise ConfigError(f"Interval must be positive, got {self.interval}")
        if self.num_words < 1:
            raise ConfigError(f"At least one random word is required, got {self.num_words}")
        if self.request_confirmations < 0 or self.callback_gas_limit <= 0:
            raise ConfigError("Request confirmations and callback gas limit are out of range")

    def oracle_config(self) -> OracleConfig:
        return OracleConfig(
            entrance_fee=self.entrance_fee,
            interval=self.interval,
            subscription_id=self.subscription_id,
            gas_lane=self.gas_lane,
            request_confirmations=self.request_confirmations,
            callback_gas_limit=self.callback_gas_limit,
            num_words=self.num_words,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
