import pytest

from interval_lottery import project_constants as rules
from interval_lottery.config import Settings
from interval_lottery.errors import ConfigError

ENV_VARS = [
    "LOTTERY_ENTRANCE_FEE",
    "LOTTERY_INTERVAL",
    "LOTTERY_SUBSCRIPTION_ID",
    "LOTTERY_GAS_LANE",
    "LOTTERY_REQUEST_CONFIRMATIONS",
    "LOTTERY_CALLBACK_GAS_LIMIT",
    "LOTTERY_NUM_WORDS",
    "ORACLE_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_come_from_project_constants():
    s = Settings.from_env()
    assert s.entrance_fee == rules.ENTRANCE_FEE
    assert s.interval == rules.INTERVAL_SECONDS
    assert s.gas_lane == rules.GAS_LANE
    assert s.oracle_url is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LOTTERY_ENTRANCE_FEE", "0x10")
    monkeypatch.setenv("LOTTERY_INTERVAL", "60")
    monkeypatch.setenv("LOTTERY_NUM_WORDS", "2")
    monkeypatch.setenv("ORACLE_URL", "http://coordinator/rpc")

    s = Settings.from_env()
    cfg = s.oracle_config()

    assert cfg.entrance_fee == 16
    assert cfg.interval == 60
    assert cfg.num_words == 2
    assert s.oracle_url == "http://coordinator/rpc"


def test_cli_override_wins(monkeypatch):
    monkeypatch.setenv("ORACLE_URL", "http://env/rpc")
    assert Settings.from_env(oracle_url_override="http://cli/rpc").oracle_url == "http://cli/rpc"


@pytest.mark.parametrize(
    "name,value",
    [
        ("LOTTERY_ENTRANCE_FEE", "abc"),
        ("LOTTERY_ENTRANCE_FEE", "0"),
        ("LOTTERY_NUM_WORDS", "0"),
        ("LOTTERY_INTERVAL", "-1"),
        ("LOTTERY_INTERVAL", "0"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        Settings.from_env()
