import pytest
from pathlib import Path

FIXTURES = Path(__file__).parent / "fixtures"

CONFIG_ENV_KEYS = (
    "CLASHVIEW_TIMEOUT",
    "CLASHVIEW_USER_AGENT",
    "CLASHVIEW_VERIFY_SSL",
    "CLASHVIEW_LOG_LEVEL",
)

SCENARIO = (
    "proxies:\n"
    '  - { name: "A", type: ss, server: 1.2.3.4, port: 443, cipher: aes-256-gcm }\n'
    '  - { name: "B", type: vmess, server: b.example.com, port: "8443", tls: true }\n'
    "proxy-groups:\n"
    '  - { name: "Auto", type: select }\n'
)


@pytest.fixture
def scenario_text():
    return SCENARIO


@pytest.fixture
def subscription_path():
    return FIXTURES / "subscription.yaml"


@pytest.fixture
def subscription_text(subscription_path):
    return subscription_path.read_text(encoding="utf-8")


@pytest.fixture
def clean_env(monkeypatch):
    """
    Removes the CLASHVIEW_* variables for the test and restores the
    original environment afterwards, including keys the CLI sets itself.
    """
    for key in CONFIG_ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch
