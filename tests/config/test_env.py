from __future__ import annotations

import logging

import pytest

from genproxy.config import configure_logging, optional_env_var


def test_optional_env_var_strips_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GENPROXY_EXAMPLE", "  value ")

    assert optional_env_var("GENPROXY_EXAMPLE") == "value"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_optional_env_var_treats_blank_as_unset(
    monkeypatch: pytest.MonkeyPatch,
    value: str | None,
) -> None:
    if value is None:
        monkeypatch.delenv("GENPROXY_EXAMPLE", raising=False)
    else:
        monkeypatch.setenv("GENPROXY_EXAMPLE", value)

    assert optional_env_var("GENPROXY_EXAMPLE") is None


def test_configure_logging_quiets_http_libraries() -> None:
    configure_logging(verbose=True, force=True)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
