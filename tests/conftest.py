import pytest

from diamond_gateway.observability.logging import configure_logging


@pytest.fixture(autouse=True)
def _json_logging_on_stderr() -> None:
    configure_logging("DEBUG")
