from decimal import Decimal

import pytest

from models.line_item import LineItem


@pytest.fixture(autouse=True)
def isolate_config(tmp_path):
    """Isolate configuration for each test to prevent global state pollution."""
    from config import Config

    config_file = tmp_path / "test_app_config.json"

    Config._reset_for_testing(config_file)
    Config.reset_to_defaults()

    yield

    Config._reset_for_testing(None)


@pytest.fixture
def temp_log_dir(tmp_path):
    """Create a temporary directory for logs."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir(exist_ok=True)
    return log_dir


@pytest.fixture(autouse=True)
def clean_logs(temp_log_dir):
    """Release file handlers left behind by logger tests."""
    import logging
    import logging.handlers

    yield

    loggers = [logging.getLogger()] + [
        logging.getLogger(name) for name in logging.root.manager.loggerDict
    ]
    for logger in loggers:
        if not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                handler.close()
                logger.removeHandler(handler)


@pytest.fixture
def single_item():
    return [LineItem(unit_price=Decimal("10.00"), vat_rate=Decimal("0.12"), quantity=2)]


@pytest.fixture
def two_items(single_item):
    return single_item + [
        LineItem(unit_price=Decimal("5.00"), vat_rate=Decimal("0.06"), quantity=1)
    ]
