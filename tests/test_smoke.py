from utils.system.logger import logger


def test_imports():
    """Simple smoke test to catch import errors."""
    assert logger is not None

    from services.pricing import price_sale
    from services.sale_calculator import SaleCalculator

    assert price_sale is not None
    assert SaleCalculator is not None
