from decimal import Decimal

import pytest

from utils.exceptions import DataFormatException, ValidationException
from utils.validation.validators import (
    validate_decimal,
    validate_list,
    validate_money,
    validate_percentage,
    validate_quantity,
    validate_vat_rate,
)


class TestValidators:
    def test_decimal_validation(self):
        """Test decimal validation."""
        # Valid cases
        assert validate_decimal("1.5") == Decimal("1.5")
        assert validate_decimal(2, min_value=Decimal("0")) == Decimal("2")
        assert validate_decimal(0.1, max_value=Decimal("1")) == Decimal("0.1")

        # Invalid cases
        with pytest.raises(DataFormatException):
            validate_decimal("not_a_number")
        with pytest.raises(ValidationException):
            validate_decimal(-1, min_value=Decimal("0"))
        with pytest.raises(ValidationException):
            validate_decimal(101, max_value=Decimal("100"))

    def test_money_validation(self):
        """Test money validation."""
        assert validate_money("25.00") == Decimal("25.00")
        assert validate_money(0) == 0

        with pytest.raises(ValidationException) as exc_info:
            validate_money(-0.01, "Amount paid")
        assert "Amount paid" in str(exc_info.value)

    def test_vat_rate_validation(self):
        assert validate_vat_rate("0.12") == Decimal("0.12")
        assert validate_vat_rate(1) == 1
        with pytest.raises(ValidationException):
            validate_vat_rate(12)
        with pytest.raises(ValidationException):
            validate_vat_rate(-0.1)

    def test_percentage_validation(self):
        assert validate_percentage(0) == 0
        assert validate_percentage(100) == 100
        with pytest.raises(ValidationException):
            validate_percentage(100.5)
        with pytest.raises(ValidationException):
            validate_percentage(-1)

    def test_quantity_validation(self):
        assert validate_quantity(3) == 3
        assert validate_quantity(Decimal("2.0")) == 2
        assert isinstance(validate_quantity("4"), int)

        with pytest.raises(ValidationException):
            validate_quantity(0)
        with pytest.raises(ValidationException):
            validate_quantity(1.5)
        with pytest.raises(DataFormatException):
            validate_quantity("three")

    def test_list_validation(self):
        assert validate_list([1, 2], validate_quantity) == [1, 2]
        assert validate_list((), validate_quantity) == []

        with pytest.raises(ValidationException):
            validate_list("not a list", validate_quantity)
        with pytest.raises(ValidationException):
            validate_list([], validate_quantity, min_length=1)
        with pytest.raises(ValidationException):
            validate_list([1, 2, 3], validate_quantity, max_length=2)
