"""Test class Calculator."""
import pytest

from calculator_server.common.calculator import (
    OPERAND_ERROR,
    OPERATION_ERROR,
    CalculationError,
    Calculator,
    InvalidOperandError,
    UnsupportedOperationError,
)
from calculator_server.common.operations import CalculateRequest


@pytest.mark.parametrize("value,expected", [
    (3, 3),
    (-2.5, -2.5),
    ("42", 42),
    (" 7 ", 7),
    ("1.5", 1.5),
    ("-8.9", -8.9),
    ("1e3", 1000.0),
])
def test_to_number_accepts_numbers(value, expected):
    """to_number converts numbers and numeric strings."""
    assert Calculator.to_number(value) == expected


def test_to_number_keeps_integers_exact():
    """Integer strings stay integers, so large values lose no precision."""
    assert Calculator.to_number("12345678901234567890") == 12345678901234567890
    assert isinstance(Calculator.to_number("4"), int)


@pytest.mark.parametrize("value", [
    None,
    True,
    False,
    "",
    "   ",
    "abc",
    "1+1",
    "inf",
    "NaN",
    float("inf"),
    float("nan"),
    "1" + "0" * 400,
    10 ** 400,
    -(10 ** 400),
    [1],
    {"value": 1},
])
def test_to_number_rejects_non_numbers(value):
    """to_number returns None for anything that is not a finite number."""
    assert Calculator.to_number(value) is None


@pytest.mark.parametrize("operation,left,right,expected", [
    ("add", 2, 3, 5),
    ("add", "2", "3.5", 5.5),
    ("add", -1, 1, 0),
    ("subtract", 10, 4, 6),
    ("subtract", "1.5", 0.5, 1.0),
    ("subtract", 0, 7, -7),
])
def test_evaluate_valid(operation, left, right, expected):
    """evaluate returns the sum or difference of the operands."""
    response = Calculator.evaluate(CalculateRequest(operation=operation, left=left, right=right))
    assert response.result == expected
    assert response.error is None


def test_evaluate_integer_operands_give_integer_result():
    """Integer operands produce an integer result."""
    response = Calculator.evaluate(CalculateRequest(operation="add", left=1, right=2))
    assert isinstance(response.result, int)


def test_evaluate_overflow_gives_null_result():
    """A float result overflowing to infinity is reported as None."""
    response = Calculator.evaluate(CalculateRequest(operation="add", left=1e308, right=1e308))
    assert response.result is None


def test_compute_int_too_large_for_float_gives_null_result():
    """Mixing an integer beyond float range with a float does not raise."""
    assert Calculator.compute("add", 10 ** 400, 0.5) is None


@pytest.mark.parametrize("left", ["1" + "0" * 400, 10 ** 400])
def test_evaluate_rejects_integer_beyond_float_range(left):
    """An integer operand that no float can hold is not a finite number."""
    with pytest.raises(InvalidOperandError):
        Calculator.evaluate(CalculateRequest(operation="add", left=left, right=0.5))


@pytest.mark.parametrize("left,right", [
    ("abc", 1),
    (1, "abc"),
    (None, 1),
    (1, None),
    (None, None),
])
def test_evaluate_invalid_operands(left, right):
    """evaluate raises InvalidOperandError for non-numeric operands."""
    with pytest.raises(InvalidOperandError) as exc_info:
        Calculator.evaluate(CalculateRequest(operation="add", left=left, right=right))
    assert exc_info.value.message == OPERAND_ERROR


def test_evaluate_checks_operands_before_operation():
    """A bad operand is reported even when the operation is also unsupported."""
    with pytest.raises(InvalidOperandError):
        Calculator.evaluate(CalculateRequest(operation="multiply", left="abc", right=1))


@pytest.mark.parametrize("operation", ["multiply", "divide", "ADD", " add", "", None, 1, ["add"]])
def test_evaluate_unsupported_operation(operation):
    """evaluate raises UnsupportedOperationError for anything but add/subtract."""
    with pytest.raises(UnsupportedOperationError) as exc_info:
        Calculator.evaluate(CalculateRequest(operation=operation, left=1, right=2))
    assert exc_info.value.message == OPERATION_ERROR


def test_calculation_errors_are_value_errors():
    """Both calculator errors can be caught as ValueError."""
    assert issubclass(InvalidOperandError, CalculationError)
    assert issubclass(UnsupportedOperationError, CalculationError)
    assert issubclass(CalculationError, ValueError)
    assert str(UnsupportedOperationError()) == OPERATION_ERROR


def test_evaluate_is_repeatable():
    """The same request always yields the same response."""
    request = CalculateRequest(operation="subtract", left="9", right=4)
    responses = {Calculator.evaluate(request).result for _ in range(5)}
    assert responses == {5}
