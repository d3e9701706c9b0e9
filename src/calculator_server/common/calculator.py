"""Validate operands and evaluate add/subtract operations."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Any, Callable, Dict, Optional, Union

from calculator_server.common.logger import logger
from calculator_server.common.operations import CalculateRequest, CalculateResponse

Number = Union[int, float]

# Type alias for operation functions (taking two numbers, returning a number)
OperationFn: ABCCallable[[Number, Number], Number] = Callable[[Number, Number], Number]

# Mapping of supported operation names to their function
OPERATIONS: Dict[str, OperationFn] = {
    "add": operator.add,
    "subtract": operator.sub,
}

OPERAND_ERROR = "Both operands must be numbers."
OPERATION_ERROR = "Only add and subtract operations are supported."


class CalculationError(ValueError):
    """Base class for request values the calculator refuses."""

    message: str = "Invalid request payload."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidOperandError(CalculationError):
    """Raised when an operand cannot be converted to a finite number."""

    message = OPERAND_ERROR


class UnsupportedOperationError(CalculationError):
    """Raised when the operation is neither 'add' nor 'subtract'."""

    message = OPERATION_ERROR


class Calculator:
    """
    Evaluate calculate requests.

    Validation order:
        1. Both operands must convert to finite numbers.
        2. The operation must be exactly 'add' or 'subtract'.

    The calculator holds no state, so repeating a request always yields
    the same response.
    """

    @staticmethod
    def to_number(value: Any) -> Optional[Number]:
        """
        Convert a raw JSON value to a finite number.

        Integers and floats are returned as-is, strings are stripped and
        parsed as an integer first, then as a float. Booleans, null,
        containers and non-finite values are rejected, as are integers
        too large to be represented as a float.

        :param Any value: Raw operand value

        :return: The number, or None if the value is not a finite number
        :rtype: Optional[Number]
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            number: Number = value
        elif isinstance(value, str):
            text = value.strip()
            try:
                number = int(text)
            except ValueError:
                try:
                    number = float(text)
                except ValueError:
                    return None
        else:
            return None

        if isinstance(number, int):
            try:
                float(number)
            except OverflowError:
                return None
        elif not math.isfinite(number):
            return None
        return number

    @staticmethod
    def compute(operation: str, left: Number, right: Number) -> Optional[Number]:
        """
        Apply an operation to two numbers.

        :param str operation: Operation name
        :param Number left: Left operand
        :param Number right: Right operand

        :return: The result, or None when a float result overflowed
        :rtype: Optional[Number]
        :raises UnsupportedOperationError: If the operation is unknown
        """
        if not isinstance(operation, str) or operation not in OPERATIONS:
            raise UnsupportedOperationError()

        try:
            result = OPERATIONS[operation](left, right)
        except OverflowError:
            return None
        if isinstance(result, float) and not math.isfinite(result):
            return None
        return result

    @staticmethod
    def evaluate(request: CalculateRequest) -> CalculateResponse:
        """
        Validate a calculate request and compute its result.

        :param CalculateRequest request: Parsed request

        :return: Response carrying the result
        :rtype: CalculateResponse
        :raises InvalidOperandError: If an operand is not a finite number
        :raises UnsupportedOperationError: If the operation is unknown
        """
        left = Calculator.to_number(request.left)
        right = Calculator.to_number(request.right)
        if left is None or right is None:
            raise InvalidOperandError()

        result = Calculator.compute(request.operation, left, right)
        logger.debug(f"🧮 {request.operation}({left}, {right}) = {result}")
        return CalculateResponse(result=result)
