"""
Input validation utilities for pystepwise.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pystepwise.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidElementTypeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like of a primitive numeric type (bool, signed or
    unsigned integer, floating point) and converts it to float64. Rejects
    inputs that result in object dtype (mixed types or non-numeric data)
    as well as strings, bytes, complex numbers and datetimes.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype (always a fresh copy)

    Raises:
        ValidationError: If input is None or cannot be converted
        InvalidElementTypeError: If the element type is not primitive numeric
    """
    if array is None:
        raise ValidationError(f"{name}: input is None")

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidElementTypeError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data",
            dtype=result.dtype,
        )

    is_primitive = (
        np.issubdtype(result.dtype, np.bool_)
        or np.issubdtype(result.dtype, np.integer)
        or np.issubdtype(result.dtype, np.floating)
    )
    if not is_primitive:
        raise InvalidElementTypeError(
            f"{name}: non-primitive dtype {result.dtype}, expected bool, integer or float data",
            dtype=result.dtype,
        )

    return np.array(result, dtype=np.float64, copy=True)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_not_empty(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every dimension of the array is at least 1.

    A design matrix with no rows or no columns has nothing to fit; it is
    rejected here rather than producing a zero-length coefficient vector.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If any dimension has length 0
    """
    if array.size == 0:
        raise ValidationError(
            f"{name}: empty array with shape {array.shape}, "
            f"expected at least one row and one column"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise DimensionError(
            f"{name}: requires at least {min_samples} rows, got {n}"
        )


def check_alpha(alpha: float, name: str = 'alpha') -> float:
    """
    Verify a significance level lies strictly between 0 and 1.

    Args:
        alpha: Significance level
        name: Parameter name for error messages

    Returns:
        alpha as a Python float

    Raises:
        ValidationError: If alpha is not in (0, 1)
    """
    try:
        value = float(alpha)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {alpha!r}") from e
    if not 0.0 < value < 1.0:
        raise ValidationError(f"{name}: must be in (0, 1), got {value}")
    return value
