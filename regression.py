"""Descriptive statistics and bivariate least-squares regression.

Every function takes plain numeric sequences (lists, tuples, numpy arrays,
pandas Series), validates them once, and hands contiguous float64 arrays to
the jit'd kernels in ``numba_utils``. Variance and covariance use the
population convention (divide by n).
"""
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from numba_utils import covariance as _covariance
from numba_utils import mean as _mean
from numba_utils import ols_residuals, regression_sums
from numba_utils import variance as _variance

SUMMARY_COLUMNS = ["n", "mean_x", "mean_y", "var_x", "var_y", "std_x", "std_y",
    "cov", "corr", "slope", "intercept", "r_squared"]

Numeric = Union[Sequence[float], np.ndarray, pd.Series]


class StatisticsError(ValueError):
    """Base class for invalid input to the statistics functions."""


class EmptyInputError(StatisticsError):
    pass


class LengthMismatchError(StatisticsError):
    pass


class NonFiniteInputError(StatisticsError):
    pass


class DegenerateFitError(StatisticsError):
    """No unique least-squares line exists (all x values coincide)."""


class ZeroDenominatorError(StatisticsError):
    pass


class InvalidResultError(StatisticsError):
    """Finite input whose result overflowed to inf or NaN in double precision."""


class NegativeMeanError(StatisticsError):
    pass


def _as_array(values: Numeric, name: str = "sequence") -> np.ndarray:
    """Return a contiguous float64 copy of ``values`` or raise."""
    try:
        raw = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise StatisticsError(f"{name} is not numeric: {e}") from e

    # numpy would happily parse "1.5" into a float
    if raw.dtype.kind in "USV":
        raise StatisticsError(f"{name} is not numeric: dtype {raw.dtype}")
    if raw.dtype.kind == "O" and not all(
        isinstance(v, numbers.Real) and not isinstance(v, str) for v in raw.ravel()
    ):
        raise StatisticsError(f"{name} is not numeric: contains non-real objects")

    try:
        arr = raw.astype(np.float64)
    except (TypeError, ValueError, OverflowError) as e:
        raise StatisticsError(f"{name} is not representable as float64: {e}") from e

    if arr.ndim != 1:
        raise StatisticsError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise EmptyInputError(f"{name} is empty")
    if np.any(np.isnan(arr)):
        raise NonFiniteInputError(f"{name} contains NaN values")
    if np.any(np.isinf(arr)):
        raise NonFiniteInputError(f"{name} contains infinite values")

    return np.ascontiguousarray(arr)


def _as_pair(x: Numeric, y: Numeric) -> Tuple[np.ndarray, np.ndarray]:
    x = _as_array(x, "x")
    y = _as_array(y, "y")
    if x.size != y.size:
        raise LengthMismatchError(f"x and y differ in length: {x.size} != {y.size}")
    return x, y


def _is_constant(arr: np.ndarray) -> bool:
    return bool(np.all(arr == arr[0]))


def _finite(value, what: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidResultError(f"{what} overflowed double precision ({value})")
    return value


@dataclass(frozen=True)
class LinearModel:
    """Fitted line y = slope * x + intercept."""
    slope: float
    intercept: float

    def __post_init__(self):
        if not (math.isfinite(self.slope) and math.isfinite(self.intercept)):
            raise StatisticsError(
                f"LinearModel needs finite parameters, got slope={self.slope}, intercept={self.intercept}"
            )

    def __iter__(self) -> Iterator[float]:
        return iter((self.slope, self.intercept))

    def predict(self, x):
        """Evaluate the line at a scalar or at every point of a sequence."""
        if np.ndim(x) == 0:
            return self.slope * float(x) + self.intercept
        return self.slope * _as_array(x, "x") + self.intercept

    def residuals(self, x: Numeric, y: Numeric) -> np.ndarray:
        x, y = _as_pair(x, y)
        return ols_residuals(x, y, self.slope, self.intercept)

    def residual_sum_of_squares(self, x: Numeric, y: Numeric) -> float:
        resid = self.residuals(x, y)
        return _finite(np.dot(resid, resid), "Residual sum of squares")


def mean(values: Numeric) -> float:
    return _finite(_mean(_as_array(values)), "Mean")


def variance(values: Numeric) -> float:
    """Population variance, (1/n) * sum((x - mean)^2)."""
    return _finite(_variance(_as_array(values)), "Variance")


def standard_deviation(values: Numeric) -> float:
    """Square root of the population variance."""
    return math.sqrt(variance(values))


def legacy_standard_deviation(values: Numeric) -> float:
    """
    Square root of the mean, as the original statistics program computed
    "standard deviation". Kept only to reproduce its published numbers.
    """
    m = mean(values)
    if m < 0:
        raise NegativeMeanError(f"Cannot take the square root of a negative mean ({m})")
    return math.sqrt(m)


def covariance(x: Numeric, y: Numeric) -> float:
    """Population covariance, (1/n) * sum((x - mean_x) * (y - mean_y))."""
    x, y = _as_pair(x, y)
    return _finite(_covariance(x, y), "Covariance")


def correlation(x: Numeric, y: Numeric) -> float:
    """Pearson correlation: cov(x, y) / (std(x) * std(y))."""
    x, y = _as_pair(x, y)
    if _is_constant(x) or _is_constant(y):
        raise ZeroDenominatorError("Correlation undefined: zero variance in x or y")

    denom = standard_deviation(x) * standard_deviation(y)
    if denom == 0:
        raise ZeroDenominatorError("Correlation undefined: zero standard deviation product")

    r = _finite(covariance(x, y) / denom, "Correlation")

    # rounding can push |r| a hair past 1, same clip as np.corrcoef
    return float(np.clip(r, -1.0, 1.0))


def legacy_correlation(x: Numeric, y: Numeric) -> float:
    """cov(x, y) / (sqrt(mean(x)) * sqrt(mean(y))), matching the original demo."""
    x, y = _as_pair(x, y)
    denom = legacy_standard_deviation(x) * legacy_standard_deviation(y)
    if denom == 0:
        raise ZeroDenominatorError("Legacy correlation undefined: x or y has zero mean")
    return _finite(covariance(x, y) / denom, "Legacy correlation")


def linear_regression(x: Numeric, y: Numeric) -> LinearModel:
    """
    Ordinary least squares via the normal equations:

        slope     = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
        intercept = (Sy - slope*Sx) / n

    Raises DegenerateFitError when x is constant, since no unique line exists.
    """
    x, y = _as_pair(x, y)

    # constant regressor
    if _is_constant(x):
        raise DegenerateFitError(f"All {x.size} x values are equal to {x[0]}; no unique fit")

    n = x.size
    sum_x, sum_y, sum_x2, sum_xy = regression_sums(x, y)

    denom = _finite(n * sum_x2 - sum_x * sum_x, "Regression denominator")
    if denom == 0:
        raise DegenerateFitError("Regression denominator n*Sxx - Sx^2 is zero")

    slope = _finite((n * sum_xy - sum_x * sum_y) / denom, "Slope")
    intercept = _finite((sum_y - slope * sum_x) / n, "Intercept")

    return LinearModel(slope=slope, intercept=intercept)


def r_squared(x: Numeric, y: Numeric) -> float:
    """Coefficient of determination of the least-squares line."""
    x, y = _as_pair(x, y)
    if _is_constant(y):
        raise ZeroDenominatorError("R^2 undefined: zero variance in y")

    model = linear_regression(x, y)
    rss = model.residual_sum_of_squares(x, y)
    tss = y.size * variance(y)
    if tss == 0:
        raise ZeroDenominatorError("R^2 undefined: total sum of squares underflowed to zero")
    return _finite(1.0 - rss / tss, "R^2")


def describe(x: Numeric, y: Numeric) -> pd.DataFrame:
    """
    One-row table of every statistic for the pair (x, y). Cells that are
    undefined for this input (correlation of a constant series, fit on a
    constant x) are NaN rather than raising.
    """
    x, y = _as_pair(x, y)

    var_x = variance(x)
    var_y = variance(y)

    try:
        corr = correlation(x, y)
    except ZeroDenominatorError:
        corr = np.nan

    try:
        slope, intercept = linear_regression(x, y)
    except DegenerateFitError:
        slope, intercept = np.nan, np.nan

    try:
        r2 = r_squared(x, y)
    except (DegenerateFitError, ZeroDenominatorError):
        r2 = np.nan

    record = (x.size, mean(x), mean(y), var_x, var_y,
              math.sqrt(var_x), math.sqrt(var_y), covariance(x, y),
              corr, slope, intercept, r2)

    return pd.DataFrame([record], columns=SUMMARY_COLUMNS)
