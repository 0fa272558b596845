import numpy as np
from numba import njit

@njit(cache=True)
def mean(x: np.ndarray):
    n = x.shape[0]
    total = 0.0
    for i in range(n):
        total += x[i]
    return total / n

@njit(cache=True)
def variance(x: np.ndarray):
    """
    Population variance: mean of squared deviations (divide by n).
    """
    n = x.shape[0]
    mean_x = mean(x)

    total = 0.0
    for i in range(n):
        dx = x[i] - mean_x
        total += dx * dx

    return total / n

@njit(cache=True)
def covariance(x: np.ndarray, y: np.ndarray):
    """
    Population covariance of two equal-length arrays.
    """
    n = x.shape[0]
    mean_x = mean(x)
    mean_y = mean(y)

    total = 0.0
    for i in range(n):
        total += (x[i] - mean_x) * (y[i] - mean_y)

    return total / n

@njit(cache=True)
def regression_sums(x: np.ndarray, y: np.ndarray):
    """
    Single pass over the pairs, returns (sum_x, sum_y, sum_x2, sum_xy).
    """
    n = x.shape[0]
    sum_x = 0.0
    sum_y = 0.0
    sum_x2 = 0.0
    sum_xy = 0.0
    for i in range(n):
        sum_x += x[i]
        sum_y += y[i]
        sum_x2 += x[i] * x[i]
        sum_xy += x[i] * y[i]

    return sum_x, sum_y, sum_x2, sum_xy

@njit(cache=True)
def ols_residuals(x: np.ndarray, y: np.ndarray, slope: float, intercept: float):
    n = y.shape[0]
    resid = np.empty(n, dtype=np.float64)
    for i in range(n):
        resid[i] = y[i] - (slope * x[i] + intercept)

    return resid
