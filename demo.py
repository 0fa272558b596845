import sys
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from regression import (
    LinearModel,
    correlation,
    covariance,
    legacy_correlation,
    linear_regression,
    mean,
    standard_deviation,
    variance,
)

SEQUENCE = [1, 2, 3, 4, 5]
X = [1, 2, 3, 4, 5]
Y = [2, 3, 5, 7, 10]
X2 = [1.0, 2.0, 3.0, 4.0, 5.0]
Y2 = [2.0, 4.0, 6.0, 8.0, 10.0]


def parse_args():
    return sys.argv[1:]


def plot_fit(x, y, model: LinearModel, save_path: Optional[str] = None):
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    xs = np.linspace(x.min(), x.max(), 100)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.scatter(x, y, label="Observed")
    ax.plot(xs, model.predict(xs), color="red", ls="--",
            label=f"y = {model.slope:.4f}x + {model.intercept:.4f}")
    ax.set_title("Least-squares fit")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(); ax.grid(True); fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()
        plt.close(fig)


def main(argv=None):
    args = parse_args() if argv is None else argv

    print(f"Mean of {SEQUENCE}: {mean(SEQUENCE):f}")

    print()
    print(f"Variance of X: {variance(X):f}")
    print(f"Standard Dev of X: {standard_deviation(X):f}")
    print(f"Covariance of X and Y: {covariance(X, Y):f}")
    print(f"Correlation of X and Y: {correlation(X, Y):f}")
    print(f"Correlation of X and Y (legacy sqrt-of-mean std): {legacy_correlation(X, Y):f}")

    model = linear_regression(X2, Y2)
    print()
    print(f"Linear Regression: y = {model.slope:f}x + {model.intercept:f}")

    if args:
        print(f"saving fit plot to: {args[0]}")
        plot_fit(X2, Y2, model, save_path=args[0])

    return model


if __name__ == "__main__":
    main()
