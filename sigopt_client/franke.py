"""
Franke function, a smooth 2-D test surface for optimization examples.
See http://www.sfu.ca/~ssurjano/franke2d.html
"""

import numpy as np


def franke(x, y):
    """
    Evaluate the Franke function.

    Args:
        x: First dimension, scalar or array.
        y: Second dimension, scalar or array.

    Returns:
        Function value with the broadcast shape of x and y.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    e1 = -((9 * x - 2) ** 2) / 4 - ((9 * y - 2) ** 2) / 4
    e2 = -((9 * x + 1) ** 2) / 49 - (9 * y + 1) / 10
    e3 = -((9 * x - 7) ** 2) / 4 - ((9 * y - 3) ** 2) / 4
    e4 = -((9 * x - 4) ** 2) - ((9 * y - 7) ** 2)

    result = 0.75 * np.exp(e1) + 0.75 * np.exp(e2) + 0.5 * np.exp(e3) - 0.2 * np.exp(e4)
    return float(result) if result.ndim == 0 else result
