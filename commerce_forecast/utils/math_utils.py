# commerce_forecast/utils/math_utils.py
import math
from typing import List, Sequence, Tuple

import numpy as np

from commerce_forecast.exceptions import ValidationError

def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded towards +infinity.
    
    Python's built-in round() rounds halves to even, which would shift
    forecast quantities like 12.5 down to 12.
    
    Args:
        value: Value to round
        
    Returns:
        Rounded integer
    """
    return int(math.floor(value + 0.5))

def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    
    return float(np.mean(np.asarray(values, dtype=float)))

def linear_regression(
    x: Sequence[float],
    y: Sequence[float]
) -> Tuple[float, float]:
    """Ordinary least-squares fit of y on x.
    
    slope = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2), intercept = (Sy - slope*Sx) / n
    
    Args:
        x: Independent values
        y: Dependent values
        
    Returns:
        Tuple with slope and intercept
    """
    if len(x) != len(y) or len(x) < 2:
        raise ValidationError("Linear regression needs two equally sized series of at least 2 values")
    
    x_values = np.asarray(x, dtype=float)
    y_values = np.asarray(y, dtype=float)
    n = len(x_values)
    
    sum_x = x_values.sum()
    sum_y = y_values.sum()
    sum_xy = (x_values * y_values).sum()
    sum_x2 = (x_values * x_values).sum()
    
    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    
    return float(slope), float(intercept)

def moving_average(values: Sequence[float], window: int = 7) -> List[float]:
    """Trailing moving average.
    
    The first window-1 positions keep their raw value.
    
    Args:
        values: Values in chronological order
        window: Window size
        
    Returns:
        List of smoothed values, same length as values
    """
    if window < 1:
        raise ValidationError(f"Moving average window must be positive, got {window}")
    
    data = np.asarray(values, dtype=float)
    if len(data) < window:
        return data.tolist()
    
    averages = np.convolve(data, np.ones(window), mode='valid') / window
    return data[:window - 1].tolist() + averages.tolist()
