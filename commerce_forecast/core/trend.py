# commerce_forecast/core/trend.py
from typing import Dict, Mapping, Sequence, Union

from ..utils.date_utils import sort_by_date
from ..utils.math_utils import calculate_mean, linear_regression

INCREASING = 'increasing'
DECREASING = 'decreasing'
STABLE = 'stable'

# Fewer records than this leave the regression undefined
MIN_TREND_RECORDS = 2

# Growth rate (% per sample) beyond which a trend is not stable
TREND_THRESHOLD_PCT = 2.0

TREND_STRENGTH_SCALE = 10
MAX_TREND_STRENGTH = 100

def analyze_trend(records: Sequence[Mapping]) -> Dict[str, Union[str, float]]:
    """Fit a linear trend over the quantity series of a product.
    
    Records are ordered by sale date and regressed against their position
    (0..n-1), not against calendar time, so irregular gaps between sales
    are ignored.
    
    Args:
        records: Sales records in any order
        
    Returns:
        Dictionary with direction, strength (0-100) and signed growth_rate
        in percent per sample
    """
    if len(records) < MIN_TREND_RECORDS:
        return {'direction': STABLE, 'strength': 0, 'growth_rate': 0}
    
    quantities = [record['quantity'] for record in sort_by_date(records)]
    positions = list(range(len(quantities)))
    
    # n >= 2 distinct positions, the denominator cannot be zero
    slope, _ = linear_regression(positions, quantities)
    
    average = calculate_mean(quantities)
    growth_rate = (slope / average) * 100 if average > 0 else 0.0
    strength = min(abs(growth_rate) * TREND_STRENGTH_SCALE, MAX_TREND_STRENGTH)
    
    if growth_rate > TREND_THRESHOLD_PCT:
        direction = INCREASING
    elif growth_rate < -TREND_THRESHOLD_PCT:
        direction = DECREASING
    else:
        direction = STABLE
    
    return {'direction': direction, 'strength': strength, 'growth_rate': growth_rate}
