# commerce_forecast/core/seasonality.py
from collections import defaultdict
from typing import Dict, List, Mapping, Sequence, Union

from ..utils.math_utils import calculate_mean, round_half_up

# A year of monthly patterns needs at least this many records
MIN_SEASONALITY_RECORDS = 12

# Month mean relative to the mean of monthly means
PEAK_MONTH_RATIO = 1.2
LOW_MONTH_RATIO = 0.8

NEUTRAL_SEASONALITY_FACTOR = 100

def _no_season() -> Dict[str, Union[bool, List[int], int]]:
    return {
        'has_season': False,
        'peak_months': [],
        'low_months': [],
        'seasonality_factor': NEUTRAL_SEASONALITY_FACTOR
    }

def calculate_monthly_means(records: Sequence[Mapping]) -> Dict[int, float]:
    """Mean quantity per calendar month, folding all years together.
    
    Args:
        records: Sales records
        
    Returns:
        Dictionary mapping month number (1-12) to mean quantity, only for
        months present in the records
    """
    quantities_by_month = defaultdict(list)
    for record in records:
        quantities_by_month[record['sale_date'].month].append(record['quantity'])
    
    return {
        month: calculate_mean(quantities)
        for month, quantities in sorted(quantities_by_month.items())
    }

def analyze_seasonality(records: Sequence[Mapping]) -> Dict[str, Union[bool, List[int], int]]:
    """Identify peak and low months of a product's sales.
    
    Each month present in the data is compared with the mean of the monthly
    means, so thinly sampled months weigh as much as busy ones. A month
    above 1.2x that mean is a peak, one below 0.8x is a low; the two sets
    cannot overlap.
    
    Args:
        records: Sales records in any order
        
    Returns:
        Dictionary with has_season, peak_months, low_months (ascending month
        numbers) and seasonality_factor (percent, 100 = no effect)
    """
    if len(records) < MIN_SEASONALITY_RECORDS:
        return _no_season()
    
    monthly_means = calculate_monthly_means(records)
    overall_mean = calculate_mean(list(monthly_means.values()))
    
    if overall_mean <= 0:
        return _no_season()
    
    peak_months = [m for m, avg in monthly_means.items() if avg > overall_mean * PEAK_MONTH_RATIO]
    low_months = [m for m, avg in monthly_means.items() if avg < overall_mean * LOW_MONTH_RATIO]
    
    has_season = bool(peak_months or low_months)
    if has_season:
        seasonality_factor = round_half_up(max(monthly_means.values()) / overall_mean * 100)
    else:
        seasonality_factor = NEUTRAL_SEASONALITY_FACTOR
    
    return {
        'has_season': has_season,
        'peak_months': peak_months,
        'low_months': low_months,
        'seasonality_factor': seasonality_factor
    }
