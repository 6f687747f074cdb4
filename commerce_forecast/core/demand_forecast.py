# commerce_forecast/core/demand_forecast.py
from typing import Dict, List, Mapping, Sequence

from ..utils.date_utils import add_days, convert_to_date, sort_by_date
from ..utils.math_utils import calculate_mean, round_half_up
from .seasonality import (
    analyze_seasonality, NEUTRAL_SEASONALITY_FACTOR
)
from .trend import analyze_trend

DEFAULT_DAYS_AHEAD = 30
MAX_DAYS_AHEAD = 90

# Number of most recent records averaged into the baseline demand
BASELINE_WINDOW = 30

# The growth rate compounds linearly once per this many days
TREND_PERIOD_DAYS = 30

# Extra multiplier for forecast days falling in a peak or low month
PEAK_MONTH_MULTIPLIER = 1.2
LOW_MONTH_MULTIPLIER = 0.8

# Confidence: 2 points per record up to 90, minus up to 20 across the
# horizon, never below 50
CONFIDENCE_PER_RECORD = 2
MAX_CONFIDENCE = 90
MIN_CONFIDENCE = 50
CONFIDENCE_DECAY = 20

def calculate_trend_factor(growth_rate: float, day_offset: int) -> float:
    """Trend multiplier for a day offset.
    
    Args:
        growth_rate: Signed growth rate in percent
        day_offset: Days after the last sale (1-based)
        
    Returns:
        Multiplier applied to the baseline demand
    """
    return 1 + (growth_rate / 100) * (day_offset / TREND_PERIOD_DAYS)

def calculate_seasonal_factor(seasonality: Mapping, month: int) -> float:
    """Seasonal multiplier for a calendar month.
    
    Args:
        seasonality: Result of analyze_seasonality
        month: Month number (1-12) of the forecast day
        
    Returns:
        Multiplier applied to the baseline demand
    """
    factor = seasonality['seasonality_factor'] / NEUTRAL_SEASONALITY_FACTOR
    
    if month in seasonality['peak_months']:
        factor *= PEAK_MONTH_MULTIPLIER
    elif month in seasonality['low_months']:
        factor *= LOW_MONTH_MULTIPLIER
    
    return factor

def calculate_confidence(record_count: int, day_offset: int, days_ahead: int) -> int:
    """Confidence score for one forecast day.
    
    Args:
        record_count: Number of sales records behind the forecast
        day_offset: Days after the last sale (1-based)
        days_ahead: Forecast horizon
        
    Returns:
        Confidence between MIN_CONFIDENCE and MAX_CONFIDENCE
    """
    base_confidence = min(record_count * CONFIDENCE_PER_RECORD, MAX_CONFIDENCE)
    confidence = base_confidence - (day_offset / days_ahead) * CONFIDENCE_DECAY
    return round_half_up(max(confidence, MIN_CONFIDENCE))

def generate_forecast(
    records: Sequence[Mapping],
    days_ahead: int = DEFAULT_DAYS_AHEAD
) -> List[Dict]:
    """Generate a daily demand forecast for a product.
    
    The baseline is the average of the last BASELINE_WINDOW records. Each
    forecast day scales it by the trend factor (growth rate spread over
    30-day periods) and by the seasonal factor of the day's month.
    
    Args:
        records: Sales records in any order
        days_ahead: Number of days to forecast, 1 to MAX_DAYS_AHEAD.
            The range is checked by callers.
        
    Returns:
        List of forecast points, one per day starting the day after the
        last sale. Empty when there are no records.
    """
    if not records:
        return []
    
    ordered = sort_by_date(records)
    
    trend = analyze_trend(ordered)
    seasonality = analyze_seasonality(ordered)
    
    recent = ordered[-BASELINE_WINDOW:]
    avg_quantity = calculate_mean([record['quantity'] for record in recent])
    avg_revenue = calculate_mean([record['revenue'] for record in recent])
    
    last_date = convert_to_date(ordered[-1]['sale_date'])
    
    forecast = []
    for day_offset in range(1, days_ahead + 1):
        forecast_date = add_days(last_date, day_offset)
        
        trend_factor = calculate_trend_factor(trend['growth_rate'], day_offset)
        seasonal_factor = calculate_seasonal_factor(seasonality, forecast_date.month)
        
        predicted_quantity = round_half_up(avg_quantity * trend_factor * seasonal_factor)
        predicted_revenue = round_half_up(avg_revenue * trend_factor * seasonal_factor)
        
        forecast.append({
            'forecast_date': forecast_date,
            'predicted_quantity': max(predicted_quantity, 0),
            'predicted_revenue': max(predicted_revenue, 0),
            'confidence': calculate_confidence(len(ordered), day_offset, days_ahead),
            'trend': trend['direction'],
            'seasonality_factor': round_half_up(seasonal_factor * 100)
        })
    
    return forecast
