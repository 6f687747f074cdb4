from .trend import (
    analyze_trend, INCREASING, DECREASING, STABLE,
    MIN_TREND_RECORDS, TREND_THRESHOLD_PCT, TREND_STRENGTH_SCALE, MAX_TREND_STRENGTH
)
from .seasonality import (
    analyze_seasonality, calculate_monthly_means,
    MIN_SEASONALITY_RECORDS, PEAK_MONTH_RATIO, LOW_MONTH_RATIO, NEUTRAL_SEASONALITY_FACTOR
)
from .demand_forecast import (
    generate_forecast, calculate_trend_factor, calculate_seasonal_factor, calculate_confidence,
    DEFAULT_DAYS_AHEAD, MAX_DAYS_AHEAD, BASELINE_WINDOW, TREND_PERIOD_DAYS,
    PEAK_MONTH_MULTIPLIER, LOW_MONTH_MULTIPLIER,
    CONFIDENCE_PER_RECORD, MAX_CONFIDENCE, MIN_CONFIDENCE, CONFIDENCE_DECAY
)
from .anomaly import (
    detect_anomalies, HIGH_DEMAND, LOW_DEMAND, STOCK_ALERT, TREND_CHANGE,
    ALERT_WINDOW_DAYS, HIGH_DEMAND_RATIO, LOW_DEMAND_RATIO, TREND_CHANGE_STRENGTH
)

__all__ = [
    'analyze_trend',
    'analyze_seasonality',
    'calculate_monthly_means',
    'generate_forecast',
    'calculate_trend_factor',
    'calculate_seasonal_factor',
    'calculate_confidence',
    'detect_anomalies',
    'INCREASING',
    'DECREASING',
    'STABLE',
    'HIGH_DEMAND',
    'LOW_DEMAND',
    'STOCK_ALERT',
    'TREND_CHANGE',
    'MIN_TREND_RECORDS',
    'TREND_THRESHOLD_PCT',
    'TREND_STRENGTH_SCALE',
    'MAX_TREND_STRENGTH',
    'MIN_SEASONALITY_RECORDS',
    'PEAK_MONTH_RATIO',
    'LOW_MONTH_RATIO',
    'NEUTRAL_SEASONALITY_FACTOR',
    'DEFAULT_DAYS_AHEAD',
    'MAX_DAYS_AHEAD',
    'BASELINE_WINDOW',
    'TREND_PERIOD_DAYS',
    'PEAK_MONTH_MULTIPLIER',
    'LOW_MONTH_MULTIPLIER',
    'CONFIDENCE_PER_RECORD',
    'MAX_CONFIDENCE',
    'MIN_CONFIDENCE',
    'CONFIDENCE_DECAY',
    'ALERT_WINDOW_DAYS',
    'HIGH_DEMAND_RATIO',
    'LOW_DEMAND_RATIO',
    'TREND_CHANGE_STRENGTH'
]
