# commerce_forecast/core/anomaly.py
from typing import Dict, List, Mapping, Sequence

from ..utils.math_utils import calculate_mean, round_half_up
from .trend import analyze_trend

HIGH_DEMAND = 'high_demand'
LOW_DEMAND = 'low_demand'
STOCK_ALERT = 'stock_alert'
TREND_CHANGE = 'trend_change'

SEVERITY_LOW = 'low'
SEVERITY_MEDIUM = 'medium'
SEVERITY_HIGH = 'high'

# Number of leading forecast days inspected
ALERT_WINDOW_DAYS = 7

# Day-level demand relative to the window's average demand
HIGH_DEMAND_RATIO = 1.5
LOW_DEMAND_RATIO = 0.5

TREND_CHANGE_STRENGTH = 70

def _alert(alert_type: str, severity: str, message: str) -> Dict[str, str]:
    return {'alert_type': alert_type, 'severity': severity, 'message': message}

def detect_anomalies(
    product: Mapping,
    records: Sequence[Mapping],
    forecast: Sequence[Mapping]
) -> List[Dict[str, str]]:
    """Derive demand alerts for a product from its forecast.
    
    Checks are independent, any combination may fire:
    
    - high_demand: a day in the first week above 1.5x the week's average
    - low_demand: every day of the first week below 0.5x the week's average.
      Measured against the same week, so a flat week never fires.
    - stock_alert: current stock (missing counts as 0) below the week's
      total predicted demand
    - trend_change: strength of the sales trend above 70
    
    Args:
        product: Mapping with id, name and current_stock
        records: Sales records of the product
        forecast: Forecast points in date order
        
    Returns:
        List of alert dictionaries with alert_type, severity and message
    """
    alerts = []
    
    if not forecast:
        return alerts
    
    name = product['name']
    window = [point['predicted_quantity'] for point in forecast[:ALERT_WINDOW_DAYS]]
    avg_demand = calculate_mean(window)
    
    if any(quantity > avg_demand * HIGH_DEMAND_RATIO for quantity in window):
        alerts.append(_alert(
            HIGH_DEMAND, SEVERITY_HIGH,
            f"High demand predicted for {name}. "
            f"Expected {round_half_up(avg_demand)} units/day in the next week."
        ))
    
    if all(quantity < avg_demand * LOW_DEMAND_RATIO for quantity in window):
        alerts.append(_alert(
            LOW_DEMAND, SEVERITY_MEDIUM,
            f"Low demand predicted for {name}. Consider promotional strategies."
        ))
    
    total_demand = sum(window)
    current_stock = product.get('current_stock') or 0
    if current_stock < total_demand:
        alerts.append(_alert(
            STOCK_ALERT, SEVERITY_HIGH,
            f"Stock alert for {name}. Current stock ({current_stock}) may not cover "
            f"predicted demand ({total_demand} units) for next {len(window)} days."
        ))
    
    trend = analyze_trend(records)
    if trend['strength'] > TREND_CHANGE_STRENGTH:
        alerts.append(_alert(
            TREND_CHANGE, SEVERITY_MEDIUM,
            f"Strong {trend['direction']} trend detected for {name}. "
            f"Growth rate: {trend['growth_rate']:.1f}%."
        ))
    
    return alerts
