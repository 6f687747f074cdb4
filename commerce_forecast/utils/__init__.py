from .date_utils import add_days, convert_to_date, parse_date, sort_by_date
from .math_utils import round_half_up, calculate_mean, linear_regression, moving_average
from .validation import validate_product, validate_sale, validate_days_ahead

__all__ = [
    'add_days',
    'convert_to_date',
    'parse_date',
    'sort_by_date',
    'round_half_up',
    'calculate_mean',
    'linear_regression',
    'moving_average',
    'validate_product',
    'validate_sale',
    'validate_days_ahead'
]
