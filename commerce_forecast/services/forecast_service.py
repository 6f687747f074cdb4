# commerce_forecast/services/forecast_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from commerce_forecast.models import Forecast, TrendDirection
from commerce_forecast.core.demand_forecast import generate_forecast
from commerce_forecast.core.seasonality import analyze_seasonality
from commerce_forecast.core.trend import analyze_trend
from commerce_forecast.config import config
from commerce_forecast.exceptions import NoSalesHistoryError, ValidationError
from commerce_forecast.services.product_service import ProductService
from commerce_forecast.services.sales_service import SalesService
from commerce_forecast.utils.date_utils import sort_by_date
from commerce_forecast.utils.math_utils import moving_average
from commerce_forecast.utils.validation import validate_days_ahead
from commerce_forecast.logging_setup import get_logger

# Set up logging
logger = get_logger(__name__)

# Window of the smoothed quantity series returned by analyze_product
SMOOTHING_WINDOW = 7

class ForecastService:
    """Service for handling demand forecasting operations."""
    
    def __init__(self, session: Session):
        """Initialize the forecast service.
        
        Args:
            session: Database session
        """
        self.session = session
        self.products = ProductService(session)
        self.sales = SalesService(session)
    
    def list_forecasts(self, user_id: int) -> List[Forecast]:
        """Get all of a user's forecast rows, latest forecast date first."""
        return (
            self.session.query(Forecast)
            .filter(Forecast.user_id == user_id)
            .order_by(Forecast.forecast_date.desc(), Forecast.product_id)
            .all()
        )
    
    def get_product_forecasts(self, product_id: int, user_id: int) -> List[Forecast]:
        """Get a product's forecast rows in date order."""
        return (
            self.session.query(Forecast)
            .filter(Forecast.product_id == product_id, Forecast.user_id == user_id)
            .order_by(Forecast.forecast_date)
            .all()
        )
    
    def generate_forecasts(
        self,
        product_id: int,
        user_id: int,
        days_ahead: Optional[int] = None
    ) -> List[Forecast]:
        """Generate and store a demand forecast for a product.
        
        Forecast rows from earlier runs for the product are replaced.
        
        Args:
            product_id: Product ID
            user_id: Owner of the product
            days_ahead: Forecast horizon in days, defaults to the configured
                default_days_ahead
            
        Returns:
            List of stored forecast rows in date order
            
        Raises:
            ValidationError: horizon outside 1..max_days_ahead
            NotFoundError: unknown product
            NoSalesHistoryError: the product has no sales
        """
        if days_ahead is None:
            days_ahead = config.forecast_config['default_days_ahead']
        
        errors = validate_days_ahead(days_ahead)
        if errors:
            logger.warning(f"Rejected forecast for product {product_id}: {errors['days_ahead']}")
            raise ValidationError(errors['days_ahead'], details=errors)
        
        product = self.products.require_product(product_id, user_id)
        records = self.sales.get_sales_records(product_id, user_id)
        
        if not records:
            logger.warning(f"Cannot forecast product {product_id}: no sales history")
            raise NoSalesHistoryError(
                f"No sales history available for product {product.name}",
                details={'product_id': product_id}
            )
        
        points = generate_forecast(records, days_ahead)
        
        previous = self.get_product_forecasts(product_id, user_id)
        for row in previous:
            self.session.delete(row)
        if previous:
            self.session.flush()
            logger.info(f"Replaced {len(previous)} earlier forecast rows for product {product_id}")
        
        rows = [
            Forecast(product_id=product_id, user_id=user_id, **dict(point, trend=TrendDirection(point['trend'])))
            for point in points
        ]
        self.session.add_all(rows)
        self.session.flush()
        
        logger.info(
            f"Generated {len(rows)}-day forecast for product {product_id} "
            f"from {len(records)} sales records"
        )
        return rows
    
    def analyze_product(self, product_id: int, user_id: int) -> Dict[str, Any]:
        """Trend and seasonality analysis of a product's sales.
        
        Returns:
            Dictionary with trend, seasonality and smoothed_quantities, all
            None when the product has no sales
        """
        self.products.require_product(product_id, user_id)
        records = self.sales.get_sales_records(product_id, user_id)
        
        if not records:
            return {'trend': None, 'seasonality': None, 'smoothed_quantities': None}
        
        quantities = [record['quantity'] for record in sort_by_date(records)]
        
        return {
            'trend': analyze_trend(records),
            'seasonality': analyze_seasonality(records),
            'smoothed_quantities': moving_average(quantities, SMOOTHING_WINDOW)
        }
