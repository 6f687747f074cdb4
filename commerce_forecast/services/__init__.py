from .product_service import ProductService
from .sales_service import SalesService
from .forecast_service import ForecastService
from .alert_service import AlertService
from .dashboard_service import DashboardService

__all__ = [
    'ProductService',
    'SalesService',
    'ForecastService',
    'AlertService',
    'DashboardService'
]
