# commerce_forecast/services/dashboard_service.py
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from commerce_forecast.models import Alert, Forecast, Product, SalesHistory
from commerce_forecast.config import config
from commerce_forecast.services.alert_service import AlertService
from commerce_forecast.services.sales_service import SalesService

class DashboardService:
    """Aggregates for the dashboard overview."""
    
    def __init__(self, session: Session):
        self.session = session
        self.sales = SalesService(session)
        self.alerts = AlertService(session)
    
    def get_overview(self, user_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Summary figures for a user.
        
        Args:
            user_id: User ID
            now: Reference time for the predicted revenue window, defaults
                to the current time
            
        Returns:
            Dictionary with total_products, total_revenue (cents),
            total_sales (units), unread_alerts, predicted_revenue (cents,
            forecasts dated within the configured window from now),
            recent_sales and recent_alerts
        """
        settings = config.dashboard_config
        now = now or datetime.now()
        window_end = now + timedelta(days=settings['predicted_revenue_window_days'])
        
        total_products = (
            self.session.query(func.count(Product.id))
            .filter(Product.user_id == user_id)
            .scalar()
        )
        total_revenue, total_sales = (
            self.session.query(
                func.coalesce(func.sum(SalesHistory.revenue), 0),
                func.coalesce(func.sum(SalesHistory.quantity), 0)
            )
            .filter(SalesHistory.user_id == user_id)
            .one()
        )
        unread_alerts = (
            self.session.query(func.count(Alert.id))
            .filter(Alert.user_id == user_id, Alert.is_read == False)
            .scalar()
        )
        predicted_revenue = (
            self.session.query(func.coalesce(func.sum(Forecast.predicted_revenue), 0))
            .filter(
                Forecast.user_id == user_id,
                Forecast.forecast_date >= now.date(),
                Forecast.forecast_date <= window_end.date()
            )
            .scalar()
        )
        
        return {
            'total_products': total_products,
            'total_revenue': int(total_revenue),
            'total_sales': int(total_sales),
            'unread_alerts': unread_alerts,
            'predicted_revenue': int(predicted_revenue),
            'recent_sales': self.sales.list_sales(user_id, limit=settings['recent_sales_limit']),
            'recent_alerts': self.alerts.list_alerts(user_id, limit=settings['recent_alerts_limit'])
        }
