# commerce_forecast/services/alert_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from commerce_forecast.models import Alert, AlertSeverity, AlertType
from commerce_forecast.core.anomaly import detect_anomalies
from commerce_forecast.exceptions import NotFoundError
from commerce_forecast.services.forecast_service import ForecastService
from commerce_forecast.services.product_service import ProductService
from commerce_forecast.services.sales_service import SalesService
from commerce_forecast.logging_setup import get_logger

logger = get_logger(__name__)

class AlertService:
    """Service for demand alerts."""
    
    def __init__(self, session: Session):
        """Initialize the alert service.
        
        Args:
            session: Database session
        """
        self.session = session
        self.products = ProductService(session)
        self.sales = SalesService(session)
        self.forecasts = ForecastService(session)
    
    def list_alerts(
        self,
        user_id: int,
        is_read: Optional[bool] = None,
        limit: Optional[int] = None
    ) -> List[Alert]:
        """Get a user's alerts, newest first.
        
        Args:
            user_id: Owner of the alerts
            is_read: Optional read status filter
            limit: Optional maximum number of alerts
            
        Returns:
            List of alerts
        """
        query = self.session.query(Alert).filter(Alert.user_id == user_id)
        
        if is_read is not None:
            query = query.filter(Alert.is_read == is_read)
        
        query = query.order_by(Alert.created_at.desc(), Alert.id.desc())
        
        if limit is not None:
            query = query.limit(limit)
        
        return query.all()
    
    def _require_alert(self, alert_id: int, user_id: int) -> Alert:
        alert = self.session.get(Alert, alert_id)
        if alert is None or alert.user_id != user_id:
            raise NotFoundError(f"Alert {alert_id} not found", details={'alert_id': alert_id})
        return alert
    
    def mark_as_read(self, alert_id: int, user_id: int) -> Alert:
        """Mark an alert as read."""
        alert = self._require_alert(alert_id, user_id)
        alert.is_read = True
        self.session.flush()
        return alert
    
    def delete_alert(self, alert_id: int, user_id: int) -> None:
        """Delete an alert."""
        alert = self._require_alert(alert_id, user_id)
        self.session.delete(alert)
        self.session.flush()
    
    def generate_alerts(self, product_id: int, user_id: int) -> List[Alert]:
        """Run anomaly detection on a product's stored forecast.
        
        Args:
            product_id: Product ID
            user_id: Owner of the product
            
        Returns:
            List of stored alerts, empty when the product has no sales or
            no forecast yet
            
        Raises:
            NotFoundError: unknown product
        """
        product = self.products.require_product(product_id, user_id)
        records = self.sales.get_sales_records(product_id, user_id)
        forecast = [row.to_point() for row in self.forecasts.get_product_forecasts(product_id, user_id)]
        
        if not records or not forecast:
            logger.warning(f"Skipping alert generation for product {product_id}: no sales or forecast")
            return []
        
        events = detect_anomalies(ProductService.to_engine_product(product), records, forecast)
        
        alerts = [
            Alert(
                product_id=product_id,
                user_id=user_id,
                alert_type=AlertType.from_string(event['alert_type']),
                severity=AlertSeverity(event['severity']),
                message=event['message'],
                is_read=False
            )
            for event in events
        ]
        self.session.add_all(alerts)
        self.session.flush()
        
        logger.info(f"Generated {len(alerts)} alerts for product {product_id}")
        return alerts
