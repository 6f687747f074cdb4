# commerce_forecast/models.py
from datetime import datetime
import enum

from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, Text, Enum, Index
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

class TrendDirection(enum.Enum):
    """Direction of a sales trend."""
    INCREASING = 'increasing'
    DECREASING = 'decreasing'
    STABLE = 'stable'

    def __str__(self):
        return self.value

class AlertType(enum.Enum):
    """Kinds of demand alerts.

    Values:
        HIGH_DEMAND: a day in the coming week well above the week's average
        LOW_DEMAND: the whole coming week well below its own average
        STOCK_ALERT: current stock does not cover next week's demand
        TREND_CHANGE: the sales history shows a strong trend
    """
    HIGH_DEMAND = 'high_demand'
    LOW_DEMAND = 'low_demand'
    STOCK_ALERT = 'stock_alert'
    TREND_CHANGE = 'trend_change'

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: str) -> 'AlertType':
        """Create an AlertType from its string value.

        Raises:
            ValueError if the string value is not valid
        """
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(member.value for member in cls)
            raise ValueError(f"Invalid alert type: {value}. Valid values are: {valid}")

class AlertSeverity(enum.Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'

    def __str__(self):
        return self.value

def _enum_values(enum_class):
    return [member.value for member in enum_class]

class Product(Base):
    """Catalog product owned by a user."""
    __tablename__ = 'product'

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100))
    category = Column(String(100))
    price = Column(Integer, nullable=False)  # cents
    current_stock = Column(Integer, default=0)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    sales = relationship("SalesHistory", back_populates="product", cascade="all, delete-orphan")
    forecasts = relationship("Forecast", back_populates="product", cascade="all, delete-orphan")
    alerts = relationship("Alert", back_populates="product", cascade="all, delete-orphan")

class SalesHistory(Base):
    """Historical sale of a product."""
    __tablename__ = 'sales_history'

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey('product.id'), nullable=False)
    user_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    revenue = Column(Integer, nullable=False)  # cents
    sale_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    product = relationship("Product", back_populates="sales")

    __table_args__ = (
        Index('ix_sales_history_product_date', 'product_id', 'sale_date'),
    )

    def to_record(self):
        """Convert the row into a sales record for the forecasting engine."""
        return {
            'quantity': self.quantity,
            'revenue': self.revenue,
            'sale_date': self.sale_date
        }

class Forecast(Base):
    """One forecast day for a product."""
    __tablename__ = 'forecast'

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey('product.id'), nullable=False)
    user_id = Column(Integer, nullable=False)
    forecast_date = Column(Date, nullable=False)
    predicted_quantity = Column(Integer, nullable=False)
    predicted_revenue = Column(Integer, nullable=False)  # cents
    confidence = Column(Integer, nullable=False)
    trend = Column(Enum(TrendDirection, values_callable=_enum_values))
    seasonality_factor = Column(Integer, default=100)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    product = relationship("Product", back_populates="forecasts")

    __table_args__ = (
        Index('ix_forecast_product_date', 'product_id', 'forecast_date'),
    )

    def to_point(self):
        """Convert the row into a forecast point for the anomaly detector."""
        return {
            'forecast_date': self.forecast_date,
            'predicted_quantity': self.predicted_quantity,
            'predicted_revenue': self.predicted_revenue,
            'confidence': self.confidence,
            'trend': str(self.trend) if self.trend is not None else None,
            'seasonality_factor': self.seasonality_factor if self.seasonality_factor is not None else 100
        }

class Alert(Base):
    """Demand alert raised for a product."""
    __tablename__ = 'alert'

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey('product.id'), nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    alert_type = Column(Enum(AlertType, values_callable=_enum_values), nullable=False)
    severity = Column(Enum(AlertSeverity, values_callable=_enum_values), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    product = relationship("Product", back_populates="alerts")
