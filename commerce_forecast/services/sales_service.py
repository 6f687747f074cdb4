# commerce_forecast/services/sales_service.py
import csv
import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from commerce_forecast.models import SalesHistory
from commerce_forecast.exceptions import DataImportError, ValidationError
from commerce_forecast.services.product_service import ProductService
from commerce_forecast.utils.date_utils import parse_date
from commerce_forecast.utils.math_utils import round_half_up
from commerce_forecast.utils.validation import validate_sale
from commerce_forecast.logging_setup import get_logger

logger = get_logger(__name__)

# Accepted column names in import files, first match wins
DATE_COLUMNS = ('date', 'Date', 'saleDate', 'SaleDate', 'sale_date')
QUANTITY_COLUMNS = ('quantity', 'Quantity')
REVENUE_COLUMNS = ('revenue', 'Revenue', 'price', 'Price')

def _first_value(row: Mapping[str, Any], columns: Iterable[str]) -> Any:
    for column in columns:
        value = row.get(column)
        if value not in (None, ''):
            return value
    return None

def parse_sale_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert one import row into sale fields.
    
    Quantity is truncated to an integer, revenue is read in currency units
    and stored in cents.
    
    Raises:
        ValueError if a field is missing or cannot be parsed
    """
    quantity = _first_value(row, QUANTITY_COLUMNS)
    revenue = _first_value(row, REVENUE_COLUMNS)
    sale_date = _first_value(row, DATE_COLUMNS)
    
    if quantity is None or revenue is None or sale_date is None:
        raise ValueError("date, quantity and revenue are required")
    
    if not isinstance(sale_date, datetime):
        sale_date = parse_date(str(sale_date))
    
    quantity = float(quantity)
    cents = float(revenue) * 100
    if not (math.isfinite(quantity) and math.isfinite(cents)):
        raise ValueError("quantity and revenue must be finite numbers")
    
    return {
        'quantity': int(quantity),
        'revenue': round_half_up(cents),
        'sale_date': sale_date
    }

class SalesService:
    """Service for sales history."""
    
    def __init__(self, session: Session):
        """Initialize the sales service.
        
        Args:
            session: Database session
        """
        self.session = session
        self.products = ProductService(session)
    
    def list_sales(self, user_id: int, limit: Optional[int] = None) -> List[SalesHistory]:
        """Get a user's sales, most recent sale date first."""
        query = (
            self.session.query(SalesHistory)
            .filter(SalesHistory.user_id == user_id)
            .order_by(SalesHistory.sale_date.desc(), SalesHistory.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()
    
    def get_product_sales(self, product_id: int, user_id: int) -> List[SalesHistory]:
        """Get a product's sales, most recent sale date first."""
        return (
            self.session.query(SalesHistory)
            .filter(SalesHistory.product_id == product_id, SalesHistory.user_id == user_id)
            .order_by(SalesHistory.sale_date.desc(), SalesHistory.id.desc())
            .all()
        )
    
    def get_sales_records(self, product_id: int, user_id: int) -> List[Dict[str, Any]]:
        """Get a product's sales as engine records."""
        return [sale.to_record() for sale in self.get_product_sales(product_id, user_id)]
    
    def create_sale(
        self,
        product_id: int,
        user_id: int,
        quantity: int,
        revenue: int,
        sale_date: datetime
    ) -> SalesHistory:
        """Record a single sale.
        
        Args:
            product_id: Product ID
            user_id: Owner of the product
            quantity: Units sold, at least 1
            revenue: Revenue in cents
            sale_date: Date of the sale
            
        Returns:
            The new sales history row
        """
        self.products.require_product(product_id, user_id)
        
        fields = {'quantity': quantity, 'revenue': revenue, 'sale_date': sale_date}
        errors = validate_sale(fields)
        if errors:
            raise ValidationError("Invalid sale", details=errors)
        
        sale = SalesHistory(product_id=product_id, user_id=user_id, **fields)
        self.session.add(sale)
        self.session.flush()
        return sale
    
    def bulk_create_sales(self, user_id: int, sales: List[Mapping[str, Any]]) -> int:
        """Record many sales at once.
        
        Every sale is validated before anything is written.
        
        Args:
            user_id: Owner of the products
            sales: Mappings with product_id, quantity, revenue and sale_date
            
        Returns:
            Number of sales recorded
        """
        rows = []
        for index, sale in enumerate(sales):
            errors = validate_sale(sale)
            if errors:
                raise ValidationError(f"Invalid sale at position {index}", details=errors)
            
            self.products.require_product(sale['product_id'], user_id)
            rows.append(SalesHistory(
                product_id=sale['product_id'],
                user_id=user_id,
                quantity=sale['quantity'],
                revenue=sale['revenue'],
                sale_date=sale['sale_date']
            ))
        
        self.session.add_all(rows)
        self.session.flush()
        
        logger.info(f"Recorded {len(rows)} sales for user {user_id}")
        return len(rows)
    
    def parse_sales_file(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        """Read sales from a CSV or JSON file.
        
        CSV files need a header row. JSON files hold a list of objects.
        Rows that cannot be parsed or fail validation are skipped with a
        warning.
        
        Args:
            path: Path to a .csv or .json file
            
        Returns:
            List of sale field dictionaries
        """
        path = Path(path)
        suffix = path.suffix.lower()
        
        try:
            with open(path, newline='', encoding='utf-8-sig') as handle:
                if suffix == '.csv':
                    reader = csv.DictReader(handle, skipinitialspace=True)
                    rows = [
                        {key.strip(): value.strip() for key, value in row.items() if isinstance(value, str)}
                        for row in reader
                    ]
                elif suffix == '.json':
                    rows = json.load(handle)
                else:
                    raise DataImportError(f"Unsupported file type: {path.suffix or path.name}")
        except OSError as e:
            raise DataImportError(f"Cannot read {path}: {str(e)}")
        except json.JSONDecodeError as e:
            raise DataImportError(f"Invalid JSON in {path}: {str(e)}")
        
        if not isinstance(rows, list):
            raise DataImportError(f"{path} must contain a list of sales")
        
        sales = []
        for line_number, row in enumerate(rows, start=1):
            if not isinstance(row, dict):
                logger.warning(f"Skipping row {line_number} of {path.name}: not an object")
                continue
            
            try:
                sale = parse_sale_row(row)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping row {line_number} of {path.name}: {str(e)}")
                continue
            
            errors = validate_sale(sale)
            if errors:
                logger.warning(f"Skipping row {line_number} of {path.name}: {'; '.join(errors.values())}")
                continue
            
            sales.append(sale)
        
        return sales
    
    def import_sales_file(self, path: Union[str, Path], product_id: int, user_id: int) -> int:
        """Import a sales file for one product.
        
        Args:
            path: Path to a .csv or .json file
            product_id: Product the sales belong to
            user_id: Owner of the product
            
        Returns:
            Number of sales imported
        """
        self.products.require_product(product_id, user_id)
        
        sales = self.parse_sales_file(path)
        if not sales:
            logger.warning(f"Import into product {product_id} found no valid sales in {path}")
            raise DataImportError(f"No valid sales found in {path}")
        
        count = self.bulk_create_sales(
            user_id,
            [dict(sale, product_id=product_id) for sale in sales]
        )
        
        logger.info(f"Imported {count} sales into product {product_id} from {path}")
        return count
