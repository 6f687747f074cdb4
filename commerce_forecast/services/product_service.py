# commerce_forecast/services/product_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from commerce_forecast.models import Product
from commerce_forecast.exceptions import NotFoundError, ValidationError
from commerce_forecast.utils.validation import validate_product
from commerce_forecast.logging_setup import get_logger

logger = get_logger(__name__)

PRODUCT_FIELDS = ('name', 'sku', 'category', 'price', 'current_stock', 'description')

class ProductService:
    """Service for the product catalog."""
    
    def __init__(self, session: Session):
        """Initialize the product service.
        
        Args:
            session: Database session
        """
        self.session = session
    
    def list_products(self, user_id: int) -> List[Product]:
        """Get a user's products, newest first."""
        return (
            self.session.query(Product)
            .filter(Product.user_id == user_id)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )
    
    def get_product(self, product_id: int, user_id: int) -> Optional[Product]:
        """Get a product by ID.
        
        Args:
            product_id: Product ID
            user_id: Owner of the product
            
        Returns:
            Product or None if it does not exist or belongs to another user
        """
        product = self.session.get(Product, product_id)
        if product is None or product.user_id != user_id:
            return None
        return product
    
    def require_product(self, product_id: int, user_id: int) -> Product:
        """Get a product by ID, raising NotFoundError when missing."""
        product = self.get_product(product_id, user_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", details={'product_id': product_id})
        return product
    
    def create_product(self, user_id: int, **fields: Any) -> Product:
        """Create a product.
        
        Args:
            user_id: Owner of the product
            **fields: name, price (cents) and optionally sku, category,
                current_stock, description
            
        Returns:
            The new product
        """
        unknown = set(fields) - set(PRODUCT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")
        
        errors = validate_product(fields)
        if errors:
            raise ValidationError("Invalid product", details=errors)
        
        fields.setdefault('current_stock', 0)
        product = Product(user_id=user_id, **fields)
        self.session.add(product)
        self.session.flush()
        
        logger.info(f"Created product {product.id} ({product.name}) for user {user_id}")
        return product
    
    def update_product(self, product_id: int, user_id: int, **updates: Any) -> Product:
        """Update product fields.
        
        Args:
            product_id: Product ID
            user_id: Owner of the product
            **updates: Fields to change
            
        Returns:
            The updated product
        """
        unknown = set(updates) - set(PRODUCT_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown product fields: {', '.join(sorted(unknown))}")
        
        errors = validate_product(updates, partial=True)
        if errors:
            raise ValidationError("Invalid product update", details=errors)
        
        product = self.require_product(product_id, user_id)
        for field, value in updates.items():
            setattr(product, field, value)
        self.session.flush()
        
        logger.info(f"Updated product {product_id}: {', '.join(sorted(updates))}")
        return product
    
    def delete_product(self, product_id: int, user_id: int) -> None:
        """Delete a product with its sales, forecasts and alerts."""
        product = self.require_product(product_id, user_id)
        self.session.delete(product)
        self.session.flush()
        
        logger.info(f"Deleted product {product_id}")
    
    @staticmethod
    def to_engine_product(product: Product) -> Dict[str, Any]:
        """Product mapping expected by the anomaly detector."""
        return {
            'id': product.id,
            'name': product.name,
            'current_stock': product.current_stock
        }
