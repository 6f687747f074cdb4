from typing import Any, Dict, Mapping

from commerce_forecast.config import config

def validate_product(fields: Mapping[str, Any], partial: bool = False) -> Dict[str, str]:
    """Validate product fields.
    
    Args:
        fields: Product field values
        partial: Only check the fields that are present (updates)
        
    Returns:
        Dictionary with validation errors
    """
    errors = {}
    
    if not partial or 'name' in fields:
        name = fields.get('name')
        if not name or not str(name).strip():
            errors['name'] = 'Product name is required'
    
    if not partial or 'price' in fields:
        price = fields.get('price')
        if price is None:
            errors['price'] = 'Price is required'
        elif not isinstance(price, int) or price < 0:
            errors['price'] = 'Price must be a non-negative integer amount in cents'
    
    stock = fields.get('current_stock')
    if stock is not None and (not isinstance(stock, int) or stock < 0):
        errors['current_stock'] = 'Current stock must be a non-negative integer'
    
    return errors

def validate_sale(fields: Mapping[str, Any]) -> Dict[str, str]:
    """Validate a sales record.
    
    Args:
        fields: Sale field values
        
    Returns:
        Dictionary with validation errors
    """
    errors = {}
    
    quantity = fields.get('quantity')
    if not isinstance(quantity, int) or quantity < 1:
        errors['quantity'] = 'Quantity must be an integer of at least 1'
    
    revenue = fields.get('revenue')
    if not isinstance(revenue, int) or revenue < 0:
        errors['revenue'] = 'Revenue must be a non-negative integer amount in cents'
    
    if fields.get('sale_date') is None:
        errors['sale_date'] = 'Sale date is required'
    
    return errors

def validate_days_ahead(days_ahead: Any) -> Dict[str, str]:
    """Validate a forecast horizon against the configured maximum."""
    errors = {}
    max_days = config.forecast_config['max_days_ahead']
    
    if not isinstance(days_ahead, int) or isinstance(days_ahead, bool) or not 1 <= days_ahead <= max_days:
        errors['days_ahead'] = f'Forecast horizon must be between 1 and {max_days} days'
    
    return errors
