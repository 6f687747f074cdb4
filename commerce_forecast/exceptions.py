class CommerceForecastError(Exception):
    """Base exception for Commerce Forecast errors."""
    
    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.
        
        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in Commerce Forecast"
        self.code = code
        self.details = details
        super().__init__(self.message)
    
    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message
    
    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }
        
        if self.code:
            error_dict['code'] = self.code
            
        if self.details:
            error_dict['details'] = self.details
            
        return error_dict


class ConfigError(CommerceForecastError):
    """Exception raised for configuration errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class DatabaseError(CommerceForecastError):
    """Exception raised for database-related errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Database error"
        super().__init__(message, code, details)


class ValidationError(CommerceForecastError):
    """Exception raised for data validation errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Validation error"
        super().__init__(message, code, details)


class NotFoundError(CommerceForecastError):
    """Exception raised when a requested resource is not found."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        super().__init__(message, code, details)


class ForecastError(CommerceForecastError):
    """Exception raised for forecasting-related errors."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Forecasting error"
        super().__init__(message, code, details)


class NoSalesHistoryError(ForecastError):
    """Exception raised when a forecast is requested for a product without sales."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "No sales history available for this product"
        super().__init__(message, code, details)


class DataImportError(CommerceForecastError):
    """Exception raised when a sales file cannot be imported."""
    
    def __init__(self, message=None, code=None, details=None):
        message = message or "Data import error"
        super().__init__(message, code, details)
