class AppException(Exception):
    """Base exception class for the application."""
    def __init__(self, message, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self):
        if self.error_code:
            return f"{self.error_code}: {self.message}"
        return self.message

class ValidationException(AppException):
    """Exception raised for validation errors."""
    pass

class ConfigurationException(AppException):
    """Exception raised for configuration-related errors."""
    pass

class DataFormatException(AppException):
    """Exception raised when a value cannot be read as a number."""
    pass
