"""Custom exceptions for cluster capability sync."""


class CapabilitiesError(Exception):
    """Base exception for all capability sync errors."""

    def __init__(self, message: str, details: str = None):
        """Initialize the exception.

        Args:
            message: Main error message
            details: Additional details or suggestions
        """
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message.

        Returns:
            Formatted error message with details
        """
        if self.details:
            return f"{self.message}\n\nDetails: {self.details}"
        return self.message


class DriverNotFoundError(CapabilitiesError):
    """Exception raised when a kontainer driver does not exist."""

    def __init__(self, driver_name: str):
        self.driver_name = driver_name
        super().__init__(f"kontainer driver not found: {driver_name}")


class DriverLookupError(CapabilitiesError):
    """Exception raised when a kontainer driver cannot be retrieved."""

    pass


class DriverCapabilitiesError(CapabilitiesError):
    """Exception raised when a driver fails to report k8s capabilities."""

    pass


class ValidationError(CapabilitiesError):
    """Exception raised for validation errors."""

    pass


class ConfigurationError(CapabilitiesError):
    """Exception raised for configuration errors."""

    pass
