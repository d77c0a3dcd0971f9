from typing import Optional


class InvalidConfiguration(ValueError):
    """Raised when a configuration value or override source cannot be used"""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
