"""Custom exceptions for the product filter."""


class CatalogLoadError(Exception):
    """Raised when a product catalog file cannot be loaded."""

    def __init__(self, path: str, reason: str):
        """Initialize exception with catalog path and failure reason.
        
        Args:
            path: Path of the catalog file that failed to load
            reason: Human-readable description of the failure
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load catalog '{path}': {reason}")


class SearchConfigError(Exception):
    """Raised when a search configuration file is invalid."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid search config '{path}': {reason}")
