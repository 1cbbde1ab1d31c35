"""Custom exceptions."""


class ViewStateError(Exception):
    """Raised when a serialized view state cannot be parsed or is invalid."""


class ItemsLoadError(Exception):
    """Raised when a product dump cannot be loaded into usable items."""
