class MalformedReportError(ValueError):
    """Raised when a report does not have the fixed section shape at all."""
