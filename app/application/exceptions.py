class KnowledgeBaseLoadError(RuntimeError):
    """Raised when a knowledge file cannot be read or does not match the expected shape."""
    pass


class CalendarError(RuntimeError):
    """Raised when the calendar provider fails (timeouts, network errors, bad responses)."""
    pass
