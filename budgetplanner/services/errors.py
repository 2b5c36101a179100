class ValidationError(ValueError):
    """Raised when input for a write operation is rejected."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field
