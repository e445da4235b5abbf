class InvalidArgument(ValueError):
    """
    Raised when a caller breaks a function's input contract (e.g. score/label count mismatch).
    """
