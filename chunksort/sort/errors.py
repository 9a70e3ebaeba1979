class SortError(Exception):
    """
    Base class for every error raised while sorting a list.
    """
    pass


class SortConfigurationError(SortError, ValueError):
    """
    Raised before any oracle call when the sort options cannot work.
    """
    pass


class OracleError(SortError):
    pass


class OracleValidationError(OracleError, ValueError):
    """
    Raised when the oracle's answer is not a permutation of the items it was given.
    """
    pass


class OracleUnavailableError(OracleError):
    """
    Raised when the oracle cannot be reached or does not answer in time.
    """
    pass


class SortFailedError(SortError):
    """
    Raised when an oracle call fails mid-sort. The sort is aborted as a whole;
    the original error is kept as __cause__.
    """

    def __init__(self, message: str, *, iteration: int, window: int):
        super().__init__(message)
        self.iteration = iteration
        self.window = window


class SortTimeoutError(SortError):
    def __init__(self, message: str, *, iteration: int, window: int):
        super().__init__(message)
        self.iteration = iteration
        self.window = window
