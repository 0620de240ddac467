"""Exceptions and warnings raised by the attribution engine."""


class FormatError(ValueError):
    """Raised when an uploaded document cannot be converted to attributions."""


class NumericCoercionWarning(UserWarning):
    """A value expected to be numeric was not and was recovered locally."""


class DatasetNotFoundError(KeyError):
    """Raised when a dataset id is not present in the store."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else "Dataset not found"
