class WraError(Exception):
    pass  # this just creates an error that we can use


class WraConfigError(WraError):
    """Raised when a mandatory configuration value is missing."""
    pass


class DataAcquisitionError(WraError):
    """Custom exception for failed data downloads and unreadable source files."""

    def __init__(self, message, source=None):
        """
        Raises an error stating which data source could not be acquired, so
        that the request can be repeated manually.

        message : str
            Description of what went wrong.

        source : str, optional
            The URL or file path which was being read.
        """
        self.source = source
        if source is not None:
            message = f"{message} (source: {source})"
        super().__init__(message)
