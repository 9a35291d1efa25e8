"""Exceptions raised while starting the metrics service."""


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class MetricsRegistrationError(ConfigurationError):
    """Raised when a series name is already taken in the collector registry.

    Series identity has to be unambiguous for the life of the process, so this
    aborts startup.
    """

    def __init__(self, series: str, cause: str) -> None:
        self.series = series
        self.cause = cause
        super().__init__(f"Cannot register series {series} because {cause}")
