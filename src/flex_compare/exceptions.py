"""
Custom exception hierarchy for flex-compare.

Comparisons themselves never raise for incomparable values; these exceptions
cover programmer errors such as malformed configuration.
"""


class FlexCompareError(Exception):
    """Base exception for flex-compare package."""

    pass


class ConfigurationError(FlexCompareError, TypeError):
    """
    Invalid comparator configuration.

    Raised when flags are not an integer bitmask or a ComparatorConfig.
    """

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value
