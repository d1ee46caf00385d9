"""Domain-specific exceptions for the menu costing engine.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from CostingError for easy catching.

Note that cost arithmetic itself never raises: unresolvable unit
conversions travel as the UNRESOLVED sentinel and missing entities
contribute nothing. These exceptions cover configuration and snapshot
loading only.
"""


class CostingError(Exception):
    """Base exception for all menu costing errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(CostingError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided (e.g. margin thresholds out of order)
    - A required value such as the batch size marker is empty
    """

    pass


class DataQualityError(CostingError):
    """Raised when a snapshot payload cannot be turned into entities.

    This exception is raised when:
    - Required fields are missing from a record
    - An enum field (ingredient type, overhead frequency) has an unknown value
    - A recipe line references neither an ingredient nor a batch recipe
    """

    pass
