"""Configuration for the menu costing engine.

This module provides the constants shared by the costing components and a
single configuration class used across all of them (overhead, batch
resolution, pricing analytics).
"""

from __future__ import annotations

from dataclasses import dataclass

from menu_costing.exceptions import ConfigError

# Average number of weeks in a month, used for every frequency conversion
WEEKS_PER_MONTH = 4.33

# Store hours assumed when overhead settings leave them unset
DEFAULT_OPERATING_DAYS_PER_WEEK = 7
DEFAULT_HOURS_OPEN_PER_DAY = 8

# Minutes of prep time charged to a product with no override and no global default
DEFAULT_MINUTES_PER_UNIT = 1.0

# Margin bands (percent)
HEALTHY_MARGIN_ABOVE = 31.0
WATCH_MARGIN_FROM = 25.0

# Size names containing this marker are bulk/batch sizes
BATCH_SIZE_MARKER = "bulk"

# Shown by presentation layers instead of a number
PLACEHOLDER = "–"


@dataclass(frozen=True)
class CostingConfig:
    """Configuration for a costing pass.

    Attributes:
        weeks_per_month: Weeks-per-month constant for overhead canonicalization (default: 4.33).
        default_minutes_per_unit: Last-resort minutes per unit when neither the recipe
            nor the overhead settings provide one (default: 1).
        healthy_margin_above: Margins strictly above this are "healthy" (default: 31).
        watch_margin_from: Margins from this value up to healthy_margin_above are
            "watch"; anything lower is "risk" (default: 25).
        batch_size_marker: Case-insensitive substring that marks a size as a batch
            size (default: "bulk").

    Raises:
        ConfigError: If a value is out of range or the margin bands overlap.
    """

    weeks_per_month: float = WEEKS_PER_MONTH
    default_minutes_per_unit: float = DEFAULT_MINUTES_PER_UNIT
    healthy_margin_above: float = HEALTHY_MARGIN_ABOVE
    watch_margin_from: float = WATCH_MARGIN_FROM
    batch_size_marker: str = BATCH_SIZE_MARKER

    def __post_init__(self) -> None:
        if self.weeks_per_month <= 0:
            raise ConfigError(f"weeks_per_month must be positive, got {self.weeks_per_month}")
        if self.default_minutes_per_unit < 0:
            raise ConfigError(
                f"default_minutes_per_unit cannot be negative, got {self.default_minutes_per_unit}"
            )
        if self.watch_margin_from > self.healthy_margin_above:
            raise ConfigError(
                f"watch_margin_from ({self.watch_margin_from}) must not exceed "
                f"healthy_margin_above ({self.healthy_margin_above})"
            )
        if not self.batch_size_marker.strip():
            raise ConfigError("batch_size_marker cannot be empty")
