"""Overhead canonicalization and per-product allocation.

Recurring fixed costs arrive at mixed frequencies (daily supplies, weekly
labor, quarterly insurance). This module brings them onto a common monthly
basis, spreads the monthly total over the store's open minutes, and charges
each product for its prep time.

All derived figures use the same weeks-per-month constant, so a monthly
amount and its daily/weekly/quarterly/annual re-derivations stay consistent.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from menu_costing.config import (
    DEFAULT_HOURS_OPEN_PER_DAY,
    DEFAULT_OPERATING_DAYS_PER_WEEK,
    CostingConfig,
)
from menu_costing.models import (
    FREQUENCY_ORDER,
    Frequency,
    OverheadItem,
    OverheadSettings,
    PeriodAmounts,
)

logger = logging.getLogger(__name__)

OVERHEAD_TABLE_COLUMNS = [
    "id",
    "name",
    "amount",
    "frequency",
    "daily",
    "weekly",
    "monthly",
    "quarterly",
    "annual",
]

SORT_COLUMNS = ("name", "amount", "frequency", "monthly")

LABOR_ITEM_NAME = "Labor"


class OverheadAllocator:
    """Turns overhead items into a cost-per-minute figure and product allocations.

    Example:
        >>> from menu_costing.models import Frequency, OverheadItem, OverheadSettings
        >>> rent = OverheadItem("rent", "Rent", 3000.0, Frequency.MONTHLY)
        >>> allocator = OverheadAllocator([rent], OverheadSettings(7, 8))
        >>> round(allocator.cost_per_minute, 4)
        0.2062

    """

    def __init__(
        self,
        items: Iterable[OverheadItem],
        settings: Optional[OverheadSettings] = None,
        config: Optional[CostingConfig] = None,
    ) -> None:
        """Initialize the allocator.

        Args:
            items: Overhead items to canonicalize.
            settings: Store hours and global minutes default. None uses 7 days x 8 hours.
            config: Costing configuration. None uses defaults.

        """
        self.items: List[OverheadItem] = list(items)
        self.settings = settings or OverheadSettings()
        self.config = config or CostingConfig()

    @property
    def operating_days_per_week(self) -> int:
        return max(1, self.settings.operating_days_per_week or DEFAULT_OPERATING_DAYS_PER_WEEK)

    @property
    def hours_open_per_day(self) -> int:
        return max(1, self.settings.hours_open_per_day or DEFAULT_HOURS_OPEN_PER_DAY)

    @property
    def days_per_month(self) -> float:
        return self.operating_days_per_week * self.config.weeks_per_month

    @property
    def minutes_per_month(self) -> float:
        return self.hours_open_per_day * 60 * self.days_per_month

    def monthly_amount(self, amount: float, frequency: Union[Frequency, str]) -> float:
        """Canonicalize one amount to its monthly equivalent.

        Args:
            amount: Amount paid once per `frequency`.
            frequency: Payment frequency (enum member or its string value).

        Returns:
            Monthly equivalent.

        Raises:
            ValueError: If frequency is not a known frequency value.

        """
        frequency = Frequency(frequency)
        weeks = self.config.weeks_per_month
        if frequency is Frequency.DAILY:
            return amount * self.days_per_month
        if frequency is Frequency.WEEKLY:
            return amount * weeks
        if frequency is Frequency.BI_WEEKLY:
            return amount * (weeks / 2)
        if frequency is Frequency.MONTHLY:
            return amount
        if frequency is Frequency.QUARTERLY:
            return amount / 3
        return amount / 12

    @property
    def monthly_total(self) -> float:
        return sum(self.monthly_amount(item.amount, item.frequency) for item in self.items)

    @property
    def cost_per_minute(self) -> float:
        """Monthly overhead spread over every open minute of the month."""
        minutes = self.minutes_per_month
        if minutes <= 0:
            return 0.0
        return self.monthly_total / minutes

    def period_amounts(self, amount: float, frequency: Union[Frequency, str]) -> PeriodAmounts:
        """Express an amount over every display period.

        The result is derived from the monthly canonicalization, so
        `quarterly == monthly * 3` and `annual == monthly * 12` always hold.
        """
        monthly = self.monthly_amount(amount, frequency)
        return PeriodAmounts(
            daily=monthly / self.days_per_month,
            weekly=monthly / self.config.weeks_per_month,
            monthly=monthly,
            quarterly=monthly * 3,
            annual=monthly * 12,
        )

    def totals(self) -> PeriodAmounts:
        """Period amounts summed over all items."""
        total = PeriodAmounts()
        for item in self.items:
            total = total + self.period_amounts(item.amount, item.frequency)
        return total

    def resolve_minutes(self, minutes_per_unit: Optional[float] = None) -> float:
        """Pick the prep time to charge: recipe override, global default, then 1."""
        if minutes_per_unit is not None:
            return minutes_per_unit
        if self.settings.default_minutes_per_unit is not None:
            return self.settings.default_minutes_per_unit
        return self.config.default_minutes_per_unit

    def allocate_for_product(self, minutes_per_unit: Optional[float] = None) -> float:
        """Overhead charged to one unit of a product.

        Args:
            minutes_per_unit: Recipe-specific prep time. None falls back to the
                global default from the overhead settings, then to 1 minute.

        Returns:
            cost_per_minute * resolved minutes.

        """
        return self.cost_per_minute * self.resolve_minutes(minutes_per_unit)

    def overhead_table(self, sort_by: str = "name", descending: bool = False) -> pd.DataFrame:
        """Build a table of overhead items with their period amounts.

        Args:
            sort_by: One of "name", "amount", "frequency" (shortest period first) or "monthly".
            descending: Reverse the sort order.

        Returns:
            DataFrame with columns id, name, amount, frequency, daily, weekly,
            monthly, quarterly, annual.

        Raises:
            ValueError: If sort_by is not a sortable column.

        """
        if sort_by not in SORT_COLUMNS:
            raise ValueError(f"Invalid sort_by '{sort_by}'. Must be one of {SORT_COLUMNS}.")

        rows = []
        for item in self.items:
            amounts = self.period_amounts(item.amount, item.frequency)
            rows.append(
                {
                    "id": item.id,
                    "name": item.name,
                    "amount": float(item.amount),
                    "frequency": Frequency(item.frequency).value,
                    "daily": amounts.daily,
                    "weekly": amounts.weekly,
                    "monthly": amounts.monthly,
                    "quarterly": amounts.quarterly,
                    "annual": amounts.annual,
                }
            )

        if not rows:
            return pd.DataFrame(columns=OVERHEAD_TABLE_COLUMNS)

        df = pd.DataFrame(rows, columns=OVERHEAD_TABLE_COLUMNS)

        if sort_by == "name":
            key = lambda s: s.str.lower()  # noqa: E731
        elif sort_by == "frequency":
            order = [f.value for f in FREQUENCY_ORDER]
            key = lambda s: s.map(order.index)  # noqa: E731
        else:
            key = None

        df = df.sort_values(sort_by, ascending=not descending, key=key, kind="stable")
        return df.reset_index(drop=True)


def average_payroll(
    runs: Sequence[Optional[float]],
    frequency: Union[Frequency, str] = Frequency.BI_WEEKLY,
    item_id: str = "labor",
) -> Optional[OverheadItem]:
    """Average recent payroll runs into a "Labor" overhead item.

    Blank runs (None or NaN) are ignored, so one, two or three entered runs
    all produce a mean over what was entered.

    Args:
        runs: Payroll totals including taxes, most recent first.
        frequency: Pay frequency of the runs.
        item_id: Identifier for the resulting item.

    Returns:
        OverheadItem named "Labor" with the mean amount, or None if no run was
        entered or the mean is not positive.

    Examples:
        >>> average_payroll([2000.0, 2200.0, None]).amount
        2100.0

    """
    entered = [float(r) for r in runs if r is not None and not np.isnan(r)]
    if not entered:
        return None

    mean = float(np.mean(entered))
    if mean <= 0:
        logger.debug("Payroll average %.2f is not positive, no labor item created", mean)
        return None

    return OverheadItem(id=item_id, name=LABOR_ITEM_NAME, amount=mean, frequency=Frequency(frequency))
