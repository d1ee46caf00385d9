"""Currency and percent formatting for presentation layers.

These helpers live outside the engine: the engine returns raw decimals and
never formats. Values the engine could not compute render as the
placeholder instead of a misleading $0.00.
"""

from __future__ import annotations

from typing import Optional, Union

import pandas as pd

from menu_costing.config import PLACEHOLDER
from menu_costing.units import Unresolved


def _missing(value: object) -> bool:
    return value is None or isinstance(value, Unresolved) or bool(pd.isna(value))


def format_currency(value: Union[float, Unresolved, None], placeholder: str = PLACEHOLDER) -> str:
    """Format a dollar amount as "$1,234.56".

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(-0.5)
        '-$0.50'
        >>> format_currency(None)
        '–'

    """
    if _missing(value):
        return placeholder
    amount = float(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percent(value: Optional[float], placeholder: str = PLACEHOLDER) -> str:
    """Format a percentage with one decimal, e.g. "31.5%"."""
    if _missing(value):
        return placeholder
    return f"{float(value):.1f}%"
