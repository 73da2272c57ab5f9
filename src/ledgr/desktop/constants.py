"""Option lists shared by filters and dialogs."""

from __future__ import annotations

import calendar

from ..models.category import CATEGORY_TYPES
from ..models.funding import FundingKind
from ..models.loan import LOAN_STATUSES
from ..models.recurring import FREQUENCIES

ALL = ("all", "All")

SOURCE_TYPE_OPTIONS = [(kind.value, kind.label) for kind in FundingKind]
INCOME_SOURCE_TYPE_OPTIONS = [(kind.value, kind.label) for kind in (FundingKind.BANK, FundingKind.FUND)]
CATEGORY_TYPE_OPTIONS = [(value, value.title()) for value in CATEGORY_TYPES]
FREQUENCY_OPTIONS = [(value, value.title()) for value in FREQUENCIES]
ACTIVE_OPTIONS = [("1", "Active"), ("0", "Paused")]
MONTH_OPTIONS = [(str(number), calendar.month_name[number]) for number in range(1, 13)]
LOAN_STATUS_OPTIONS = [(value, value.replace("_", " ").title()) for value in LOAN_STATUSES]
INSTALLMENT_STATUS_OPTIONS = [("ongoing", "Ongoing"), ("completed", "Completed")]


def year_options(current: int, span: int = 3) -> list[tuple[str, str]]:
    return [(str(year), str(year)) for year in range(current - span, current + 2)]
