"""Service layer: the list-view synchronization core and its helpers."""

from .aggregates import Totals, count_by, page_totals, sum_amounts
from .debounce import SearchDebouncer
from .fetcher import ListState, ResourceFetcher
from .filters import FILTER_KEYS, FilterNavigator, ListFilters, decode_filters, encode_update
from .forms import FormBinding, FormMode, FormSchema, FormValidationError
from .list_view import ListViewController
from .mutations import MutationCoordinator, MutationResult, guard_owned
from .profile import ProfileController

__all__ = [
    "FILTER_KEYS",
    "FilterNavigator",
    "FormBinding",
    "FormMode",
    "FormSchema",
    "FormValidationError",
    "ListFilters",
    "ListState",
    "ListViewController",
    "MutationCoordinator",
    "MutationResult",
    "ProfileController",
    "ResourceFetcher",
    "SearchDebouncer",
    "Totals",
    "count_by",
    "decode_filters",
    "encode_update",
    "guard_owned",
    "page_totals",
    "sum_amounts",
]
