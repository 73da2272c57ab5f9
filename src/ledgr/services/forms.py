"""Dialog form state and the payload schemas behind it.

A dialog edits a flat ``dict`` of input values (strings, plus booleans for
switches). On submit the values are validated by the resource's
:class:`FormSchema`, a table-less SQLModel, and turned into the JSON payload
the API expects, with numbers sent as numbers.
"""

from __future__ import annotations

import datetime as dt
import threading
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, Mapping, Optional, TypeVar

from pydantic import ValidationError as SchemaError
from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..logging_config import get_logger
from ..models.category import CATEGORY_TYPES
from ..models.funding import FundingKind, FundingRef
from ..models.recurring import FREQUENCIES
from .mutations import MutationResult

logger = get_logger(__name__)

FormState = dict[str, Any]

_FRIENDLY_ERRORS = {
    "missing": "This field is required",
    "decimal_parsing": "Enter a valid amount",
    "decimal_type": "Enter a valid amount",
    "int_parsing": "Enter a whole number",
    "int_type": "Enter a whole number",
    "date_parsing": "Enter a date as YYYY-MM-DD",
    "date_from_datetime_parsing": "Enter a date as YYYY-MM-DD",
    "date_type": "Enter a date as YYYY-MM-DD",
}


class FormValidationError(ValueError):
    """Client-side validation failed; nothing was sent."""

    def __init__(self, errors: Mapping[str, str], message: str = "Please check the highlighted fields"):
        self.errors = dict(errors)
        self.message = message
        super().__init__(message)


def _schema_errors(exc: SchemaError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("form",)
        name = str(loc[0])
        message = _FRIENDLY_ERRORS.get(error.get("type", ""), error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(name, message)
    return errors


def to_input_value(value: Any) -> Any:
    """Project a DTO value into the text-input shape."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class FormSchema(SQLModel):
    """Base for dialog payload schemas.

    Subclasses declare payload fields as usual. ``funding`` (when present)
    holds a ``kind:id`` option string and expands into exactly one of
    ``bank_account_id``/``fund_source_id``/``loan_id``.
    """

    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = ()
    FUNDING_REQUIRED: ClassVar[bool] = True

    @classmethod
    def initial(cls) -> FormState:
        state: FormState = {}
        for name, info in cls.model_fields.items():
            if info.is_required():
                state[name] = ""
                continue
            state[name] = to_input_value(info.get_default(call_default_factory=True))
        state.update(cls.dynamic_defaults())
        return state

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        return {}

    @classmethod
    def from_entity(cls, entity: Any) -> FormState:
        state = cls.initial()
        for name in cls.model_fields:
            state[name] = to_input_value(cls.entity_value(entity, name))
        return state

    @classmethod
    def entity_value(cls, entity: Any, name: str) -> Any:
        if name == "category_id":
            category = getattr(entity, "category", None)
            return getattr(category, "id", None) if category is not None else getattr(entity, name, None)
        if name == "funding":
            funding = getattr(entity, "funding", None)
            return funding.option_key if funding is not None else None
        return getattr(entity, name, None)

    @classmethod
    def parse(cls, state: Mapping[str, Any]) -> "FormSchema":
        cleaned: dict[str, Any] = {}
        for name in cls.model_fields:
            value = state.get(name)
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == "":
                continue
            cleaned[name] = value
        errors: dict[str, str] = {}
        if "funding" in cls.model_fields:
            try:
                cls._check_funding(cleaned.get("funding"))
            except ValueError as exc:
                errors["funding"] = str(exc)
        try:
            instance = cls.model_validate(cleaned)
        except SchemaError as exc:
            errors = {**_schema_errors(exc), **errors}
            raise FormValidationError(errors) from exc
        if errors:
            raise FormValidationError(errors)
        return instance

    @property
    def funding_ref(self) -> Optional[FundingRef]:
        return FundingRef.parse_option(getattr(self, "funding", None))

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if name == "funding":
                ref = self.funding_ref
                if ref is not None:
                    payload.update(ref.payload())
                continue
            payload[name] = _to_json(value)
        return payload

    @classmethod
    def _check_funding(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            if cls.FUNDING_REQUIRED:
                raise ValueError("Choose a payment source")
            return None
        ref = FundingRef.parse_option(value)
        if ref is None or ref.kind not in cls.FUNDING_KINDS:
            raise ValueError("Choose a payment source")
        return ref.option_key


class ExpenseForm(FormSchema):
    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = (FundingKind.BANK, FundingKind.FUND, FundingKind.LOAN)

    amount: Decimal = Field(gt=0, decimal_places=2)
    category_id: int
    date: dt.date
    funding: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=255)

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        return {"date": dt.date.today().isoformat()}


class IncomeForm(ExpenseForm):
    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = (FundingKind.BANK, FundingKind.FUND)


class CategoryForm(FormSchema):
    name: str = Field(min_length=1, max_length=255)
    type: str = "expense"
    icon: Optional[str] = Field(default=None, max_length=64)
    color: Optional[str] = Field(default=None, max_length=16)

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in CATEGORY_TYPES:
            raise ValueError("Type must be income or expense")
        return value


class BankAccountForm(FormSchema):
    bank_name: str = Field(min_length=1, max_length=255)
    account_number: str = Field(min_length=1, max_length=64)
    balance: Decimal = Field(default=Decimal("0"), ge=0)
    account_holder_name: Optional[str] = Field(default=None, max_length=255)
    branch_code: Optional[str] = Field(default=None, max_length=32)
    color: Optional[str] = Field(default=None, max_length=16)


class FundSourceForm(FormSchema):
    source_name: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    description: Optional[str] = Field(default=None, max_length=255)


class WithdrawForm(FormSchema):
    bank_account_id: int
    amount: Decimal = Field(gt=0)


class LoanForm(FormSchema):
    lender_name: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0)
    due_date: Optional[dt.date] = None
    description: Optional[str] = Field(default=None, max_length=255)


class LoanRepaymentForm(FormSchema):
    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = (FundingKind.BANK, FundingKind.FUND)

    amount: Decimal = Field(gt=0)
    category_id: int
    date: dt.date
    funding: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=255)

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        return {"date": dt.date.today().isoformat()}


class InstallmentForm(FormSchema):
    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = (FundingKind.BANK, FundingKind.FUND)
    FUNDING_REQUIRED: ClassVar[bool] = False

    item_name: str = Field(min_length=1, max_length=255)
    total_amount: Decimal = Field(gt=0)
    monthly_amount: Decimal = Field(gt=0)
    total_months: int = Field(gt=0, le=600)
    paid_months: int = Field(default=0, ge=0)
    start_date: dt.date
    category_id: int
    funding: Optional[str] = None

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        return {"start_date": dt.date.today().isoformat()}

    @field_validator("paid_months")
    @classmethod
    def _not_past_total(cls, value: int, info) -> int:
        total = info.data.get("total_months")
        if total is not None and value > total:
            raise ValueError("Paid months cannot exceed total months")
        return value


class RecurringForm(FormSchema):
    FUNDING_KINDS: ClassVar[tuple[FundingKind, ...]] = (FundingKind.BANK, FundingKind.FUND)
    FUNDING_REQUIRED: ClassVar[bool] = False

    name: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(gt=0)
    frequency: str = "monthly"
    start_date: dt.date
    end_date: Optional[dt.date] = None
    category_id: int
    funding: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=255)
    notify_3_days_before: bool = True

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        return {"start_date": dt.date.today().isoformat()}

    @field_validator("frequency")
    @classmethod
    def _known_frequency(cls, value: str) -> str:
        if value not in FREQUENCIES:
            raise ValueError("Choose daily, weekly, monthly or yearly")
        return value

    @field_validator("end_date")
    @classmethod
    def _after_start(cls, value: Optional[dt.date], info) -> Optional[dt.date]:
        start = info.data.get("start_date")
        if value is not None and start is not None and value < start:
            raise ValueError("End date must be after the start date")
        return value


class BudgetForm(FormSchema):
    category_id: int
    amount: Decimal = Field(gt=0)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000, le=2100)
    rollover_enabled: bool = False
    alert_at_90_percent: bool = True

    @classmethod
    def dynamic_defaults(cls) -> FormState:
        today = dt.date.today()
        return {"month": str(today.month), "year": str(today.year)}


def _valid_email(value: str) -> str:
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Enter a valid email address")
    return value.lower()


def _confirmation_matches(value: str, info) -> str:
    if value != info.data.get("password"):
        raise ValueError("Passwords do not match")
    return value


class LoginForm(FormSchema):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: str) -> str:
        return _valid_email(value)


class RegisterForm(LoginForm):
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8)
    password_confirmation: str = Field(min_length=1)

    @field_validator("password_confirmation")
    @classmethod
    def _matches(cls, value: str, info) -> str:
        return _confirmation_matches(value, info)


class ProfileForm(FormSchema):
    """``PUT /profile/info``."""

    name: str = Field(min_length=2, max_length=255)
    email: str = Field(min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: str) -> str:
        return _valid_email(value)


class PasswordChangeForm(FormSchema):
    """``PUT /profile/password``; the confirmation is checked before sending."""

    current_password: str = Field(min_length=1)
    password: str = Field(min_length=8)
    password_confirmation: str = Field(min_length=1)

    @field_validator("password_confirmation")
    @classmethod
    def _matches(cls, value: str, info) -> str:
        return _confirmation_matches(value, info)


class FormMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


S = TypeVar("S", bound=FormSchema)

CreateCall = Callable[[Mapping[str, Any]], MutationResult]
UpdateCall = Callable[..., MutationResult]


class FormBinding(Generic[S]):
    """State of one create/edit dialog.

    ``closed -> create|edit -> closed``. Submitting while a previous submit
    is still in flight is ignored. A failed submit keeps the dialog open with
    the server message in ``error`` and per-field messages in ``errors``.
    """

    def __init__(
        self,
        form_cls: type[S],
        submit_create: CreateCall,
        submit_update: UpdateCall,
        *,
        on_change: Optional[Callable[["FormBinding[S]"], None]] = None,
    ) -> None:
        self.form_cls = form_cls
        self.submit_create = submit_create
        self.submit_update = submit_update
        self.on_change = on_change
        self.mode = FormMode.CLOSED
        self.fields: FormState = form_cls.initial()
        self.errors: dict[str, str] = {}
        self.error: Optional[str] = None
        self.target: Any = None
        self.submitting = False
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def target_id(self) -> Optional[int]:
        return getattr(self.target, "id", None) if self.target is not None else None

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def _reset(self) -> None:
        self.fields = self.form_cls.initial()
        self.errors = {}
        self.error = None
        self.target = None

    def open_create(self, **preset: Any) -> None:
        self._reset()
        self.fields.update({key: to_input_value(value) for key, value in preset.items()})
        self.mode = FormMode.CREATE
        self._changed()

    def open_edit(self, entity: Any) -> None:
        self._reset()
        self.fields = self.form_cls.from_entity(entity)
        self.target = entity
        self.mode = FormMode.EDIT
        self._changed()

    def set_field(self, name: str, value: Any) -> None:
        self.fields[name] = value
        self.errors.pop(name, None)

    def close(self) -> None:
        self._reset()
        self.mode = FormMode.CLOSED
        self.submitting = False
        self._changed()

    def submit(self) -> Optional[MutationResult]:
        with self._lock:
            if self.submitting or not self.is_open:
                return None
            self.submitting = True
        try:
            return self._submit()
        finally:
            self.submitting = False
            self._changed()

    def _submit(self) -> MutationResult:
        try:
            schema = self.form_cls.parse(self.fields)
        except FormValidationError as exc:
            self.errors = exc.errors
            self.error = exc.message
            logger.debug("Form rejected locally", extra={"fields": sorted(exc.errors)})
            return MutationResult(ok=False, message=exc.message, field_errors=exc.errors)

        self._changed()
        payload = schema.to_payload()
        target_id = self.target_id
        if target_id is not None:
            result = self.submit_update(target_id, payload, target=self.target)
        else:
            result = self.submit_create(payload)

        if result.ok:
            self._reset()
            self.mode = FormMode.CLOSED
        else:
            self.errors = dict(result.field_errors)
            self.error = result.message
        return result
