"""Record schema: field aliases, coercion and validation rules.

Stores and callers hand records around under several spellings: the
canonical snake_case names, camelCase names from JSON forms
(``monthlyLimit``) and the suffixed names of the hosted record API
(``monthly_limit_c``, ``Name``, ``Id``). :func:`coerce_record` is the only
place those spellings are understood; everything past it sees the
canonical dataclasses from :mod:`finboard.models`.
"""

from __future__ import annotations

import dataclasses
import math
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Type, TypeVar, Union, get_type_hints

from .errors import ValidationError
from .models import AccountType, BankAccount, Budget, Category, SavingsGoal, Transaction, TransactionType
from .periods import is_month_key, parse_date

R = TypeVar("R")

RECORD_TYPES = (Transaction, Category, Budget, SavingsGoal, BankAccount)

ENTITY_NAMES: Dict[type, str] = {
    Transaction: "Transaction",
    Category: "Category",
    Budget: "Budget",
    SavingsGoal: "Savings goal",
    BankAccount: "Bank account",
}

TABLE_NAMES: Dict[type, str] = {
    Transaction: "transactions",
    Category: "categories",
    Budget: "budgets",
    SavingsGoal: "savings_goals",
    BankAccount: "bank_accounts",
}


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def field_aliases(name: str) -> List[str]:
    """Accepted spellings for a canonical field name, canonical first."""
    aliases = [name, _camel(name), f"{name}_c"]
    if name == "id":
        aliases.append("Id")
    if name == "name":
        aliases.append("Name")
    return list(dict.fromkeys(aliases))


def _lookup(payload: Mapping[str, Any], name: str) -> Any:
    for alias in field_aliases(name):
        if alias in payload:
            return payload[alias]
    return dataclasses.MISSING


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def is_positive_amount(value: Any) -> bool:
    """True for a finite number strictly greater than zero (NaN and inf fail)."""
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def _to_float(value: Any, field: str) -> float:
    if isinstance(value, str):
        value = value.replace("$", "").replace(",", "").strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field) from None
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return number


def _to_optional_int(value: Any, field: str) -> Any:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer", field=field) from None


def _to_bool(value: Any, field: str) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def _to_str(value: Any, field: str) -> str:
    return "" if value is None else str(value).strip()


def _to_date(value: Any, field: str) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required", field=field)
    try:
        return parse_date(value)
    except ValidationError:
        raise ValidationError(f"invalid {field}: {value!r}", field=field) from None


def _to_enum(enum_cls: type) -> Callable[[Any, str], Any]:
    def convert(value: Any, field: str) -> Any:
        if isinstance(value, enum_cls):
            return value
        text = _to_str(value, field)
        for member in enum_cls:
            if text.lower() == member.value.lower():
                return member
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field} must be one of: {allowed}", field=field)
    return convert


_CONVERTERS: Dict[Any, Callable[[Any, str], Any]] = {
    float: _to_float,
    bool: _to_bool,
    str: _to_str,
    date: _to_date,
    TransactionType: _to_enum(TransactionType),
    AccountType: _to_enum(AccountType),
}


def _converter(hint: Any) -> Callable[[Any, str], Any]:
    if hint in _CONVERTERS:
        return _CONVERTERS[hint]
    # Optional[int] is the only remaining shape (record ids)
    return _to_optional_int


def coerce_record(record_type: Type[R], payload: Union[R, Mapping[str, Any]], *, validate: bool = True) -> R:
    """Build a canonical record from a record instance or a mapping.

    Unknown keys are ignored. Missing fields fall back to the dataclass
    default; a missing field without a default raises ``ValidationError``.
    """
    if isinstance(payload, record_type):
        record = payload
    else:
        hints = get_type_hints(record_type)
        values: Dict[str, Any] = {}
        for f in dataclasses.fields(record_type):
            raw = _lookup(payload, f.name)
            if raw is dataclasses.MISSING:
                if f.name == "id":
                    values["id"] = None
                    continue
                if f.default is not dataclasses.MISSING:
                    values[f.name] = f.default
                    continue
                raise ValidationError(f"{f.name} is required", field=f.name)
            values[f.name] = _converter(hints[f.name])(raw, f.name)
        record = record_type(**values)
    return validate_record(record) if validate else record


def canonical_field(record_type: type, key: str) -> str:
    """Map any accepted spelling of a field to its canonical name."""
    for f in dataclasses.fields(record_type):
        if key in field_aliases(f.name):
            return f.name
    raise ValidationError(f"unknown field for {ENTITY_NAMES[record_type]}: {key!r}", field=key)


def canonical_changes(record_type: type, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename keys of a partial record and convert values to field types."""
    hints = get_type_hints(record_type)
    result: Dict[str, Any] = {}
    for key, value in changes.items():
        name = canonical_field(record_type, key)
        result[name] = _converter(hints[name])(value, name)
    return result


def record_to_row(record: Any) -> Dict[str, Any]:
    """Flatten a record to plain values: enum values and ISO dates."""
    row: Dict[str, Any] = {}
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        if isinstance(value, (TransactionType, AccountType)):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        row[f.name] = value
    return row


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _require_text(value: str, field: str, message: str) -> None:
    if not value or not str(value).strip():
        raise ValidationError(message, field=field)


def validate_transaction(t: Transaction) -> Transaction:
    if not is_positive_amount(t.amount):
        raise ValidationError("Amount must be greater than 0", field="amount")
    _require_text(t.category, "category", "Please select a category")
    _require_text(t.description, "description", "Description is required")
    if not isinstance(t.type, TransactionType):
        raise ValidationError("type must be income or expense", field="type")
    return t


def validate_category(c: Category) -> Category:
    _require_text(c.name, "name", "Category name is required")
    if not isinstance(c.type, TransactionType):
        raise ValidationError("type must be income or expense", field="type")
    return c


def validate_budget(b: Budget) -> Budget:
    _require_text(b.category, "category", "Please select a category")
    if not is_month_key(b.month):
        raise ValidationError("Month must be in YYYY-MM format", field="month")
    if b.monthly_limit is None or not math.isfinite(b.monthly_limit) or b.monthly_limit < 0:
        raise ValidationError("Monthly limit cannot be negative", field="monthly_limit")
    return b


def validate_goal(g: SavingsGoal) -> SavingsGoal:
    _require_text(g.name, "name", "Goal name is required")
    if not is_positive_amount(g.target_amount):
        raise ValidationError("Target amount must be greater than 0", field="target_amount")
    if g.current_amount is None or not math.isfinite(g.current_amount) or g.current_amount < 0:
        raise ValidationError("Current amount cannot be negative", field="current_amount")
    return g


def validate_account(a: BankAccount) -> BankAccount:
    _require_text(a.name, "name", "Account name is required")
    _require_text(a.bank_name, "bank_name", "Bank name is required")
    _require_text(a.account_number, "account_number", "Account number is required")
    _require_text(a.currency, "currency", "Currency is required")
    if not isinstance(a.account_type, AccountType):
        raise ValidationError("Account type is required", field="account_type")
    if a.balance is None or not math.isfinite(a.balance):
        raise ValidationError("Balance must be a number", field="balance")
    return a


VALIDATORS: Dict[type, Callable[[Any], Any]] = {
    Transaction: validate_transaction,
    Category: validate_category,
    Budget: validate_budget,
    SavingsGoal: validate_goal,
    BankAccount: validate_account,
}


def validate_record(record: R) -> R:
    return VALIDATORS[type(record)](record)
