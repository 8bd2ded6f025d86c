"""
Trade Schemas
Form draft, validated creation request and read model
"""

from datetime import date, datetime
from typing import Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .models import OptionType, TradeAction, TradeStatus

DEFAULT_REQUIRED_FIELDS = ("symbol", "strike_price", "premium")


class DraftValidationError(ValueError):
    """Raised when a trade draft cannot be committed"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class TradeCreate(BaseModel):
    """Validated request to create a trade"""

    model_config = ConfigDict(allow_inf_nan=False)

    symbol: str = Field(min_length=1)
    option_type: OptionType = OptionType.PUT
    strike_price: float = Field(gt=0)
    expiration_date: Optional[date] = None
    premium: float
    contracts: int = Field(default=1, ge=1)
    action: TradeAction = TradeAction.SELL
    status: TradeStatus = TradeStatus.OPEN
    fees: float = Field(default=0.0, ge=0)
    date_closed: Optional[date] = None

    @field_validator("symbol", mode="before")
    @classmethod
    def normalize_symbol(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("option_type", "action", "status", mode="before")
    @classmethod
    def normalize_choice(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def drop_close_date_unless_closed(self):
        # date_closed only belongs to CLOSED trades
        if self.status != TradeStatus.CLOSED:
            self.date_closed = None
        return self

    def to_record(self) -> dict:
        """Plain column values for the trade store"""
        return {
            "symbol": self.symbol,
            "option_type": self.option_type.value,
            "strike_price": self.strike_price,
            "expiration_date": self.expiration_date,
            "premium": self.premium,
            "contracts": self.contracts,
            "action": self.action.value,
            "status": self.status.value,
            "fees": self.fees,
            "date_closed": self.date_closed,
        }


class TradeRead(BaseModel):
    """Stored trade as returned by the trade store"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    symbol: str
    option_type: str
    strike_price: float
    expiration_date: Optional[date] = None
    premium: float
    contracts: int
    action: str
    status: str
    fees: float = 0.0
    date_closed: Optional[date] = None
    apr: Optional[float] = None
    display_apr: Optional[float] = None

    @field_validator("fees", mode="before")
    @classmethod
    def default_fees(cls, value):
        return 0.0 if value is None else value


class TradeDraft(BaseModel):
    """
    Immutable staging record for the trade entry form

    Every value is kept as the raw text typed by the user. Changing a field
    returns a new draft; commit() is the only way to get a TradeCreate.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    option_type: str = OptionType.PUT.value
    strike_price: str = ""
    expiration_date: str = ""
    premium: str = ""
    contracts: str = "1"
    action: str = TradeAction.SELL.value
    status: str = TradeStatus.OPEN.value
    fees: str = ""
    date_closed: str = ""

    @classmethod
    def from_form(cls, form: Mapping) -> "TradeDraft":
        """Build a draft from submitted form values, ignoring unknown keys"""
        values = {
            name: "" if form.get(name) is None else str(form.get(name))
            for name in cls.model_fields
            if name in form
        }
        return cls(**values)

    def with_value(self, name: str, value) -> "TradeDraft":
        """Return a copy of the draft with one field changed"""
        if name not in type(self).model_fields:
            raise KeyError(f"Unknown trade field: {name}")
        return self.model_copy(update={name: "" if value is None else str(value)})

    def missing_fields(self, required_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS) -> List[str]:
        """Required fields that are still blank"""
        values = self.model_dump()
        return [name for name in required_fields if not str(values.get(name, "")).strip()]

    def commit(self, required_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS) -> TradeCreate:
        """
        Validate the draft and turn it into a creation request

        Args:
            required_fields: Fields that must be non-blank

        Returns:
            TradeCreate

        Raises:
            DraftValidationError: Missing required fields or invalid values
        """
        missing = self.missing_fields(required_fields)
        if missing:
            raise DraftValidationError([f"{name} is required" for name in missing])

        # Blank optional fields fall back to TradeCreate defaults
        values = {
            name: value.strip()
            for name, value in self.model_dump().items()
            if value.strip()
        }

        try:
            return TradeCreate(**values)
        except ValidationError as e:
            raise DraftValidationError([_describe_error(err) for err in e.errors()]) from e


def _describe_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    if location:
        return f"{location}: {error.get('msg')}"
    return str(error.get("msg"))
