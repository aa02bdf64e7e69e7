from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Any, Optional

from bson import ObjectId
from bson.decimal128 import Decimal128
from pydantic import AfterValidator, AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _from_decimal128(value: Any) -> Any:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return value


def _quantize(value: Decimal) -> Decimal:
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("Amount has too many digits")


def _stringify_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


def _to_date(value: Any) -> Any:
    # Dates are stored as midnight datetimes
    if isinstance(value, datetime):
        return value.date()
    return value


# Currency amount, two decimal places. Accepts Decimal128 read back from MongoDB.
Money = Annotated[Decimal, BeforeValidator(_from_decimal128), AfterValidator(_quantize)]

ObjectIdStr = Annotated[str, BeforeValidator(_stringify_id)]

CalendarDate = Annotated[date, BeforeValidator(_to_date)]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string id, returning None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def to_bson(value: Any) -> Any:
    """Convert dumped model data into types the BSON encoder accepts."""
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, dict):
        return {key: to_bson(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_bson(item) for item in value]
    return value


class MongoModel(BaseModel):
    id: Optional[ObjectIdStr] = Field(default=None, validation_alias=AliasChoices("_id", "id"))

    model_config = ConfigDict(
        from_attributes=True
    )

    def to_document(self) -> dict:
        """Dump the model as a MongoDB document without its id."""
        return to_bson(self.model_dump(exclude={"id"}))
