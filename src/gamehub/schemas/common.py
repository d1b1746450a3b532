# src/gamehub/schemas/common.py

"""Common Pydantic schemas used across multiple resources."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # Stored timestamps are UTC; SQLite hands them back without an offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class APIModel(BaseModel):
    """Base model that speaks camelCase on the wire.

    Fields are declared in snake_case; ``populate_by_name`` keeps both
    spellings accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(APIModel):
    """Body returned for every handled error."""

    error: str
    error_type: str | None = None
    details: list | None = None
