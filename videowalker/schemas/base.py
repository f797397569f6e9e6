from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _as_utc(v: datetime) -> datetime:
    # stored naive, always UTC
    return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v.astimezone(timezone.utc)


# naive UTC in Python, explicit offset on the wire
UTCDateTime = Annotated[datetime, PlainSerializer(_as_utc, return_type=datetime, when_used="json")]


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Both accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
