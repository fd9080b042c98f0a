"""Shared response shapes and field validators."""
from typing import Optional

from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(HttpUrl)


def check_url(value: Optional[str]) -> Optional[str]:
    """Validate a URL but keep the caller's spelling of it."""
    if value is None:
        return value
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError(f"Invalid URL: {value}")
    return value


class OkResponse(BaseModel):
    ok: bool = True


class UserBriefOut(BaseModel):
    user_id: str
    display_name: str

    model_config = {"from_attributes": True}
