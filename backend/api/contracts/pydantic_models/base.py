"""
Base Pydantic model for all API response schemas.

Key features:
- frozen=True: Immutable once validated
- populate_by_name=True: Accept both the camelCase alias and the field name
- alias_generator=to_camel: snake_case in Python, camelCase on the wire
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    """
    Base model for response payloads.

    Services return camelCase dicts; validating them through these models
    pins the wire shape. Always dump with by_alias=True.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra='forbid',
    )
