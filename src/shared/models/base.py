"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BackendBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Python attributes are snake_case
    - JSON payloads use camelCase (``errorType``, ``resourcePath``)
    - Enum fields hold their plain string value
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
        alias_generator=to_camel,
    )
