from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class WireObject(ValueObject):
    """Frozen value object serialized with camelCase keys.

    Fields are declared in snake_case; ``model_dump(by_alias=True)`` and
    FastAPI responses use the camelCase aliases.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
