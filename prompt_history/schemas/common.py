"""Shared pydantic bases: snake_case in Python, camelCase on the wire."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable value objects (diffs, versions). Config merges with CamelModel's."""

    model_config = ConfigDict(frozen=True)
