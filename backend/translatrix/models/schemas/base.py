"""Base schema with camelCase wire names."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on the wire.

    Either form is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
