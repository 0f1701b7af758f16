"""Base model giving every exchanged structure camelCase JSON field names."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Attributes are snake_case in Python and camelCase on the wire. Either is accepted on input.
    """
    model_config = {
        'alias_generator': to_camel,
        'populate_by_name': True,
    }
