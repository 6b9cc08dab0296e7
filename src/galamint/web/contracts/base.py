"""Base model for web contracts.

Python attributes are snake_case; JSON on the wire is camelCase.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Contract model that reads and writes camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
