from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Request/response envelope with camelCase keys on the wire.

    Python code keeps snake_case attribute names; snake_case input is
    accepted as well. Stored rows returned as plain dicts keep their
    column names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
