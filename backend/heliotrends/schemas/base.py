from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case names."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
