from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class FrozenCamelModel(CamelModel):
    """Immutable camelCase model for layout snapshot data"""

    class Config:
        frozen = True
