"""
Schema Base
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Domain model serialised with camelCase keys for UI consumers"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
