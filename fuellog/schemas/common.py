"""Base des schemas / Schema base.

JSON en camelCase (economyLPer100Km, distanceSinceLastKm...) ; les requetes
acceptent aussi les noms Python en snake_case.
camelCase JSON; requests also accept snake_case field names.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
