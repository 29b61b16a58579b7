from typing import Union
from pydantic import BaseModel, ConfigDict

class ProductPayload(BaseModel):
    # Aucune validation métier: le payload est accepté tel quel
    id: int
    name: str
    price: Union[int, float]

class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Union[int, float]
