from typing import Union
from pydantic import BaseModel

class Product(BaseModel):
    id: int
    name: str
    # int conservé tel quel à la sérialisation (500 et non 500.0)
    price: Union[int, float]
