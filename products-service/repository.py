from abc import ABC, abstractmethod
from typing import List


class ProductRepository(ABC):
    """Accès aux données produits (capacité déclarée, sans stockage réel)."""

    @abstractmethod
    def get_products(self) -> List[str]:
        """Retourne les noms des produits connus du dépôt."""


class StaticProductRepository(ProductRepository):
    def get_products(self) -> List[str]:
        return ["Repo Product 1", "Repo Product 2"]
