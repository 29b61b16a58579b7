from typing import List, Optional
from loguru import logger
from models import Product
from repository import ProductRepository

# Catalogue fixe (id, nom, prix), reconstruit à chaque appel
CATALOG_SEED = (
    (1, "Laptop", 1000),
    (2, "Phone", 500),
    (3, "Tablet", 700),
)


class ProductNotFoundError(KeyError):
    def __init__(self, product_id: int):
        super().__init__(product_id)
        self.product_id = product_id

    def __str__(self):
        return f"Product with Id {self.product_id} not found."


class ProductService:
    """
    Fournit le catalogue produits (en mémoire, non persistant).
    Aucun état partagé: chaque appel construit ses propres instances.
    """

    def __init__(self, repository: Optional[ProductRepository] = None):
        self.repository = repository

    def list_all(self) -> List[Product]:
        logger.info("Building product catalog")
        return [Product(id=pid, name=name, price=price) for pid, name, price in CATALOG_SEED]

    def get_by_id(self, product_id: int) -> Product:
        product = next((p for p in self.list_all() if p.id == product_id), None)
        if product is None:
            logger.warning(f"Product {product_id} not found")
            raise ProductNotFoundError(product_id)
        return product

    def add(self, product: Product) -> None:
        # Pas de stockage: le produit soumis est ignoré
        logger.info(f"Add requested for product {product.id} ({product.name}), nothing stored")

    def list_product_names(self) -> List[str]:
        """Noms via le dépôt injecté, sinon ceux du catalogue."""
        if self.repository is None:
            return [p.name for p in self.list_all()]
        return self.repository.get_products()
