"""Product resource operations, independent of the HTTP layer."""

from decimal import Decimal

from loguru import logger

from src.product_api.core.exceptions import (
    ConcurrencyConflictError,
    ProductIdMismatchError,
    ProductNotFoundError,
    ProductValidationError,
    StoreUnavailableError,
)
from src.product_api.core.store import ProductStore
from src.product_api.entities.product import (
    DECIMAL_MAX,
    ProductDTO,
    ProductTable,
    product_to_dto,
    validate_product,
)


class ProductService:
    """List, read, create, update and delete products through a ProductStore.

    Every failure is raised as a ``ProductError`` subclass; callers decide how
    to present it.
    """

    def __init__(self, store: ProductStore, validation_enabled: bool = True) -> None:
        self._store = store
        self._validation_enabled = validation_enabled

    def _ensure_available(self) -> None:
        if not self._store.is_available():
            raise StoreUnavailableError("Product table is not initialized")

    def _ensure_valid(self, product: ProductDTO) -> None:
        if not self._validation_enabled:
            return
        issues = validate_product(product)
        if issues:
            logger.bind(issues=issues).info("Rejected invalid product")
            raise ProductValidationError(issues)

    def _load(self, product_id: int) -> ProductTable:
        product = self._store.find(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def _commit_or_not_found(self, product_id: int) -> None:
        """Commit, reporting a conflict on a row that is now gone as not-found."""
        try:
            self._store.commit()
        except ConcurrencyConflictError:
            if not self._store.exists(product_id):
                logger.info("Product {} was removed concurrently", product_id)
                raise ProductNotFoundError(product_id) from None
            raise

    def list_products(
        self,
        min_price: Decimal = Decimal(0),
        max_price: Decimal = DECIMAL_MAX,
    ) -> list[ProductDTO]:
        logger.debug("Getting list of products priced {} to {}", min_price, max_price)
        self._ensure_available()
        return [
            product_to_dto(product)
            for product in self._store.query_by_price(min_price, max_price)
        ]

    def get_product(self, product_id: int) -> ProductDTO:
        logger.debug("Getting a product with id {}", product_id)
        self._ensure_available()
        return product_to_dto(self._load(product_id))

    def create_product(self, product_dto: ProductDTO) -> ProductDTO:
        """Store a new product and return it with its generated id.

        Any id on ``product_dto`` is ignored.
        """
        logger.debug('Creating a new product with name "{}"', product_dto.name)
        self._ensure_valid(product_dto)
        self._ensure_available()

        product = ProductTable(
            name=product_dto.name,
            description=product_dto.description,
            price=product_dto.price,
        )
        self._store.add(product)
        self._store.commit()

        logger.info("Created product {}", product.id)
        return product_to_dto(product)

    def update_product(self, product_id: int, product_dto: ProductDTO) -> None:
        """Overwrite name, description and price of an existing product."""
        logger.debug('Updating a product with name "{}"', product_dto.name)
        if product_id != product_dto.id:
            raise ProductIdMismatchError(product_id, product_dto.id)
        self._ensure_valid(product_dto)
        self._ensure_available()

        product = self._load(product_id)
        product.name = product_dto.name
        product.description = product_dto.description
        product.price = product_dto.price

        self._commit_or_not_found(product_id)
        logger.info("Updated product {}", product_id)

    def delete_product(self, product_id: int) -> None:
        logger.debug("Deleting product with id {}", product_id)
        self._ensure_available()

        self._store.remove(self._load(product_id))
        self._commit_or_not_found(product_id)
        logger.info("Deleted product {}", product_id)
