from datetime import date
from sqlalchemy.orm import Session
from typing import Callable, Iterable, List, Optional
import logging

from app.config import get_settings
from app.exceptions import InvalidArgumentError, NotFoundError
from app.models.product import Product
from app.repositories.product_repository import ProductStore
from app.schemas.product import ProductCreate, ProductUpdate
from app.services.category_service import CategoryService
from app.services.pricing import (
    discounted_price,
    expiration_window,
    month_bounds,
    validate_percentage,
)
from app.utils.cache import PRODUCT_CACHE_PREFIX, cache_service

logger = logging.getLogger(__name__)

settings = get_settings()


class ProductService:
    """
    Service class for Product operations.

    This service handles:
    - CRUD with category existence checks
    - Name / code lookups
    - Expiration queries (this month, ordered by expiration)
    - Percentage discounts by id, category, name/manufacturer and
      expiration window
    - Cache invalidation for mutated products

    DISCOUNTS AND CONCURRENCY:
    ==========================
    A discount reads the current persisted price, computes the new price in
    memory and writes it back. No row lock or version column is used, so two
    concurrent discounts over overlapping products can lose an update (the
    last write wins). Repeated discounts compound: 20% twice on 10.00 gives
    8.00 and then 6.40.
    """

    CACHE_PREFIX = PRODUCT_CACHE_PREFIX

    def __init__(self, db: Session, today: Callable[[], date] = date.today):
        self.db = db
        self.store = ProductStore(db)
        self.categories = CategoryService(db)
        self.today = today

    # Queries

    def find_all(self) -> List[Product]:
        """Get all products with their category."""
        return self.store.find_all_with_category()

    def find_by_id(self, product_id: int) -> Product:
        """
        Get a product by ID with its category.

        Raises:
            NotFoundError: If the product doesn't exist
        """
        product = self.store.get_with_category(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def find_by_id_cached(self, product_id: int) -> dict:
        """
        Get product details from cache or database.
        Returns a dictionary (suitable for API response).

        Raises:
            NotFoundError: If the product doesn't exist
        """
        cached = cache_service.get(self.CACHE_PREFIX, str(product_id))
        if cached:
            return cached

        product_dict = self._to_cache_dict(self.find_by_id(product_id))
        cache_service.set(self.CACHE_PREFIX, str(product_id), product_dict)
        return product_dict

    def find_all_by_name(self, name: str) -> List[Product]:
        """Case-insensitive substring search on name. May be empty."""
        return self.store.find_by_name(name)

    def find_by_code(self, code: int) -> Product:
        """
        Get the product with the given code.

        Codes are not unique; when several products share one, the product
        with the lowest id is returned.

        Raises:
            NotFoundError: If no product has this code
        """
        product = self.store.find_by_code(code)
        if product is None:
            raise NotFoundError(f"Product with code {code} not found")
        return product

    def find_expiring_this_month(self) -> List[Product]:
        """Get products expiring between the first and last day of the current month."""
        first_day, last_day = month_bounds(self.today())
        return self.store.find_expiring_between(first_day, last_day)

    def find_ordered_by_expiration(self) -> List[Product]:
        """Get all products, soonest expiration first."""
        return self.store.find_ordered_by_expiration()

    # Mutations

    def create(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        Raises:
            NotFoundError: If the referenced category doesn't exist
        """
        self.categories.find_by_id(product_data.category_id)

        product = Product(**product_data.model_dump())
        self.store.save(product)
        logger.info(f"Product #{product.id} '{product.name}' created")
        return product

    def update(self, product_data: ProductUpdate) -> Product:
        """
        Replace an existing product.

        The product is checked first, then the category.

        Raises:
            NotFoundError: If the product or the referenced category doesn't exist
        """
        product = self.find_by_id(product_data.id)
        self.categories.find_by_id(product_data.category_id)

        for field, value in product_data.model_dump(exclude={"id"}).items():
            setattr(product, field, value)

        self.store.save(product)
        self._invalidate_cache([product.id])
        logger.info(f"Product #{product.id} updated")
        return product

    def delete(self, product_id: int) -> int:
        """
        Delete a product.

        Returns:
            Number of products deleted

        Raises:
            NotFoundError: If the product doesn't exist
        """
        self.find_by_id(product_id)
        deleted = self.store.delete(product_id)
        self._invalidate_cache([product_id])
        logger.info(f"Product #{product_id} deleted")
        return deleted

    # Discounts

    def apply_discount_by_id(self, product_id: int, percentage: int) -> Product:
        """
        Discount a single product.

        Raises:
            InvalidArgumentError: If percentage is outside [0, 100]
            NotFoundError: If the product doesn't exist
        """
        validate_percentage(percentage)
        product = self.find_by_id(product_id)
        return self._apply_discount([product], percentage)[0]

    def apply_discount_by_category(self, category_id: int, percentage: int) -> List[Product]:
        """
        Discount every product in a category.

        Raises:
            InvalidArgumentError: If percentage is outside [0, 100]
            NotFoundError: If the category has no products
        """
        validate_percentage(percentage)
        products = self.store.find_by_category(category_id)
        if not products:
            raise NotFoundError(f"No products found for category {category_id}")
        return self._apply_discount(products, percentage)

    def apply_discount_by_name_or_manufacturer(
        self,
        percentage: int,
        name: Optional[str] = None,
        manufacturer: Optional[str] = None,
    ) -> List[Product]:
        """
        Discount products matching a name and/or manufacturer substring.

        Raises:
            InvalidArgumentError: If percentage is outside [0, 100], or
                neither name nor manufacturer is given
            NotFoundError: If nothing matches
        """
        validate_percentage(percentage)
        if not name and not manufacturer:
            raise InvalidArgumentError("Provide at least a name or a manufacturer")

        products = self.store.find_by_name_or_manufacturer(name=name, manufacturer=manufacturer)
        if not products:
            raise NotFoundError("No products found matching the given name or manufacturer")
        return self._apply_discount(products, percentage)

    def apply_discount_by_expiration(
        self,
        percentage: int,
        min_days: Optional[int] = None,
        max_days: Optional[int] = None,
    ) -> List[Product]:
        """
        Discount products expiring between ``today + min_days`` and
        ``today + max_days`` (both dates included). Defaults to 30 and 60 days.

        Raises:
            InvalidArgumentError: If percentage is outside [0, 100]
            NotFoundError: If no product expires in the window
        """
        validate_percentage(percentage)
        if min_days is None:
            min_days = settings.DISCOUNT_WINDOW_MIN_DAYS
        if max_days is None:
            max_days = settings.DISCOUNT_WINDOW_MAX_DAYS

        start, end = expiration_window(self.today(), min_days, max_days)
        products = self.store.find_expiring_between(start, end)
        if not products:
            raise NotFoundError(
                f"No products found expiring between {start.isoformat()} and {end.isoformat()}"
            )
        return self._apply_discount(products, percentage)

    def _apply_discount(self, products: List[Product], percentage: int) -> List[Product]:
        """Reprice every product from its current price and save them as one batch."""
        for product in products:
            product.price = discounted_price(product.price, percentage)

        self.store.save(products)
        self._invalidate_cache(p.id for p in products)
        logger.info(f"Applied {percentage}% discount to {len(products)} product(s)")
        return products

    def _to_cache_dict(self, product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "price": str(product.price),
            "quantity": product.quantity,
            "description": product.description,
            "expiration_date": product.expiration_date.isoformat(),
            "manufacturer": product.manufacturer,
            "category_id": product.category_id,
        }

    def _invalidate_cache(self, product_ids: Iterable[int]) -> None:
        """Invalidate cache entries for the given products."""
        for product_id in product_ids:
            cache_service.delete(self.CACHE_PREFIX, str(product_id))
