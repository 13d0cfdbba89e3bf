from datetime import date
from typing import List, Optional

from sqlalchemy.orm import joinedload

from app.models.product import Product
from app.repositories.base import SQLAlchemyStore

WITH_CATEGORY = (joinedload(Product.category),)


class ProductStore(SQLAlchemyStore[Product]):
    """
    Store for Product rows.

    Named selections used by the product service. Text matches are
    case-insensitive substring matches; date ranges are inclusive.
    """

    model = Product

    def get_with_category(self, product_id: int) -> Optional[Product]:
        return self.get(product_id, load=WITH_CATEGORY)

    def find_all_with_category(self) -> List[Product]:
        return self.find_all(load=WITH_CATEGORY)

    def find_by_name(self, name: str) -> List[Product]:
        return self.find_all(Product.name.ilike(f"%{name}%"), load=WITH_CATEGORY)

    def find_by_code(self, code: int) -> Optional[Product]:
        """First product with this code, lowest id first. Codes are not unique."""
        matches = self.find_all(Product.code == code, order_by=(Product.id,), load=WITH_CATEGORY)
        return matches[0] if matches else None

    def find_by_category(self, category_id: int) -> List[Product]:
        return self.find_all(Product.category_id == category_id, load=WITH_CATEGORY)

    def find_by_name_or_manufacturer(
        self,
        name: Optional[str] = None,
        manufacturer: Optional[str] = None,
    ) -> List[Product]:
        """Match on whichever filters are given; both are ANDed when present."""
        criteria = []
        if name:
            criteria.append(Product.name.ilike(f"%{name}%"))
        if manufacturer:
            criteria.append(Product.manufacturer.ilike(f"%{manufacturer}%"))
        return self.find_all(*criteria)

    def find_expiring_between(self, start: date, end: date) -> List[Product]:
        return self.find_all(Product.expiration_date.between(start, end))

    def find_ordered_by_expiration(self) -> List[Product]:
        return self.find_all(order_by=(Product.expiration_date.asc(), Product.id.asc()))
