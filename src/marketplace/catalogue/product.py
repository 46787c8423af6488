"""Product aggregate with its Variant entity.

A product is sold either by a vendor (`seller_id` set) or by the marketplace
itself (`seller_id` empty). Variants keep their own stock, photos and an
optional price that overrides the product's base price.
"""

import json

from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.utils.timeutils import utcnow


@marketplace.entity(part_of="Product")
class Variant:
    color = String(max_length=50)
    size = String(max_length=50)
    stock = Integer(default=0, min_value=0)
    photos = Text()  # JSON list of URLs
    price = Float(min_value=0.0)

    @property
    def photo_urls(self) -> list[str]:
        return json.loads(self.photos) if self.photos else []


@marketplace.aggregate
class Product:
    seller_id = Identifier()
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    description = Text()
    base_price = Float(default=0.0, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    out_of_stock = Boolean(default=False)
    images = Text()  # JSON list of URLs
    photos = Text()  # JSON list of URLs
    variants = HasMany(Variant)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        name: str,
        base_price: float = 0.0,
        seller_id: str | None = None,
        stock: int = 0,
        category: str | None = None,
        images: list[str] | None = None,
        photos: list[str] | None = None,
        variants: list[dict] | None = None,
    ):
        now = utcnow()
        product = cls(
            seller_id=seller_id,
            name=name,
            category=category,
            base_price=base_price,
            stock=stock,
            images=json.dumps(images or []),
            photos=json.dumps(photos or []),
            created_at=now,
            updated_at=now,
        )
        for data in variants or []:
            product.add_variants(
                Variant(
                    color=data.get("color"),
                    size=data.get("size"),
                    stock=data.get("stock", 0),
                    photos=json.dumps(data.get("photos", [])),
                    price=data.get("price"),
                )
            )
        product._refresh_stock_flag()
        return product

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def photo_urls(self) -> list[str]:
        return json.loads(self.photos) if self.photos else []

    def find_variant(self, variant_id: str | None):
        if not variant_id:
            return None
        return next((v for v in self.variants if str(v.id) == str(variant_id)), None)

    def _refresh_stock_flag(self) -> None:
        if self.variants:
            self.out_of_stock = all((v.stock or 0) <= 0 for v in self.variants)
        else:
            self.out_of_stock = (self.stock or 0) <= 0

    def restock(self, quantity: int, variant_id: str | None = None) -> None:
        """Return units to stock, to the variant when it still exists."""
        variant = self.find_variant(variant_id)
        if variant is not None:
            variant.stock = (variant.stock or 0) + quantity
        else:
            self.stock = (self.stock or 0) + quantity
        self._refresh_stock_flag()
        self.updated_at = utcnow()
