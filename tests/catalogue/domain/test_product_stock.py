"""Tests for Product stock bookkeeping."""

from marketplace.catalogue.product import Product


def _product(**kwargs):
    return Product.create(name="Pashmina Shawl", base_price=1200.0, seller_id="vendor-1", **kwargs)


class TestCreate:
    def test_out_of_stock_without_units(self):
        assert _product(stock=0).out_of_stock is True

    def test_in_stock(self):
        assert _product(stock=3).out_of_stock is False

    def test_variants_decide_stock_flag(self):
        product = _product(stock=0, variants=[{"color": "red", "stock": 2, "price": 150.0}])
        assert product.out_of_stock is False
        assert product.variants[0].price == 150.0

    def test_image_lists(self):
        product = _product(images=["a.jpg"], photos=["b.jpg"])
        assert product.image_urls == ["a.jpg"]
        assert product.photo_urls == ["b.jpg"]


class TestRestock:
    def test_restock_product(self):
        product = _product(stock=0)
        product.restock(2)
        assert product.stock == 2
        assert product.out_of_stock is False

    def test_restock_variant(self):
        product = _product(variants=[{"color": "red", "stock": 0}])
        variant_id = str(product.variants[0].id)
        assert product.out_of_stock is True

        product.restock(3, variant_id=variant_id)

        assert product.variants[0].stock == 3
        assert product.stock == 0
        assert product.out_of_stock is False

    def test_unknown_variant_falls_back_to_product_stock(self):
        product = _product(stock=1)
        product.restock(2, variant_id="gone")
        assert product.stock == 3

    def test_find_variant(self):
        product = _product(variants=[{"size": "M"}])
        assert product.find_variant(str(product.variants[0].id)).size == "M"
        assert product.find_variant(None) is None
        assert product.find_variant("nope") is None
