"""Catalogue reacts to order cancellations by returning units to stock."""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.catalogue.product import Product
from marketplace.domain import marketplace
from marketplace.ordering.events import OrderCancelled

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Product, stream_category="marketplace::order")
class OrderEventsHandler:
    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        lines = json.loads(event.restock_lines) if event.restock_lines else []
        repo = current_domain.repository_for(Product)

        for line in lines:
            try:
                product = repo.get(line["item_id"])
            except ObjectNotFoundError:
                logger.warning(
                    "Product missing during restock",
                    order_id=str(event.order_id),
                    product_id=line["item_id"],
                )
                continue

            product.restock(int(line["quantity"]), variant_id=line.get("variant_id"))
            repo.add(product)
