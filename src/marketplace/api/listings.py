"""Public listing endpoints, gated on vendor approval."""

from fastapi import APIRouter

from marketplace.api.schemas import ListingListResponse, ListingSchema
from marketplace.listings.listing import Adventure, Stay, Tour, VehicleRental
from marketplace.listings.visibility import visible_listings

listing_router = APIRouter(tags=["listings"])


def _register(path: str, listing_cls) -> None:
    async def list_public(category: str | None = None, city: str | None = None) -> ListingListResponse:
        listings = visible_listings(listing_cls, category=category, city=city)
        return ListingListResponse(listings=[ListingSchema.model_validate(item) for item in listings])

    list_public.__name__ = f"list_{listing_cls.__name__.lower()}s"
    listing_router.add_api_route(path, list_public, methods=["GET"], response_model=ListingListResponse)


_register("/stays", Stay)
_register("/tours", Tour)
_register("/adventures", Adventure)
_register("/vehicle-rentals", VehicleRental)
