"""
Demo garments loaded into a fresh store when MARKET_SEED_DEMO_DATA is on.
"""
from datetime import timedelta

from django.utils import timezone

from .models import Listing
from .utils.date_utils import to_display_format

DEMO_LISTINGS = [
    {
        "title": "Vintage denim jacket",
        "description": "Nineties cut, light wash, barely worn.",
        "type": "Jacket",
        "size": "M",
        "price": 45.0,
        "image": "https://images.unsplash.com/photo-1576995853123-5a10305d93c0",
        "featured": True,
    },
    {
        "title": "Linen summer dress",
        "description": "Off-white linen, midi length.",
        "type": "Dress",
        "size": "S",
        "price": 30.0,
        "image": "https://images.unsplash.com/photo-1595777457583-95e059d581b8",
        "featured": True,
    },
    {
        "title": "Leather boots",
        "description": "Brown leather, resoled last winter.",
        "type": "Shoes",
        "size": "L",
        "price": 60.0,
        "image": "https://images.unsplash.com/photo-1608256246200-53e635b5b65f",
        "featured": False,
    },
    {
        "title": "Wool sweater",
        "description": "Hand knitted merino, navy blue.",
        "type": "Sweater",
        "size": "XL",
        "price": 25.0,
        "image": "",
        "featured": False,
    },
]


def seed_store(store, days_open=30):
    finishing_date = to_display_format(timezone.localdate() + timedelta(days=days_open))
    for entry in DEMO_LISTINGS:
        fields = {k: v for k, v in entry.items() if k != "featured"}
        listing = store.put(
            Listing(id=store.new_listing_id(), finishing_date=finishing_date, **fields)
        )
        if entry["featured"]:
            store.feature(listing.id)
    return store
