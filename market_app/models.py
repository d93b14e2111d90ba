# market_app/models.py
"""
In-memory records for the market. Nothing here touches the database;
listings live in the ListingStore for the lifetime of the process.
"""
from dataclasses import dataclass, field

from .utils.date_utils import from_display_format


TYPES = (
    "T-shirt",
    "Shirt",
    "Sweater",
    "Jacket",
    "Trousers",
    "Dress",
    "Shoes",
    "Accessories",
)

SIZES = ("XS", "S", "M", "L", "XL", "XXL")


def taxonomy_options(values, selected=None):
    """
    Build the option list a form select needs, flagging the current value.
    The taxonomy tuples themselves are never touched.
    """
    return [
        {"value": value, "selected": "selected" if value == selected else ""}
        for value in values
    ]


@dataclass
class Bid:
    name: str
    email: str
    bid: float
    date: str
    picture: str


@dataclass
class Listing:
    id: str
    title: str
    description: str
    type: str
    size: str
    price: float
    finishing_date: str  # DD/MM/YYYY
    image: str = ""
    bids: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    @property
    def leading_price(self):
        """Highest bid so far, or the starting price when nobody has bid."""
        if self.bids:
            return self.bids[0].bid
        return self.price

    @property
    def has_bids(self):
        return bool(self.bids)

    @property
    def has_errors(self):
        return bool(self.errors)

    @property
    def finishing_date_iso(self):
        return from_display_format(self.finishing_date)

    def __str__(self):
        return self.title


@dataclass
class Draft:
    """
    A publish submission that failed validation, kept as typed so the form
    can be redisplayed. It has no id until it validates.
    """

    title: str = ""
    description: str = ""
    type: str = ""
    size: str = ""
    price: str = ""
    finishing_date_iso: str = ""
    image: str = ""
    errors: list = field(default_factory=list)

    @classmethod
    def from_submission(cls, data, errors):
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            type=data.get("type", ""),
            size=data.get("size", ""),
            price=data.get("price", ""),
            finishing_date_iso=data.get("finishing_date", ""),
            image=data.get("image", ""),
            errors=list(errors),
        )
