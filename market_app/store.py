# market_app/store.py
"""
The in-memory listing table and everything keyed off it: per-user
favorites, the featured set and the pending publish draft.

One ListingStore is built by the app config at startup and reaches views
through request.store. gunicorn runs several threads per worker, so every
operation holds the same lock.
"""
import logging
import threading
from collections import defaultdict

from .tokens import new_listing_id

logger = logging.getLogger(__name__)


class ListingNotFound(KeyError):
    pass


class ListingStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._listings = {}
        self._favorites = defaultdict(set)
        self._featured = set()
        self._last_id = None
        self._pending = None

    def atomic(self):
        """
        Hold the store lock across several operations, e.g. a read followed
        by a write that depends on it.
        """
        return self._lock

    # Listings

    def get(self, listing_id):
        with self._lock:
            try:
                return self._listings[listing_id]
            except KeyError:
                raise ListingNotFound(listing_id) from None

    def __contains__(self, listing_id):
        with self._lock:
            return listing_id in self._listings

    def __len__(self):
        with self._lock:
            return len(self._listings)

    def put(self, listing):
        with self._lock:
            self._listings[listing.id] = listing
        return listing

    def delete(self, listing_id):
        """
        Remove a listing and every reference to it. Returns False when the
        listing was already gone.
        """
        with self._lock:
            if self._listings.pop(listing_id, None) is None:
                return False
            for user, favorites in list(self._favorites.items()):
                favorites.discard(listing_id)
                if not favorites:
                    del self._favorites[user]
            self._featured.discard(listing_id)
        logger.info(f"Listing {listing_id} deleted")
        return True

    def all_listings(self):
        with self._lock:
            return list(self._listings.values())

    def new_listing_id(self):
        with self._lock:
            self._last_id = new_listing_id(self._last_id)
            return self._last_id

    def search(self, query):
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            listing
            for listing in self.all_listings()
            if needle in listing.title.lower()
            or needle in listing.description.lower()
            or needle in listing.type.lower()
        ]

    def filter_by_type(self, listing_type):
        return [l for l in self.all_listings() if l.type == listing_type]

    # Featured

    def feature(self, listing_id):
        with self._lock:
            if listing_id not in self._listings:
                raise ListingNotFound(listing_id)
            self._featured.add(listing_id)

    def unfeature(self, listing_id):
        with self._lock:
            self._featured.discard(listing_id)

    def featured_listings(self):
        with self._lock:
            return [l for l in self._listings.values() if l.id in self._featured]

    # Favorites

    def toggle_favorite(self, user, listing_id):
        """Flip membership and return whether the listing is now a favorite."""
        with self._lock:
            if listing_id not in self._listings:
                raise ListingNotFound(listing_id)
            favorites = self._favorites[user]
            if listing_id in favorites:
                favorites.remove(listing_id)
                if not favorites:
                    del self._favorites[user]
                return False
            favorites.add(listing_id)
            return True

    def favorites_of(self, user):
        with self._lock:
            favorites = self._favorites.get(user, ())
            return [l for l in self._listings.values() if l.id in favorites]

    def is_favorite(self, user, listing_id):
        with self._lock:
            return listing_id in self._favorites.get(user, ())

    def clear_favorites(self, user):
        with self._lock:
            self._favorites.pop(user, None)

    def favorite_users(self):
        """Tokens that currently hold at least one favorite."""
        with self._lock:
            return list(self._favorites)

    # Errors and bids

    def attach_errors(self, listing_id, errors):
        with self._lock:
            self.get(listing_id).errors = list(errors)

    def clear_errors(self, listing_id):
        with self._lock:
            self.get(listing_id).errors = []

    def place_bid(self, listing_id, bid):
        with self._lock:
            listing = self.get(listing_id)
            listing.bids = [bid, *listing.bids]
        return listing

    # Pending publish draft

    @property
    def pending(self):
        with self._lock:
            return self._pending

    def stage_pending(self, draft):
        with self._lock:
            self._pending = draft

    def clear_pending(self):
        with self._lock:
            self._pending = None

    def clear_pending_errors(self):
        with self._lock:
            if self._pending is not None:
                self._pending.errors = []
