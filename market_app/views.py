# market_app/views.py
import logging

from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from .forms import clean_bid_submission, clean_publish_submission
from .models import SIZES, TYPES, Bid, Draft, Listing, taxonomy_options
from .store import ListingNotFound
from .tokens import avatar_url
from .utils.date_utils import to_display_format, today_iso

logger = logging.getLogger(__name__)

# URL slug standing for the pending publish draft. It is never a listing id.
DRAFT_SLUG = "X"


def get_listing_or_404(store, listing_id):
    try:
        return store.get(listing_id)
    except ListingNotFound:
        raise Http404(f"No listing with id {listing_id}")


def _has_error_flag(request):
    return bool(request.GET.get("error"))


def _with_error_flag(url):
    return f"{url}?error=true"


def _listing_fields(cleaned):
    """Field values for a Listing from a form's cleaned_data."""
    return {
        "title": cleaned["title"],
        "description": cleaned["description"],
        "type": cleaned["type"],
        "size": cleaned["size"],
        "price": cleaned["price"],
        "finishing_date": to_display_format(cleaned["finishing_date"]),
        "image": cleaned["image"],
    }


# Rendering -----------------------------------------------------------------


@require_GET
def home(request):
    store = request.store
    context = {
        "listings": store.all_listings(),
        "featured_items": store.featured_listings(),
        "types": taxonomy_options(TYPES),
    }
    return render(request, "market_app/index.html", context)


@require_GET
def filter_index(request):
    store = request.store
    selected_type = request.GET.get("type", "")
    listings = store.filter_by_type(selected_type) if selected_type else store.all_listings()
    context = {
        "listings": listings,
        "featured_items": store.featured_listings(),
        "types": taxonomy_options(TYPES, selected_type),
        "selected_type": selected_type,
    }
    return render(request, "market_app/index.html", context)


@require_GET
def detailed(request, listing_id):
    store = request.store
    listing = get_listing_or_404(store, listing_id)

    error = _has_error_flag(request)
    context = {
        "listing": listing,
        "bids": listing.bids,
        "is_empty": not listing.bids,
        "is_fav": store.is_favorite(request.user_token, listing_id),
        "error": error,
        "errors": listing.errors if error else [],
    }
    return render(request, "market_app/detailed.html", context)


@require_GET
def publish(request, draft=None):
    store = request.store
    context = {
        "page_title": "Sell your best Garments!",
        "page_message": "Publish",
        "back_url": reverse("market_app:home"),
        "post_url": reverse("market_app:add-element"),
        "today": today_iso(),
        "error": False,
        "errors": [],
    }

    pending = store.pending
    if not _has_error_flag(request) or pending is None:
        store.clear_pending()
        context.update(
            listing=None,
            types=taxonomy_options(TYPES),
            sizes=taxonomy_options(SIZES),
        )
        return render(request, "market_app/publish.html", context)

    context.update(
        listing=pending,
        error=True,
        errors=pending.errors,
        dismiss_url=reverse("market_app:quit-error-msg", args=[DRAFT_SLUG]),
        types=taxonomy_options(TYPES, pending.type),
        sizes=taxonomy_options(SIZES, pending.size),
    )
    return render(request, "market_app/publish.html", context)


@require_GET
def edit(request, listing_id):
    listing = get_listing_or_404(request.store, listing_id)

    error = _has_error_flag(request)
    context = {
        "page_title": "Edit your selling",
        "page_message": "Edit",
        "back_url": reverse("market_app:detailed", args=[listing_id]),
        "post_url": reverse("market_app:edit-element", args=[listing_id]),
        "today": today_iso(),
        "listing": listing,
        "types": taxonomy_options(TYPES, listing.type),
        "sizes": taxonomy_options(SIZES, listing.size),
        "error": error,
        "errors": listing.errors if error else [],
        "dismiss_url": reverse("market_app:quit-error-msg", args=[listing_id]),
    }
    return render(request, "market_app/publish.html", context)


@require_GET
def legal(request):
    return render(request, "market_app/legal.html")


# Partials ------------------------------------------------------------------


@require_GET
def search(request):
    query = request.GET.get("q", "")
    results = request.store.search(query)
    return render(
        request,
        "market_app/partials/items.html",
        {"listings": results, "query": query},
    )


@require_GET
def get_items(request):
    return render(
        request,
        "market_app/partials/items.html",
        {"listings": request.store.all_listings()},
    )


@require_GET
def get_featured_items(request):
    return render(
        request,
        "market_app/partials/items.html",
        {"listings": request.store.featured_listings()},
    )


@require_GET
def get_bids(request):
    listing = get_listing_or_404(request.store, request.GET.get("id", ""))
    return render(
        request,
        "market_app/partials/bids.html",
        {"listing": listing, "bids": listing.bids, "is_empty": not listing.bids},
    )


# Handlers ------------------------------------------------------------------


@require_POST
def add_element(request, listing_id=None):
    """
    Create a listing, or edit one when an id is given.

    Invalid new listings are staged as the pending draft; invalid edits keep
    the stored fields and only carry the error messages back to the form.
    """
    store = request.store
    cleaned, errors = clean_publish_submission(request.POST)

    if listing_id is None:
        if errors:
            store.stage_pending(Draft.from_submission(request.POST, errors))
            logger.info(f"Rejected new listing: {errors}")
            return redirect(
                _with_error_flag(reverse("market_app:publish-draft", args=[DRAFT_SLUG]))
            )

        listing = Listing(id=store.new_listing_id(), **_listing_fields(cleaned))
        store.put(listing)
        store.clear_pending()
        logger.info(f"Listing {listing.id} published: {listing.title}")
        return redirect("market_app:detailed", listing_id=listing.id)

    with store.atomic():
        current = get_listing_or_404(store, listing_id)
        if errors:
            store.attach_errors(listing_id, errors)
            logger.info(f"Rejected edit of listing {listing_id}: {errors}")
            return redirect(
                _with_error_flag(reverse("market_app:edit", args=[listing_id]))
            )

        store.put(
            Listing(id=listing_id, bids=current.bids, **_listing_fields(cleaned))
        )
    logger.info(f"Listing {listing_id} updated")
    return redirect("market_app:detailed", listing_id=listing_id)


@require_POST
def add_bid(request, listing_id):
    store = request.store
    detail_url = reverse("market_app:detailed", args=[listing_id])

    # Validation and insertion must see the same leading price
    with store.atomic():
        listing = get_listing_or_404(store, listing_id)
        cleaned, errors = clean_bid_submission(request.POST, listing.leading_price)
        if errors:
            store.attach_errors(listing_id, errors)
            logger.info(f"Rejected bid on listing {listing_id}: {errors}")
            return redirect(_with_error_flag(detail_url))

        bid = Bid(
            name=cleaned["name"],
            email=cleaned["email"],
            bid=cleaned["bid"],
            date=to_display_format(timezone.localdate()),
            picture=avatar_url(cleaned["email"]),
        )
        store.place_bid(listing_id, bid)

    logger.info(f"Bid of {bid.bid:.2f} placed on listing {listing_id}")
    return redirect(detail_url)


@require_GET
def delete_element(request, listing_id):
    request.store.delete(listing_id)
    return redirect("market_app:home")


@require_GET
def quit_error_msg(request, listing_id):
    store = request.store
    if listing_id == DRAFT_SLUG:
        store.clear_pending_errors()
        return redirect("market_app:publish")

    get_listing_or_404(store, listing_id)
    store.clear_errors(listing_id)
    return redirect("market_app:edit", listing_id=listing_id)


@require_GET
def quit_detailed_error_msg(request, listing_id):
    store = request.store
    get_listing_or_404(store, listing_id)
    store.clear_errors(listing_id)
    return redirect("market_app:detailed", listing_id=listing_id)


@require_GET
def toggle_fav(request):
    listing_id = request.GET.get("id")
    if not listing_id:
        return JsonResponse({"success": True})

    try:
        favorite = request.store.toggle_favorite(request.user_token, listing_id)
    except ListingNotFound:
        logger.warning(f"Toggle favorite on missing listing {listing_id}")
        return JsonResponse({"success": False}, status=404)

    return JsonResponse({"success": True, "favorite": favorite})


@require_GET
def clear_favs_list(request):
    request.store.clear_favorites(request.user_token)
    return redirect("market_app:home")
