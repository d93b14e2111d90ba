from datetime import date, datetime, timedelta

from django.apps import apps
from django.conf import settings
from django.test import SimpleTestCase, Client
from django.urls import reverse
from django.utils import timezone

from .forms import validate_bid, validate_publish
from .models import SIZES, TYPES, Bid, Draft, Listing, taxonomy_options
from .seed import DEMO_LISTINGS, seed_store
from .store import ListingNotFound, ListingStore
from .tokens import avatar_url, new_listing_id, new_user_token
from .utils.date_utils import from_display_format, to_display_format


def valid_listing_data(**overrides):
    """Helper returning a publish submission that passes validation"""
    data = {
        "title": "Denim jacket",
        "description": "Light wash, size M",
        "type": "Jacket",
        "size": "M",
        "price": "20",
        "finishing_date": "2099-01-01",
        "image": "https://example.com/jacket.png",
    }
    data.update(overrides)
    return data


def make_listing(store, **overrides):
    """Helper to put a listing straight into a store"""
    fields = {
        "id": store.new_listing_id(),
        "title": "Wool sweater",
        "description": "Navy blue merino",
        "type": "Sweater",
        "size": "L",
        "price": 100.0,
        "finishing_date": "01/01/2099",
    }
    fields.update(overrides)
    return store.put(Listing(**fields))


class DateFormattingTests(SimpleTestCase):
    """Tests for the display/form date conversions"""

    def test_iso_string_to_display(self):
        self.assertEqual(to_display_format("2099-01-31"), "31/01/2099")

    def test_date_and_datetime_to_display(self):
        self.assertEqual(to_display_format(date(2024, 3, 9)), "09/03/2024")
        self.assertEqual(to_display_format(datetime(2024, 3, 9, 23, 59)), "09/03/2024")

    def test_display_back_to_iso(self):
        self.assertEqual(from_display_format("31/01/2099"), "2099-01-31")
        self.assertEqual(from_display_format(to_display_format("2030-12-05")), "2030-12-05")


class TokenTests(SimpleTestCase):
    """Tests for listing ids, user tokens and avatars"""

    def test_listing_ids_increase_even_within_one_millisecond(self):
        first = new_listing_id()
        second = new_listing_id(first)
        third = new_listing_id(second)
        self.assertLess(int(first), int(second))
        self.assertLess(int(second), int(third))

    def test_listing_id_bumped_past_future_last_id(self):
        self.assertEqual(new_listing_id("99999999999999"), "100000000000000")

    def test_user_tokens_are_random(self):
        self.assertNotEqual(new_user_token(), new_user_token())

    def test_avatar_is_deterministic(self):
        self.assertEqual(avatar_url("ana@example.com"), avatar_url("ana@example.com"))
        self.assertEqual(avatar_url(" Ana@Example.com "), avatar_url("ana@example.com"))
        self.assertNotEqual(avatar_url("ana@example.com"), avatar_url("bob@example.com"))
        self.assertTrue(avatar_url("ana@example.com").startswith("https://"))


class ValidationTests(SimpleTestCase):
    """Tests for validate_publish and validate_bid"""

    def test_valid_publish_has_no_errors(self):
        self.assertEqual(validate_publish(valid_listing_data()), [])

    def test_image_is_optional(self):
        self.assertEqual(validate_publish(valid_listing_data(image="")), [])

    def test_missing_fields_are_reported(self):
        errors = validate_publish({})
        self.assertEqual(len(errors), 6)
        for label in ("Title", "Description", "Type", "Size", "Price", "Finishing date"):
            self.assertTrue(any(e.startswith(label) for e in errors), label)

    def test_none_candidate_does_not_raise(self):
        self.assertTrue(validate_publish(None))
        self.assertTrue(validate_bid(None, 10))

    def test_negative_price_rejected(self):
        errors = validate_publish(valid_listing_data(price="-5"))
        self.assertEqual(len(errors), 1)
        self.assertIn("price", errors[0].lower())

    def test_zero_and_garbage_price_rejected(self):
        self.assertTrue(validate_publish(valid_listing_data(price="0")))
        self.assertTrue(validate_publish(valid_listing_data(price="cheap")))

    def test_unknown_type_and_size_rejected(self):
        errors = validate_publish(valid_listing_data(type="Spacesuit", size="XXXL"))
        self.assertEqual(len(errors), 2)

    def test_past_finishing_date_rejected(self):
        yesterday = timezone.localdate() - timedelta(days=1)
        errors = validate_publish(valid_listing_data(finishing_date=yesterday.isoformat()))
        self.assertEqual(len(errors), 1)
        self.assertIn("past", errors[0])

    def test_today_is_a_valid_finishing_date(self):
        today = timezone.localdate().isoformat()
        self.assertEqual(validate_publish(valid_listing_data(finishing_date=today)), [])

    def test_malformed_finishing_date_rejected(self):
        self.assertTrue(validate_publish(valid_listing_data(finishing_date="31/01/2099")))

    def test_valid_bid(self):
        bid = {"name": "Ana", "email": "ana@example.com", "bid": "150"}
        self.assertEqual(validate_bid(bid, 100), [])

    def test_bid_must_beat_current_price(self):
        bid = {"name": "Ana", "email": "ana@example.com", "bid": "100"}
        errors = validate_bid(bid, 100)
        self.assertEqual(len(errors), 1)
        self.assertIn("higher", errors[0])

    def test_bid_rejects_bad_email_and_missing_name(self):
        errors = validate_bid({"email": "not-an-email", "bid": "150"}, 100)
        self.assertEqual(len(errors), 2)

    def test_bid_must_be_positive(self):
        errors = validate_bid({"name": "Ana", "email": "ana@example.com", "bid": "-1"}, 0)
        self.assertEqual(errors, ["Bid: Bid must be a positive number."])


class ListingStoreTests(SimpleTestCase):
    """Tests for the in-memory store and its cascade rules"""

    def setUp(self):
        self.store = ListingStore()
        self.listing = make_listing(self.store)

    def test_get_missing_raises(self):
        with self.assertRaises(ListingNotFound):
            self.store.get("nope")

    def test_delete_cascades_to_favorites_and_featured(self):
        self.store.toggle_favorite("user-a", self.listing.id)
        self.store.toggle_favorite("user-b", self.listing.id)
        self.store.feature(self.listing.id)

        self.assertTrue(self.store.delete(self.listing.id))

        self.assertNotIn(self.listing, self.store.all_listings())
        self.assertFalse(self.store.is_favorite("user-a", self.listing.id))
        self.assertFalse(self.store.is_favorite("user-b", self.listing.id))
        self.assertEqual(self.store.featured_listings(), [])

    def test_delete_twice_is_a_no_op(self):
        self.assertTrue(self.store.delete(self.listing.id))
        self.assertFalse(self.store.delete(self.listing.id))
        self.assertEqual(len(self.store), 0)

    def test_toggle_favorite_is_an_involution(self):
        other = make_listing(self.store, title="Boots")
        self.store.toggle_favorite("user", other.id)
        before = self.store.favorites_of("user")

        self.assertTrue(self.store.toggle_favorite("user", self.listing.id))
        self.assertFalse(self.store.toggle_favorite("user", self.listing.id))

        self.assertEqual(self.store.favorites_of("user"), before)

    def test_favorites_are_per_user(self):
        self.store.toggle_favorite("user-a", self.listing.id)
        self.assertTrue(self.store.is_favorite("user-a", self.listing.id))
        self.assertFalse(self.store.is_favorite("user-b", self.listing.id))

    def test_toggle_favorite_on_missing_listing_raises(self):
        with self.assertRaises(ListingNotFound):
            self.store.toggle_favorite("user", "missing")
        self.assertEqual(self.store.favorites_of("user"), [])

    def test_clear_favorites(self):
        self.store.toggle_favorite("user", self.listing.id)
        self.store.clear_favorites("user")
        self.assertEqual(self.store.favorites_of("user"), [])

    def test_feature_missing_listing_raises(self):
        with self.assertRaises(ListingNotFound):
            self.store.feature("missing")

    def test_place_bid_prepends(self):
        first = Bid("Ana", "ana@example.com", 110.0, "01/01/2099", avatar_url("ana@example.com"))
        second = Bid("Bob", "bob@example.com", 120.0, "01/01/2099", avatar_url("bob@example.com"))
        self.store.place_bid(self.listing.id, first)
        self.store.place_bid(self.listing.id, second)

        self.assertEqual(self.listing.bids, [second, first])
        self.assertEqual(self.listing.leading_price, 120.0)

    def test_attach_and_clear_errors_leave_other_fields(self):
        self.store.attach_errors(self.listing.id, ["Price: nope"])
        self.assertEqual(self.store.get(self.listing.id).errors, ["Price: nope"])
        self.assertEqual(self.store.get(self.listing.id).price, 100.0)

        self.store.clear_errors(self.listing.id)
        self.assertEqual(self.store.get(self.listing.id).errors, [])

    def test_search_matches_title_description_and_type(self):
        make_listing(self.store, title="Leather boots", description="Brown", type="Shoes")
        self.assertEqual(len(self.store.search("BOOTS")), 1)
        self.assertEqual(len(self.store.search("merino")), 1)
        self.assertEqual(len(self.store.search("shoes")), 1)
        self.assertEqual(self.store.search("   "), [])

    def test_filter_by_type(self):
        make_listing(self.store, type="Shoes")
        self.assertEqual([l.type for l in self.store.filter_by_type("Shoes")], ["Shoes"])

    def test_pending_draft_is_separate_from_listings(self):
        self.store.stage_pending(Draft(title="Draft", errors=["Price: missing"]))
        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.pending.title, "Draft")

        self.store.clear_pending_errors()
        self.assertEqual(self.store.pending.errors, [])
        self.store.clear_pending()
        self.assertIsNone(self.store.pending)

    def test_reads_do_not_create_favorite_entries(self):
        self.store.favorites_of("visitor")
        self.store.is_favorite("visitor", self.listing.id)
        self.store.clear_favorites("visitor")
        self.assertEqual(self.store.favorite_users(), [])

    def test_emptied_favorites_are_dropped(self):
        self.store.toggle_favorite("user", self.listing.id)
        self.assertEqual(self.store.favorite_users(), ["user"])

        self.store.toggle_favorite("user", self.listing.id)
        self.assertEqual(self.store.favorite_users(), [])

    def test_delete_drops_emptied_favorites(self):
        self.store.toggle_favorite("user", self.listing.id)
        self.store.delete(self.listing.id)
        self.assertEqual(self.store.favorite_users(), [])

    def test_seed_store(self):
        store = seed_store(ListingStore())
        self.assertEqual(len(store), len(DEMO_LISTINGS))
        featured = [entry for entry in DEMO_LISTINGS if entry["featured"]]
        self.assertEqual(len(store.featured_listings()), len(featured))


class TaxonomyTests(SimpleTestCase):
    def test_selected_flag_does_not_touch_taxonomy(self):
        options = taxonomy_options(SIZES, "M")
        self.assertEqual([o["value"] for o in options if o["selected"]], ["M"])
        self.assertEqual(taxonomy_options(SIZES, "M"), options)
        self.assertIn("M", SIZES)
        self.assertIsInstance(TYPES, tuple)


class MarketViewTestCase(SimpleTestCase):
    """Base class giving each test a fresh, empty store"""

    def setUp(self):
        self.client = Client()
        self.store = apps.get_app_config("market_app").reset_store(seed=False)


class BrowsingViewTests(MarketViewTestCase):
    """Tests for the list, detail and partial views"""

    def setUp(self):
        super().setUp()
        self.listing = make_listing(self.store)
        self.featured = make_listing(self.store, title="Leather boots", type="Shoes")
        self.store.feature(self.featured.id)

    def test_home_lists_listings_and_featured(self):
        response = self.client.get(reverse("market_app:home"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "market_app/index.html")
        self.assertEqual(len(response.context["listings"]), 2)
        self.assertEqual(response.context["featured_items"], [self.featured])
        self.assertEqual(response.context["favs"], [])

    def test_first_visit_issues_user_token_cookie(self):
        response = self.client.get(reverse("market_app:home"))
        self.assertIn("uuid", response.cookies)

        token = response.cookies["uuid"].value
        response = self.client.get(reverse("market_app:home"))
        self.assertNotIn("uuid", response.cookies)
        self.assertEqual(self.client.cookies["uuid"].value, token)

    def test_filter_index_by_type(self):
        response = self.client.get(reverse("market_app:filter-index"), {"type": "Shoes"})
        self.assertEqual(response.context["listings"], [self.featured])
        self.assertEqual(response.context["selected_type"], "Shoes")

    def test_detailed_view(self):
        response = self.client.get(reverse("market_app:detailed", args=[self.listing.id]))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "market_app/detailed.html")
        self.assertEqual(response.context["listing"], self.listing)
        self.assertTrue(response.context["is_empty"])
        self.assertFalse(response.context["error"])
        self.assertFalse(response.context["is_fav"])

    def test_detailed_missing_listing_returns_404(self):
        response = self.client.get(reverse("market_app:detailed", args=["missing"]))
        self.assertEqual(response.status_code, 404)

    def test_detailed_shows_errors_only_with_flag(self):
        self.store.attach_errors(self.listing.id, ["Bid: too low"])
        url = reverse("market_app:detailed", args=[self.listing.id])

        self.assertEqual(self.client.get(url).context["errors"], [])
        response = self.client.get(url, {"error": "true"})
        self.assertEqual(response.context["errors"], ["Bid: too low"])
        self.assertContains(response, "Bid: too low")

    def test_detailed_favorite_checkbox_targets_toggle(self):
        response = self.client.get(reverse("market_app:detailed", args=[self.listing.id]))
        toggle_url = f'{reverse("market_app:toggle-fav")}?id={self.listing.id}'
        self.assertContains(response, f'data-toggle-url="{toggle_url}"')

    def test_anonymous_visits_do_not_grow_favorites(self):
        """Test that browsing without a cookie leaves no favorites entries behind"""
        for _ in range(20):
            Client().get(reverse("market_app:home"))
            Client().get(reverse("market_app:detailed", args=[self.listing.id]))
        self.assertEqual(self.store.favorite_users(), [])

    def test_legal_page(self):
        response = self.client.get(reverse("market_app:legal"))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "market_app/legal.html")

    def test_search_partial(self):
        response = self.client.get(reverse("market_app:search"), {"q": "boots"})

        self.assertTemplateUsed(response, "market_app/partials/items.html")
        self.assertEqual(response.context["listings"], [self.featured])
        self.assertContains(response, "Leather boots")
        self.assertNotContains(response, "Wool sweater")

    def test_search_without_query_is_empty(self):
        response = self.client.get(reverse("market_app:search"))
        self.assertEqual(response.context["listings"], [])

    def test_item_partials(self):
        response = self.client.get(reverse("market_app:get-items"))
        self.assertEqual(len(response.context["listings"]), 2)
        response = self.client.get(reverse("market_app:get-featured-items"))
        self.assertEqual(response.context["listings"], [self.featured])

    def test_get_bids_partial(self):
        self.store.place_bid(
            self.listing.id,
            Bid("Ana", "ana@example.com", 150.0, "01/01/2099", avatar_url("ana@example.com")),
        )
        response = self.client.get(reverse("market_app:get-bids"), {"id": self.listing.id})

        self.assertTemplateUsed(response, "market_app/partials/bids.html")
        self.assertContains(response, "Ana")
        self.assertContains(response, avatar_url("ana@example.com"))

    def test_get_bids_missing_listing_returns_404(self):
        response = self.client.get(reverse("market_app:get-bids"), {"id": "missing"})
        self.assertEqual(response.status_code, 404)

    def test_post_not_allowed_on_list_view(self):
        response = self.client.post(reverse("market_app:home"))
        self.assertEqual(response.status_code, 405)


class PublishViewTests(MarketViewTestCase):
    """Tests for publishing and editing listings"""

    def test_publish_form_loads(self):
        response = self.client.get(reverse("market_app:publish"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "market_app/publish.html")
        self.assertIsNone(response.context["listing"])
        self.assertFalse(response.context["error"])

    def test_publish_with_padded_fields(self):
        """Test that whitespace around valid values is cleaned, not a server error"""
        data = valid_listing_data(
            title="  Denim jacket  ", price=" 20 ", finishing_date=" 2099-01-01 "
        )

        response = self.client.post(reverse("market_app:add-element"), data)

        self.assertEqual(len(self.store), 1)
        listing = self.store.all_listings()[0]
        self.assertRedirects(
            response,
            reverse("market_app:detailed", args=[listing.id]),
            fetch_redirect_response=False,
        )
        self.assertEqual(listing.title, "Denim jacket")
        self.assertEqual(listing.price, 20.0)
        self.assertEqual(listing.finishing_date, "01/01/2099")

    def test_edit_with_padded_date(self):
        listing = make_listing(self.store)

        response = self.client.post(
            reverse("market_app:edit-element", args=[listing.id]),
            valid_listing_data(finishing_date=" 2099-02-03 "),
        )

        self.assertEqual(response.status_code, 302)
        self.assertEqual(self.store.get(listing.id).finishing_date, "03/02/2099")

    def test_publish_success(self):
        response = self.client.post(reverse("market_app:add-element"), valid_listing_data())

        self.assertEqual(len(self.store), 1)
        listing = self.store.all_listings()[0]
        self.assertRedirects(
            response,
            reverse("market_app:detailed", args=[listing.id]),
            fetch_redirect_response=False,
        )
        self.assertEqual(listing.title, "Denim jacket")
        self.assertEqual(listing.price, 20.0)
        self.assertEqual(listing.finishing_date, "01/01/2099")
        self.assertEqual(listing.bids, [])
        self.assertEqual(listing.errors, [])
        self.assertIsNone(self.store.pending)

    def test_publish_invalid_stages_draft(self):
        response = self.client.post(
            reverse("market_app:add-element"), valid_listing_data(price="-5")
        )

        self.assertRedirects(
            response,
            reverse("market_app:publish-draft", args=["X"]) + "?error=true",
            fetch_redirect_response=False,
        )
        self.assertEqual(len(self.store), 0)
        self.assertIsNotNone(self.store.pending)
        self.assertTrue(any("price" in e.lower() for e in self.store.pending.errors))

    def test_staged_draft_is_redisplayed_with_errors(self):
        self.client.post(reverse("market_app:add-element"), valid_listing_data(price="-5"))

        response = self.client.get(
            reverse("market_app:publish-draft", args=["X"]), {"error": "true"}
        )

        self.assertTrue(response.context["error"])
        self.assertEqual(response.context["listing"].title, "Denim jacket")
        self.assertEqual(response.context["errors"], self.store.pending.errors)
        self.assertContains(response, "Denim jacket")

    def test_revisiting_publish_clears_draft(self):
        self.client.post(reverse("market_app:add-element"), valid_listing_data(price="-5"))
        self.client.get(reverse("market_app:publish"))
        self.assertIsNone(self.store.pending)

    def test_new_invalid_submission_replaces_draft(self):
        self.client.post(reverse("market_app:add-element"), valid_listing_data(title=""))
        self.client.post(reverse("market_app:add-element"), valid_listing_data(price="-5"))
        self.assertEqual(self.store.pending.title, "Denim jacket")

    def test_draft_slug_never_collides_with_listings(self):
        make_listing(self.store, id="X")
        self.client.post(reverse("market_app:add-element"), valid_listing_data(price="-5"))

        self.assertEqual(self.store.get("X").title, "Wool sweater")
        self.assertEqual(self.store.get("X").errors, [])

    def test_edit_form_prefilled(self):
        listing = make_listing(self.store)
        response = self.client.get(reverse("market_app:edit", args=[listing.id]))

        self.assertTemplateUsed(response, "market_app/publish.html")
        self.assertEqual(response.context["listing"], listing)
        selected = [o["value"] for o in response.context["sizes"] if o["selected"]]
        self.assertEqual(selected, ["L"])
        self.assertContains(response, 'value="2099-01-01"')

    def test_edit_success_keeps_bids(self):
        listing = make_listing(self.store)
        bid = Bid("Ana", "ana@example.com", 150.0, "01/01/2099", avatar_url("ana@example.com"))
        self.store.place_bid(listing.id, bid)

        response = self.client.post(
            reverse("market_app:edit-element", args=[listing.id]),
            valid_listing_data(title="Renamed"),
        )

        self.assertRedirects(
            response,
            reverse("market_app:detailed", args=[listing.id]),
            fetch_redirect_response=False,
        )
        updated = self.store.get(listing.id)
        self.assertEqual(updated.title, "Renamed")
        self.assertEqual(updated.bids, [bid])
        self.assertEqual(len(self.store), 1)

    def test_edit_invalid_preserves_fields(self):
        listing = make_listing(self.store)

        response = self.client.post(
            reverse("market_app:add-element-edit", args=[listing.id]),
            valid_listing_data(title="Renamed", price="-5"),
        )

        self.assertRedirects(
            response,
            reverse("market_app:edit", args=[listing.id]) + "?error=true",
            fetch_redirect_response=False,
        )
        stored = self.store.get(listing.id)
        self.assertEqual(stored.title, "Wool sweater")
        self.assertEqual(stored.price, 100.0)
        self.assertTrue(stored.errors)

        response = self.client.get(
            reverse("market_app:edit", args=[listing.id]), {"error": "true"}
        )
        self.assertEqual(response.context["errors"], stored.errors)

    def test_edit_missing_listing_returns_404(self):
        response = self.client.post(
            reverse("market_app:edit-element", args=["missing"]), valid_listing_data()
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(len(self.store), 0)

    def test_get_not_allowed_on_add_element(self):
        response = self.client.get(reverse("market_app:add-element"))
        self.assertEqual(response.status_code, 405)


class BidViewTests(MarketViewTestCase):
    """Tests for submitting bids"""

    def setUp(self):
        super().setUp()
        self.listing = make_listing(self.store, price=100.0)
        self.url = reverse("market_app:add-bid", args=[self.listing.id])
        self.detail_url = reverse("market_app:detailed", args=[self.listing.id])

    def test_bid_below_price_rejected(self):
        response = self.client.post(
            self.url, {"name": "Ana", "email": "ana@example.com", "bid": "50"}
        )

        self.assertRedirects(
            response, self.detail_url + "?error=true", fetch_redirect_response=False
        )
        self.assertEqual(self.listing.bids, [])
        self.assertTrue(self.listing.errors)

    def test_bid_with_padded_fields(self):
        response = self.client.post(
            self.url, {"name": " Ana ", "email": " ana@example.com ", "bid": " 150 "}
        )

        self.assertRedirects(response, self.detail_url, fetch_redirect_response=False)
        head = self.listing.bids[0]
        self.assertEqual(head.name, "Ana")
        self.assertEqual(head.email, "ana@example.com")
        self.assertEqual(head.bid, 150.0)
        self.assertEqual(head.picture, avatar_url("ana@example.com"))

    def test_bid_above_price_accepted(self):
        response = self.client.post(
            self.url, {"name": "Ana", "email": "ana@example.com", "bid": "150"}
        )

        self.assertRedirects(response, self.detail_url, fetch_redirect_response=False)
        self.assertEqual(len(self.listing.bids), 1)
        head = self.listing.bids[0]
        self.assertEqual(head.bid, 150.0)
        self.assertEqual(head.name, "Ana")
        self.assertEqual(head.picture, avatar_url("ana@example.com"))
        self.assertEqual(head.date, to_display_format(timezone.localdate()))

    def test_next_bid_must_beat_leading_bid(self):
        self.client.post(self.url, {"name": "Ana", "email": "ana@example.com", "bid": "150"})
        self.client.post(self.url, {"name": "Bob", "email": "bob@example.com", "bid": "120"})
        self.assertEqual(len(self.listing.bids), 1)

        self.client.post(self.url, {"name": "Bob", "email": "bob@example.com", "bid": "160"})
        self.assertEqual([b.name for b in self.listing.bids], ["Bob", "Ana"])

    def test_bid_on_missing_listing_returns_404(self):
        response = self.client.post(
            reverse("market_app:add-bid", args=["missing"]),
            {"name": "Ana", "email": "ana@example.com", "bid": "150"},
        )
        self.assertEqual(response.status_code, 404)

    def test_dismiss_detailed_error(self):
        self.client.post(self.url, {"name": "Ana", "email": "bad", "bid": "150"})
        self.assertTrue(self.listing.errors)

        response = self.client.get(
            reverse("market_app:quit-detailed-error-msg", args=[self.listing.id])
        )

        self.assertRedirects(response, self.detail_url, fetch_redirect_response=False)
        self.assertEqual(self.listing.errors, [])
        self.assertEqual(self.listing.price, 100.0)


class ErrorDismissalViewTests(MarketViewTestCase):
    """Tests for the quit*ErrorMsg handlers"""

    def test_dismiss_edit_errors_goes_back_to_edit(self):
        listing = make_listing(self.store, errors=["Title: required"])

        response = self.client.get(reverse("market_app:quit-error-msg", args=[listing.id]))

        self.assertRedirects(
            response,
            reverse("market_app:edit", args=[listing.id]),
            fetch_redirect_response=False,
        )
        self.assertEqual(listing.errors, [])

    def test_dismiss_draft_errors_goes_back_to_publish(self):
        self.client.post(reverse("market_app:add-element"), valid_listing_data(price="-5"))

        response = self.client.get(reverse("market_app:quit-default-error-msg", args=["X"]))

        self.assertRedirects(
            response, reverse("market_app:publish"), fetch_redirect_response=False
        )
        self.assertEqual(self.store.pending.errors, [])

    def test_dismiss_on_missing_listing_returns_404(self):
        response = self.client.get(reverse("market_app:quit-error-msg", args=["missing"]))
        self.assertEqual(response.status_code, 404)


class FavoritesAndDeleteViewTests(MarketViewTestCase):
    """Tests for toggling favorites, clearing them and deleting listings"""

    def setUp(self):
        super().setUp()
        self.listing = make_listing(self.store)
        # First request issues the user token cookie
        self.client.get(reverse("market_app:home"))
        self.token = self.client.cookies["uuid"].value

    def test_toggle_fav_returns_json_ack(self):
        url = reverse("market_app:toggle-fav")

        response = self.client.get(url, {"id": self.listing.id})
        self.assertEqual(response.json(), {"success": True, "favorite": True})
        self.assertTrue(self.store.is_favorite(self.token, self.listing.id))

        response = self.client.get(url, {"id": self.listing.id})
        self.assertEqual(response.json(), {"success": True, "favorite": False})
        self.assertFalse(self.store.is_favorite(self.token, self.listing.id))

    def test_toggle_fav_without_id_only_acknowledges(self):
        response = self.client.get(reverse("market_app:toggle-fav"))
        self.assertEqual(response.json(), {"success": True})

    def test_toggle_fav_missing_listing(self):
        response = self.client.get(reverse("market_app:toggle-fav"), {"id": "missing"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False})
        self.assertEqual(self.store.favorites_of(self.token), [])

    def test_favorites_appear_in_navigation(self):
        self.client.get(reverse("market_app:toggle-fav"), {"id": self.listing.id})

        response = self.client.get(reverse("market_app:home"))

        self.assertEqual(response.context["favs"], [self.listing])
        self.assertEqual(response.context["favs_count"], 1)

        response = self.client.get(reverse("market_app:detailed", args=[self.listing.id]))
        self.assertTrue(response.context["is_fav"])

    def test_clear_favs_list(self):
        self.client.get(reverse("market_app:toggle-fav"), {"id": self.listing.id})

        response = self.client.get(reverse("market_app:clear-favs-list"))

        self.assertRedirects(response, reverse("market_app:home"), fetch_redirect_response=False)
        self.assertEqual(self.store.favorites_of(self.token), [])

    def test_delete_cascades(self):
        self.client.get(reverse("market_app:toggle-fav"), {"id": self.listing.id})
        other_client = Client()
        other_client.get(reverse("market_app:toggle-fav"), {"id": self.listing.id})
        other_token = other_client.cookies["uuid"].value
        self.store.feature(self.listing.id)

        response = self.client.get(reverse("market_app:delete", args=[self.listing.id]))

        self.assertRedirects(response, reverse("market_app:home"), fetch_redirect_response=False)
        self.assertEqual(self.store.all_listings(), [])
        self.assertEqual(self.store.favorites_of(self.token), [])
        self.assertFalse(self.store.is_favorite(other_token, self.listing.id))
        self.assertEqual(self.store.featured_listings(), [])

    def test_delete_twice_still_redirects(self):
        url = reverse("market_app:delete", args=[self.listing.id])
        self.client.get(url)
        response = self.client.get(url)
        self.assertRedirects(response, reverse("market_app:home"), fetch_redirect_response=False)


class SettingsTests(SimpleTestCase):
    def test_demo_data_is_not_seeded_for_tests(self):
        self.assertFalse(settings.MARKET_SEED_DEMO_DATA)
