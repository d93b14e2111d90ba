from django.urls import path

from . import views

app_name = "market_app"

urlpatterns = [
    path("", views.home, name="home"),
    path("filter-index", views.filter_index, name="filter-index"),
    path("detailed/<str:listing_id>", views.detailed, name="detailed"),
    path("publish", views.publish, name="publish"),
    path("publish/<str:draft>", views.publish, name="publish-draft"),
    path("edit/<str:listing_id>", views.edit, name="edit"),
    path("delete/<str:listing_id>", views.delete_element, name="delete"),
    path("legal", views.legal, name="legal"),
    path("toggle-fav", views.toggle_fav, name="toggle-fav"),
    path("clear-favs-list", views.clear_favs_list, name="clear-favs-list"),
    path("quitErrorMsg/<str:listing_id>", views.quit_error_msg, name="quit-error-msg"),
    path("quitDefaultErrorMsg/<str:listing_id>", views.quit_error_msg, name="quit-default-error-msg"),
    path(
        "quitDetailedErrorMsg/<str:listing_id>",
        views.quit_detailed_error_msg,
        name="quit-detailed-error-msg",
    ),
    # POST routes
    path("add-element", views.add_element, name="add-element"),
    path("add-element/<str:listing_id>", views.add_element, name="add-element-edit"),
    path("edit-element/<str:listing_id>", views.add_element, name="edit-element"),
    path("add-bid/<str:listing_id>", views.add_bid, name="add-bid"),
    # Partials fetched by the page scripts
    path("search", views.search, name="search"),
    path("get-bids", views.get_bids, name="get-bids"),
    path("get-items", views.get_items, name="get-items"),
    path("get-featured-items", views.get_featured_items, name="get-featured-items"),
]
