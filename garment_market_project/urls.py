from django.urls import include, path

urlpatterns = [
    path("", include("market_app.urls")),
]
