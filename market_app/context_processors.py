def navigation(request):
    """
    Expose the requester's favorites to all templates (navbar list and bubble).
    """
    store = getattr(request, "store", None)
    token = getattr(request, "user_token", None)
    if store is None or token is None:
        return {"favs": [], "favs_count": 0}

    favs = store.favorites_of(token)
    return {"favs": favs, "favs_count": len(favs)}
