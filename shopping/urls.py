from django.urls import path
from . import views

app_name = "shopping"

urlpatterns = [
    # Health checks (for load balancers and monitoring)
    path("", views.liveness_check, name="root"),
    path("health/", views.health_check, name="health"),
    path("health/liveness/", views.liveness_check, name="liveness"),
    path("health/readiness/", views.readiness_check, name="readiness"),
    path("health/metrics/", views.metrics, name="metrics"),

    # Identity
    path("me", views.current_user, name="me"),

    # Lists
    path("lists", views.lists_collection, name="lists"),
    path("lists/shared", views.shared_lists, name="shared_lists"),
    path("lists/<uuid:list_id>", views.list_detail, name="list_detail"),

    # Items
    path("lists/<uuid:list_id>/items", views.item_create, name="item_create"),
    path("lists/<uuid:list_id>/items/<uuid:item_id>", views.item_detail, name="item_detail"),
    path("lists/<uuid:list_id>/items/<uuid:item_id>/check", views.item_check, name="item_check"),

    # Sharing (owner only)
    path("lists/<uuid:list_id>/share", views.share_list, name="share_list"),
    path("lists/<uuid:list_id>/shares", views.list_shares, name="list_shares"),
    path("lists/<uuid:list_id>/shares/<uuid:share_id>", views.share_revoke, name="share_revoke"),
]
