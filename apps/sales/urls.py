"""
URL configuration for sales app.
"""

from django.urls import path

from . import views

app_name = "sales"

urlpatterns = [
    path("api/orders/", views.OrderListCreateView.as_view(), name="order_list"),
    path("api/orders/<uuid:order_id>/", views.OrderDetailView.as_view(), name="order_detail"),
    path(
        "api/orders/<uuid:order_id>/status/",
        views.order_update_status,
        name="order_update_status",
    ),
    path(
        "api/orders/<uuid:order_id>/shipping/",
        views.order_update_shipping,
        name="order_update_shipping",
    ),
]
