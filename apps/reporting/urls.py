"""
URL patterns for the reporting app.
"""

from django.urls import path

from . import views

app_name = "reporting"

urlpatterns = [
    path("api/reports/orders/", views.orders_report, name="orders_report"),
]
