"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import FusedDataView, HistoryView, StoreCustomDataView

urlpatterns = [
    path("fusionados", FusedDataView.as_view(), name="fused-data"),
    path("almacenar", StoreCustomDataView.as_view(), name="store-custom-data"),
    path("historial", HistoryView.as_view(), name="history"),
]
