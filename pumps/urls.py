from django.urls import path
from .views import (
    DispenseFuelView,
    FuelPumpDetailView,
    FuelPumpListView,
    PumpStatusView,
    PumpTransactionsView,
)

urlpatterns = [
    path("", FuelPumpListView.as_view(), name="pump-list"),
    path("<str:pump_id>/", FuelPumpDetailView.as_view(), name="pump-detail"),
    path("<str:pump_id>/dispense/", DispenseFuelView.as_view(), name="pump-dispense"),
    path("<str:pump_id>/transactions/", PumpTransactionsView.as_view(), name="pump-transactions"),
    path("<str:pump_id>/status/", PumpStatusView.as_view(), name="pump-status"),
]
