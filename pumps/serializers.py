from rest_framework import serializers

from pumps.domain.entities import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS


def _quantity_field():
    return serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS,
        decimal_places=QUANTITY_DECIMAL_PLACES,
        coerce_to_string=False,
    )


class TransactionSerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField()
    quantity_dispensed = _quantity_field()
    user = serializers.CharField()


class FuelPumpSerializer(serializers.Serializer):
    """Read-only representation of a FuelPump entity."""

    id = serializers.CharField()
    pump_number = serializers.IntegerField()
    fuel_type = serializers.CharField(source="fuel_type.value")
    fuel_quantity = _quantity_field()
    status = serializers.CharField(source="status.value")
    transactions = TransactionSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField(allow_null=True)
