"""
Persistence Models — Fuel Pumps (Django ORM)

These tables back the ORM implementation of the PumpStore port
(pumps.infrastructure.orm_store). They hold data only: every business rule
lives in the registry, which works on the frozen domain entities.

Key decisions:

- Pump ids are opaque strings generated by the application, not database
  sequences.
- PumpTransaction rows are append-only children of a Pump. Their
  auto-incremented primary key records append order, and they are removed
  only together with their pump (CASCADE).
- Timestamps are written explicitly from the injected clock rather than
  with auto_now, so the database never disagrees with the domain value.
"""

from django.db import models

from pumps.domain.entities import (
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
    FuelType,
    PumpStatus,
)

FUEL_TYPE_CHOICES = [(member.value, member.value) for member in FuelType]
STATUS_CHOICES = [(member.value, member.value) for member in PumpStatus]


class Pump(models.Model):
    id = models.CharField(primary_key=True, max_length=64)
    pump_number = models.PositiveIntegerField()
    fuel_type = models.CharField(max_length=16, choices=FUEL_TYPE_CHOICES)
    fuel_quantity = models.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES
    )
    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=PumpStatus.ACTIVE.value
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Pump {self.pump_number} - {self.fuel_type}: {self.fuel_quantity}"


class PumpTransaction(models.Model):
    pump = models.ForeignKey(
        Pump,
        on_delete=models.CASCADE,
        related_name="transactions",
    )

    timestamp = models.DateTimeField()
    quantity_dispensed = models.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES
    )
    user = models.CharField(max_length=150)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Transaction {self.id} - {self.quantity_dispensed}"
