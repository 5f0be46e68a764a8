import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Pump",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("pump_number", models.PositiveIntegerField()),
                (
                    "fuel_type",
                    models.CharField(
                        choices=[("Regular", "Regular"), ("Premium", "Premium"), ("Diesel", "Diesel")],
                        max_length=16,
                    ),
                ),
                ("fuel_quantity", models.DecimalField(decimal_places=3, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Active", "Active"),
                            ("Maintenance", "Maintenance"),
                            ("Out-of-Service", "Out-of-Service"),
                        ],
                        default="Active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="PumpTransaction",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("timestamp", models.DateTimeField()),
                ("quantity_dispensed", models.DecimalField(decimal_places=3, max_digits=12)),
                ("user", models.CharField(max_length=150)),
                (
                    "pump",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="pumps.pump",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
