import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("items", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Swap",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "cash_adjustment",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Signed amount balancing the trade; its direction is defined by the client.",
                        max_digits=12,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("counter", "Countered"),
                            ("accepted", "Accepted"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "proposer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="proposed_swaps",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "proposer_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="offered_in_swaps",
                        to="items.item",
                    ),
                ),
                (
                    "receiver",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_swaps",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "receiver_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="requested_in_swaps",
                        to="items.item",
                    ),
                ),
            ],
            options={
                "verbose_name": "Swap",
                "verbose_name_plural": "Swaps",
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["proposer", "status"], name="swap_proposer_status_idx"),
                    models.Index(fields=["receiver", "status"], name="swap_receiver_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(status__in=["pending", "counter"]),
                        fields=("proposer", "proposer_item", "receiver_item"),
                        name="swap_unique_open_proposal",
                    ),
                ],
            },
        ),
    ]
