from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrderRecord",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("order_id", models.CharField(max_length=64, unique=True)),
                ("user_id", models.CharField(db_index=True, max_length=255)),
                ("created_at", models.DateTimeField()),
                ("total_amount", models.PositiveBigIntegerField()),
                ("item_summary", models.TextField()),
                ("item_count", models.PositiveIntegerField()),
                ("lines", models.JSONField(default=list)),
                ("membership_activated", models.BooleanField(default=False)),
                ("site_id", models.IntegerField(blank=True, null=True)),
                ("payment_method", models.CharField(default="DEBIT", max_length=20)),
            ],
            options={
                "db_table": "gym_orders",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["user_id", "created_at"],
                        name="idx_order_user_created",
                    ),
                ],
            },
        ),
    ]
