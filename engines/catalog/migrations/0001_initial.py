from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CatalogProduct",
            fields=[
                ("product_id", models.IntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("price", models.PositiveIntegerField()),
                (
                    "kind",
                    models.CharField(
                        choices=[("PLAN", "Plan"), ("MERCH", "Merchandise")],
                        max_length=10,
                    ),
                ),
                ("plan_duration_days", models.PositiveIntegerField(blank=True, null=True)),
                ("description", models.TextField(blank=True, null=True)),
            ],
            options={
                "db_table": "gym_products",
                "ordering": ["product_id"],
            },
        ),
        migrations.CreateModel(
            name="GymSite",
            fields=[
                ("site_id", models.IntegerField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("lat", models.FloatField()),
                ("lng", models.FloatField()),
            ],
            options={
                "db_table": "gym_sites",
                "ordering": ["site_id"],
            },
        ),
    ]
