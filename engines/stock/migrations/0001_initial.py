from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ProductStock",
            fields=[
                ("product_id", models.IntegerField(primary_key=True, serialize=False)),
                ("available_quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gym_stock",
                "ordering": ["product_id"],
            },
        ),
    ]
