from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CartLineRecord",
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
                ("user_id", models.CharField(db_index=True, max_length=255)),
                ("product_id", models.IntegerField()),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.PositiveIntegerField()),
                (
                    "kind",
                    models.CharField(
                        choices=[("PLAN", "Plan"), ("MERCH", "Merchandise")],
                        max_length=10,
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "gym_cart_lines",
                "ordering": ["user_id", "position"],
            },
        ),
        migrations.AddConstraint(
            model_name="cartlinerecord",
            constraint=models.UniqueConstraint(
                fields=("user_id", "product_id"),
                name="uq_cart_line_user_product",
            ),
        ),
    ]
