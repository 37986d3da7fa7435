from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Membership",
            fields=[
                ("user_id", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("plan_end", models.DateTimeField(blank=True, null=True)),
                ("site_id", models.IntegerField(blank=True, null=True)),
                ("site_name", models.CharField(blank=True, max_length=255, null=True)),
                ("site_lat", models.FloatField(blank=True, null=True)),
                ("site_lng", models.FloatField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "gym_memberships",
                "ordering": ["user_id"],
            },
        ),
    ]
