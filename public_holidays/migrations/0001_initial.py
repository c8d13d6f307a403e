import django.utils.timezone
from django.db import migrations, models

import model_utils.fields


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PublicHoliday",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "created",
                    model_utils.fields.AutoCreatedField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        verbose_name="created",
                    ),
                ),
                (
                    "modified",
                    model_utils.fields.AutoLastModifiedField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        editable=False,
                        verbose_name="modified",
                    ),
                ),
                ("meta", models.JSONField(blank=True, default=dict, verbose_name="meta")),
                ("date", models.DateField()),
                ("name", models.CharField(max_length=100)),
                ("region", models.CharField(default="national", max_length=50)),
                ("year", models.PositiveSmallIntegerField(db_index=True)),
                (
                    "source",
                    models.CharField(
                        choices=[("api", "Holiday API"), ("fallback", "Computed fallback")],
                        default="api",
                        max_length=20,
                    ),
                ),
            ],
            options={
                "ordering": ("date",),
                "constraints": [
                    models.UniqueConstraint(
                        fields=("date", "region"), name="unique_holiday_per_region"
                    )
                ],
            },
        ),
    ]
