import datetime

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import model_utils.fields


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Brigade",
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
                ("name", models.CharField(max_length=100)),
                ("slug", models.SlugField(unique=True)),
                ("timezone", models.CharField(default="Pacific/Auckland", max_length=50)),
                (
                    "training_weekday",
                    models.PositiveSmallIntegerField(
                        choices=[
                            (0, "Sunday"),
                            (1, "Monday"),
                            (2, "Tuesday"),
                            (3, "Wednesday"),
                            (4, "Thursday"),
                            (5, "Friday"),
                            (6, "Saturday"),
                        ],
                        default=1,
                        help_text="Day of week training nights are held on (0 = Sunday).",
                    ),
                ),
                ("training_time", models.TimeField(default=datetime.time(19, 0))),
                (
                    "training_duration_hours",
                    models.PositiveSmallIntegerField(
                        default=2,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ],
                    ),
                ),
                ("training_location", models.CharField(blank=True, max_length=200)),
                (
                    "holiday_region",
                    models.CharField(
                        choices=[
                            ("auckland", "Auckland"),
                            ("wellington", "Wellington"),
                            ("canterbury", "Canterbury"),
                            ("otago", "Otago"),
                            ("southland", "Southland"),
                            ("taranaki", "Taranaki"),
                            ("hawkes-bay", "Hawke's Bay"),
                            ("marlborough", "Marlborough"),
                            ("nelson", "Nelson"),
                            ("westland", "Westland"),
                            ("chatham-islands", "Chatham Islands"),
                        ],
                        default="auckland",
                        max_length=50,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Member",
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
                ("email", models.EmailField(max_length=255)),
                ("name", models.CharField(max_length=100)),
                ("phone", models.CharField(blank=True, max_length=20)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("firefighter", "Firefighter"),
                            ("officer", "Officer"),
                            ("admin", "Admin"),
                            ("superadmin", "Superadmin"),
                        ],
                        default="firefighter",
                        max_length=20,
                    ),
                ),
                (
                    "rank",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("CFO", "Chief Fire Officer"),
                            ("DCFO", "Deputy Chief Fire Officer"),
                            ("SSO", "Senior Station Officer"),
                            ("SO", "Station Officer"),
                            ("SFF", "Senior Firefighter"),
                            ("QFF", "Qualified Firefighter"),
                            ("FF", "Firefighter"),
                            ("RCFF", "Recruit Firefighter"),
                        ],
                        max_length=20,
                    ),
                ),
                ("rank_date", models.DateField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=20,
                    ),
                ),
                (
                    "brigade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="brigades.brigade",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="member",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("brigade", "email"), name="unique_member_email_per_brigade"
                    )
                ],
            },
        ),
    ]
