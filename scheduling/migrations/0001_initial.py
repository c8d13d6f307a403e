import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import model_utils.fields


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("brigades", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
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
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("all_day", models.BooleanField(default=False)),
                (
                    "recurrence_rule",
                    models.CharField(
                        blank=True,
                        help_text="KEY=VALUE rule, e.g. 'FREQ=WEEKLY;BYDAY=MO'. Empty for a single event.",
                        max_length=255,
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("training", "Training"),
                            ("meeting", "Meeting"),
                            ("social", "Social"),
                            ("firewise", "Firewise"),
                            ("other", "Other"),
                        ],
                        default="other",
                        max_length=20,
                    ),
                ),
                ("is_training", models.BooleanField(default=False)),
                ("is_visible", models.BooleanField(default=True)),
                (
                    "adjust_for_holidays",
                    models.BooleanField(
                        default=False,
                        help_text="Move occurrences falling on a public holiday to the following day.",
                    ),
                ),
                (
                    "training_date",
                    models.DateField(
                        blank=True,
                        editable=False,
                        help_text="Local date of a training night, derived from the start time.",
                        null=True,
                    ),
                ),
                (
                    "brigade",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to="brigades.brigade",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_events",
                        to="brigades.member",
                    ),
                ),
            ],
            options={
                "ordering": ("start_time",),
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_training", True)),
                        fields=("brigade", "training_date"),
                        name="unique_training_per_brigade_date",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="EventException",
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
                (
                    "exception_date",
                    models.DateField(help_text="The nominal occurrence date being overridden"),
                ),
                ("is_cancelled", models.BooleanField(default=True)),
                (
                    "replacement_date",
                    models.DateField(
                        blank=True, help_text="When set, the occurrence moves to this date", null=True
                    ),
                ),
                ("notes", models.CharField(blank=True, max_length=255)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exceptions",
                        to="scheduling.event",
                    ),
                ),
            ],
            options={
                "ordering": ("exception_date",),
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "exception_date"), name="unique_exception_per_event_date"
                    )
                ],
            },
        ),
    ]
