"""Django management command for materializing upcoming training nights."""

from typing import Annotated, Any

from django.core.management.base import BaseCommand, CommandError, CommandParser

from dependency_injector.wiring import Provide, inject

from brigades.models import Brigade
from scheduling.exceptions import TrainingSchedulerServiceNotInjectedError
from scheduling.services.training_scheduler_service import TrainingSchedulerService


class Command(BaseCommand):
    """Management command for creating training night events ahead of time."""

    help = "Create training night events for the coming months, shifting around public holidays"

    @inject
    def __init__(
        self,
        *args,
        training_scheduler_service: Annotated[
            "TrainingSchedulerService | None", Provide["training_scheduler_service"]
        ] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.training_scheduler_service = training_scheduler_service

    def add_arguments(self, parser: CommandParser) -> None:
        """Add command arguments."""
        parser.add_argument(
            "--months",
            type=int,
            default=None,
            help="Number of months ahead to generate (default: TRAINING_GENERATE_MONTHS_AHEAD)",
        )
        parser.add_argument(
            "--brigade",
            type=int,
            default=None,
            help="Only generate for the brigade with this ID",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be created without making any changes",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the generation command."""
        if self.training_scheduler_service is None:
            raise TrainingSchedulerServiceNotInjectedError("training_scheduler_service was not injected")

        months = options.get("months")
        dry_run = options.get("dry_run", False)

        if months is not None and months < 1:
            raise CommandError("--months must be at least 1")

        brigades = Brigade.objects.order_by("id")
        if options.get("brigade") is not None:
            brigades = brigades.filter(id=options["brigade"])
            if not brigades.exists():
                raise CommandError(f"Brigade {options['brigade']} does not exist")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No trainings will be created"))

        totals = {"created": 0, "skipped": 0, "adjusted": 0}
        for brigade in brigades:
            result = self.training_scheduler_service.materialize_horizon(
                brigade, months_ahead=months, dry_run=dry_run
            )
            self.stdout.write(f"{brigade.name}:")
            for training in result.trainings:
                if training.holiday_shifted:
                    self.stdout.write(
                        f"  {training.date.isoformat()} (moved from "
                        f"{training.nominal_date.isoformat()}, {training.holiday_name or 'public holiday'})"
                    )
                elif training.is_moved:
                    self.stdout.write(
                        f"  {training.date.isoformat()} (moved from {training.nominal_date.isoformat()})"
                    )
            self.stdout.write(
                f"  Created: {result.created}, Skipped: {result.skipped}, Adjusted: {result.adjusted}"
            )
            totals["created"] += result.created
            totals["skipped"] += result.skipped
            totals["adjusted"] += result.adjusted

        verb = "Would create" if dry_run else "Created"
        self.stdout.write(
            self.style.SUCCESS(
                f"{verb} {totals['created']} training(s), skipped {totals['skipped']}, "
                f"adjusted {totals['adjusted']} for public holidays or moves"
            )
        )
