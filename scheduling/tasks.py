import logging
from typing import TYPE_CHECKING, Annotated

from dependency_injector.wiring import Provide, inject

from brigade_portal.celery import app
from brigades.models import Brigade


if TYPE_CHECKING:
    from scheduling.services.training_scheduler_service import TrainingSchedulerService


logger = logging.getLogger(__name__)


@app.task
@inject
def materialize_training_horizon_task(
    brigade_id: int,
    months_ahead: int | None = None,
    training_scheduler_service: Annotated[
        "TrainingSchedulerService | None", Provide["training_scheduler_service"]
    ] = None,
):
    """
    Celery task to create the upcoming training nights of one brigade.
    """
    if not training_scheduler_service:
        return None

    brigade = Brigade.objects.filter(id=brigade_id).first()
    if not brigade:
        logger.warning("Brigade %s not found, skipping training materialization", brigade_id)
        return None

    result = training_scheduler_service.materialize_horizon(brigade, months_ahead=months_ahead)
    return {"created": result.created, "skipped": result.skipped, "adjusted": result.adjusted}


@app.task
def materialize_training_horizons_task(months_ahead: int | None = None):
    """
    Celery task to queue training materialization for every brigade.
    """
    brigade_ids = list(Brigade.objects.order_by("id").values_list("id", flat=True))
    for brigade_id in brigade_ids:
        materialize_training_horizon_task.delay(brigade_id, months_ahead=months_ahead)
    return len(brigade_ids)
