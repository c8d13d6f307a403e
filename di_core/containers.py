from dependency_injector import containers, providers

from leave.services.leave_request_service import LeaveRequestService
from leave.services.leave_window_service import LeaveWindowService
from public_holidays.services.holiday_api_client import NagerDateClient
from public_holidays.services.holiday_service import HolidayService
from scheduling.services.calendar_service import CalendarService
from scheduling.services.training_scheduler_service import TrainingSchedulerService


class AppContainer(containers.DeclarativeContainer):
    config = providers.Configuration()

    holiday_api_client = providers.Factory(
        NagerDateClient,
        base_url=config.HOLIDAYS_API_URL,
        country_code=config.HOLIDAYS_COUNTRY_CODE,
        timeout=config.HOLIDAYS_API_TIMEOUT,
    )

    holiday_service = providers.Factory(
        HolidayService,
        api_client=holiday_api_client,
        default_region=config.HOLIDAYS_DEFAULT_REGION,
    )

    training_scheduler_service = providers.Factory(
        TrainingSchedulerService,
        holiday_service=holiday_service,
    )

    calendar_service = providers.Factory(
        CalendarService,
        holiday_service=holiday_service,
    )

    leave_window_service = providers.Factory(
        LeaveWindowService,
        training_scheduler_service=training_scheduler_service,
    )

    leave_request_service = providers.Factory(
        LeaveRequestService,
        leave_window_service=leave_window_service,
    )


container: AppContainer | None = None  # set during app startup
