import datetime
from collections.abc import Callable

from cuid2 import cuid_wrapper
from model_bakery import baker

from brigades.constants import MemberRole
from brigades.models import Brigade, Member
from users.factories import UserFactory


cuid_generator: Callable[[], str] = cuid_wrapper()


class BrigadeFactory:
    def create_brigade(self, **kwargs) -> Brigade:
        kwargs.setdefault("name", "Puke Volunteer Fire Brigade")
        kwargs.setdefault("slug", f"brigade-{cuid_generator()}")
        kwargs.setdefault("timezone", "Pacific/Auckland")
        kwargs.setdefault("training_weekday", 1)
        kwargs.setdefault("training_time", datetime.time(19, 0))
        kwargs.setdefault("training_duration_hours", 2)
        kwargs.setdefault("holiday_region", "auckland")
        return baker.make(Brigade, **kwargs)


class MemberFactory:
    def create_member(self, brigade: Brigade, with_user=True, **kwargs) -> Member:
        email = kwargs.pop("email", f"member{cuid_generator()}@example.com")
        kwargs.setdefault("name", "Test Member")
        kwargs.setdefault("role", MemberRole.FIREFIGHTER)
        kwargs.setdefault("status", "active")
        if with_user and "user" not in kwargs:
            kwargs["user"] = UserFactory().create_user(email=email)
        return baker.make(Member, brigade=brigade, email=email, **kwargs)
