import datetime

import pytest
from rest_framework.test import APIClient

from brigades.constants import MemberRank, MemberRole


@pytest.fixture
def user_password():
    from users.factories import DEFAULT_TEST_USER_PASSWORD

    return DEFAULT_TEST_USER_PASSWORD


@pytest.fixture
def user(user_password):
    from users.factories import UserFactory

    return UserFactory().create_user()


@pytest.fixture
def auth_client(user, user_password):
    client = APIClient()
    client.login(email=user.email, password=user_password)
    return client


@pytest.fixture
def anonymous_client():
    client = APIClient()
    return client


@pytest.fixture
def di_container():
    """Fixture to create a DI container."""
    from di_core.containers import container

    return container


@pytest.fixture
def brigade():
    """A Monday-night brigade in Auckland, training 19:00 to 21:00."""
    from brigades.factories import BrigadeFactory

    return BrigadeFactory().create_brigade(
        training_weekday=1, training_time=datetime.time(19, 0), training_duration_hours=2
    )


@pytest.fixture
def member(brigade, user):
    from brigades.factories import MemberFactory

    return MemberFactory().create_member(brigade, user=user, email=user.email)


@pytest.fixture
def officer(brigade):
    from brigades.factories import MemberFactory

    return MemberFactory().create_member(
        brigade, name="Station Officer", role=MemberRole.OFFICER, rank=MemberRank.SO
    )


@pytest.fixture
def chief(brigade):
    from brigades.factories import MemberFactory

    return MemberFactory().create_member(
        brigade, name="Chief Fire Officer", role=MemberRole.OFFICER, rank=MemberRank.CFO
    )


@pytest.fixture
def member_client(member):
    client = APIClient()
    client.force_authenticate(user=member.user)
    return client


@pytest.fixture
def officer_client(officer):
    client = APIClient()
    client.force_authenticate(user=officer.user)
    return client


@pytest.fixture
def chief_client(chief):
    client = APIClient()
    client.force_authenticate(user=chief.user)
    return client
