from collections.abc import Callable

from cuid2 import cuid_wrapper
from model_bakery import baker

from users.models import User


cuid_generator: Callable[[], str] = cuid_wrapper()


DEFAULT_TEST_USER_PASSWORD = "123456"  # noqa: S105


class UserFactory:
    def create_user(self, **kwargs) -> User:
        """
        Returns the user with the given e-mail, creating it when missing.
        """
        email = kwargs.pop("email", None) or f"user{cuid_generator()}@example.com"
        password = kwargs.pop("password", DEFAULT_TEST_USER_PASSWORD)

        existing = User.objects.filter(email=email).first()
        if existing is not None:
            return existing

        user = baker.prepare(User, email=email, **kwargs)
        user.set_password(password)
        user.save()
        return user
