import pytest

from job_deck.local import LocalApi


class FakeApi:
    """Network-style stand-in for job_deck.api.

    Calls go through the store's worker-thread path, are recorded, and can be
    made to fail per function name.
    """

    is_local = False

    def __init__(self, user_id: str = "user-1"):
        self.backend = LocalApi(user_id=user_id)
        self.calls = []
        self.failures = {}

    def __getattr__(self, name):
        fn = getattr(self.backend, name)

        def call(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if name in self.failures:
                raise self.failures[name]
            return fn(*args, **kwargs)

        return call

    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]


@pytest.fixture
def fake_api():
    return FakeApi()
