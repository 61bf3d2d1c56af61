import os

# Settings are read when veo_proxy.main is imported
os.environ.setdefault("GEMINI_API_KEY", "test-api-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from veo_proxy.api.dependencies import get_operation_poller, get_video_generator, reset_dependencies  # noqa: E402
from veo_proxy.domain.entities.operation_status import SucceededStatus  # noqa: E402
from veo_proxy.domain.interfaces.video_generator import VideoGenerator  # noqa: E402
from veo_proxy.infrastructure.genai.operation_poller import OperationPoller  # noqa: E402
from veo_proxy.main import app  # noqa: E402


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers every delay."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class FakeVideoGenerator(VideoGenerator):
    """Returns canned statuses in order, repeating the last one."""

    def __init__(self, statuses=None, operation_name="models/veo/operations/op-1", submit_error=None):
        self.submitted = []
        self.status_calls = []
        self.operation_name = operation_name
        self.submit_error = submit_error
        self.statuses = list(statuses or [SucceededStatus(video_uri="https://videos.example/v.mp4")])

    async def submit(self, request):
        self.submitted.append(request)
        if self.submit_error is not None:
            raise self.submit_error
        return self.operation_name

    async def get_status(self, operation_name):
        self.status_calls.append(operation_name)
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    async def health_check(self):
        return True


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def fake_generator():
    return FakeVideoGenerator()


@pytest.fixture
def client(fake_generator, recording_sleep):
    app.dependency_overrides[get_video_generator] = lambda: fake_generator
    app.dependency_overrides[get_operation_poller] = lambda: OperationPoller(
        fake_generator.get_status,
        poll_interval=5,
        max_attempts=4,
        sleep=recording_sleep,
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        reset_dependencies()
