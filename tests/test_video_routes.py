import base64

import pytest

from veo_proxy.domain.entities.operation_status import FailedStatus, PendingStatus, SucceededStatus
from veo_proxy.domain.interfaces.video_generator import SubmissionError, UpstreamError


def test_generate_returns_video_uri(client, fake_generator):
    response = client.post("/api/veo/generate", json={"prompt": "a paper boat", "duration": 8})

    assert response.status_code == 200
    assert response.json() == {"uri": "https://videos.example/v.mp4"}
    assert fake_generator.submitted[0].prompt == "a paper boat"
    assert fake_generator.submitted[0].duration_seconds == 8.0


@pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}])
def test_blank_prompt_is_rejected_without_submission(client, fake_generator, body):
    response = client.post("/api/veo/generate", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing prompt"}
    assert fake_generator.submitted == []


def test_non_object_json_is_rejected(client, fake_generator):
    response = client.post("/api/veo/generate", json=["a paper boat"])

    assert response.status_code == 400
    assert fake_generator.submitted == []


def test_malformed_json_is_rejected(client):
    response = client.post(
        "/api/veo/generate",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


def test_missing_handle_returns_500_without_polling(client, fake_generator):
    fake_generator.submit_error = SubmissionError("Operation did not return a name")

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 500
    assert response.json() == {"error": "Operation did not return a name"}
    assert fake_generator.status_calls == []


def test_polls_until_done(client, fake_generator, recording_sleep):
    fake_generator.statuses = [PendingStatus(), PendingStatus(), SucceededStatus(video_uri="https://videos.example/slow.mp4")]

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 200
    assert response.json() == {"uri": "https://videos.example/slow.mp4"}
    assert len(fake_generator.status_calls) == 3
    assert recording_sleep.calls == [5, 5]


def test_timeout_returns_504(client, fake_generator, recording_sleep):
    fake_generator.statuses = [PendingStatus()]

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 504
    assert response.json() == {"error": "Video generation timeout"}
    assert len(fake_generator.status_calls) == 4
    assert len(recording_sleep.calls) == 3


def test_error_payload_message_is_returned_verbatim(client, fake_generator):
    fake_generator.statuses = [FailedStatus(message="X")]

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 500
    assert response.json() == {"error": "X"}


def test_missing_video_uri_returns_500(client, fake_generator):
    fake_generator.statuses = [SucceededStatus(video_uri=None)]

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 500
    assert response.json() == {"error": "No video URI returned"}


def test_unexpected_error_is_downgraded_to_upstream_error(client, fake_generator):
    fake_generator.submit_error = RuntimeError("boom")

    response = client.post("/api/veo/generate", json={"prompt": "a paper boat"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate video: boom"}


def test_multipart_with_uploaded_image(client, fake_generator):
    response = client.post(
        "/api/veo/generate",
        data={
            "prompt": "the cat starts dancing",
            "model": "veo-3.0-fast-generate-001",
            "duration": "6",
            "negativePrompt": "blurry",
            "aspectRatio": "16:9",
        },
        files={"imageFile": ("cat.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 200
    request = fake_generator.submitted[0]
    assert request.prompt == "the cat starts dancing"
    assert request.model == "veo-3.0-fast-generate-001"
    assert request.duration_seconds == 6.0
    assert request.negative_prompt == "blurry"
    assert request.aspect_ratio == "16:9"
    assert request.image.data == base64.b64encode(b"jpeg-bytes").decode("ascii")
    assert request.image.mime_type == "image/jpeg"


def test_multipart_with_base64_image(client, fake_generator):
    response = client.post(
        "/api/veo/generate",
        data={"prompt": "p", "imageBase64": "data:image/png;base64,AAAA", "duration": "soon"},
    )

    assert response.status_code == 200
    request = fake_generator.submitted[0]
    assert request.image.data == "AAAA"
    assert request.image.mime_type == "image/png"
    assert request.duration_seconds is None


def test_multipart_blank_prompt_is_rejected(client, fake_generator):
    response = client.post(
        "/api/veo/generate",
        data={"prompt": " "},
        files={"imageFile": ("cat.png", b"png-bytes", "image/png")},
    )

    assert response.status_code == 400
    assert fake_generator.submitted == []


def test_submit_returns_operation_name(client, fake_generator):
    response = client.post("/api/veo/submit", json={"prompt": "a paper boat"})

    assert response.status_code == 200
    assert response.json() == {"name": "models/veo/operations/op-1"}
    assert fake_generator.status_calls == []


def test_submit_upstream_failure(client, fake_generator):
    fake_generator.submit_error = UpstreamError("quota exceeded")

    response = client.post("/api/veo/submit", json={"prompt": "a paper boat"})

    assert response.status_code == 500
    assert response.json() == {"error": "quota exceeded"}


def test_operation_status_pending(client, fake_generator):
    fake_generator.statuses = [PendingStatus()]

    response = client.get("/api/veo/operations/models/veo/operations/op-1")

    assert response.status_code == 200
    assert response.json() == {"name": "models/veo/operations/op-1", "done": False, "uri": None}
    assert fake_generator.status_calls == ["models/veo/operations/op-1"]


def test_operation_status_done(client):
    response = client.get("/api/veo/operations/op-1")

    assert response.status_code == 200
    assert response.json() == {"name": "op-1", "done": True, "uri": "https://videos.example/v.mp4"}


def test_operation_status_failed(client, fake_generator):
    fake_generator.statuses = [FailedStatus(message="Video was filtered due to content policy: violence")]

    response = client.get("/api/veo/operations/op-1")

    assert response.status_code == 500
    assert response.json() == {"error": "Video was filtered due to content policy: violence"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "veo-proxy"}


def test_oversized_duration_is_ignored(client, fake_generator):
    body = b'{"prompt": "a paper boat", "duration": 1' + b"0" * 400 + b"}"

    response = client.post(
        "/api/veo/generate",
        content=body,
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 200
    assert fake_generator.submitted[0].duration_seconds is None


def test_malformed_multipart_is_rejected_with_error_body(client, fake_generator):
    response = client.post(
        "/api/veo/generate",
        content=b"prompt=a paper boat",
        headers={"content-type": "multipart/form-data"},
    )

    assert response.status_code == 400
    assert set(response.json()) == {"error"}
    assert fake_generator.submitted == []


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/veo/nothing-here")

    assert response.status_code == 404
    assert set(response.json()) == {"error"}
