"""Generation request entity - a validated video generation request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceImage:
    """Reference image attached to a request, already base64 encoded."""

    # Base64 payload without any data-URI prefix
    data: str

    # MIME type of the decoded image
    mime_type: str = "image/png"


@dataclass(frozen=True)
class GenerationRequest:
    """
    A normalized video generation request.

    Only the Request Normalizer builds these from user input, so a
    GenerationRequest always carries a usable prompt and at most one image.
    Optional fields are None when the caller did not supply a usable value.
    """
    prompt: str
    model: str | None = None
    duration_seconds: float | None = None
    aspect_ratio: str | None = None
    negative_prompt: str | None = None
    image: ReferenceImage | None = None

    def __post_init__(self) -> None:
        if not self.prompt or not self.prompt.strip():
            raise ValueError("prompt cannot be empty")
        if self.duration_seconds is not None and self.duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
