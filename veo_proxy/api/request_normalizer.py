"""Turns raw JSON bodies and multipart forms into GenerationRequest objects."""

import base64
import binascii
import inspect
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..domain.entities.generation_profile import VALID_ASPECT_RATIOS
from ..domain.entities.generation_request import GenerationRequest, ReferenceImage
from ..domain.interfaces.video_generator import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME_TYPE = "image/png"

# Content types that say nothing about the actual image format
_UNKNOWN_MIME_TYPES = {"", "application/octet-stream"}


@dataclass(frozen=True)
class UploadedImage:
    """A binary upload; ``file`` has a sync or async ``read()``."""
    file: Any
    content_type: str | None = None


@dataclass(frozen=True)
class Base64Image:
    """A base64 string, optionally carrying a data-URI prefix."""
    data: str
    mime_type: str | None = None


ImageInput = UploadedImage | Base64Image


def _clean_str(value: Any) -> str | None:
    """Return a stripped string, or None for blanks and non-strings."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_duration(value: Any) -> float | None:
    """
    Parse a duration in seconds.

    Numbers and numeric-looking strings are accepted. Anything unparseable,
    non-finite or not positive is treated as absent rather than rejected.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None

    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_aspect_ratio(value: Any) -> str | None:
    """Return the aspect ratio if it is supported, otherwise None."""
    aspect_ratio = _clean_str(value)
    if aspect_ratio not in VALID_ASPECT_RATIOS:
        return None
    return aspect_ratio


def strip_data_uri(value: str) -> tuple[str, str | None]:
    """
    Split ``data:image/png;base64,AAAA`` into ``("AAAA", "image/png")``.

    Everything up to and including the first comma is discarded. Strings
    without a comma are returned unchanged with no MIME type.
    """
    if "," not in value:
        return value, None

    prefix, payload = value.split(",", 1)
    mime_type = None
    if prefix.startswith("data:"):
        mime_type = prefix[len("data:"):].split(";", 1)[0].strip() or None
    return payload, mime_type


async def _read_upload(upload: UploadedImage) -> bytes:
    content = upload.file.read()
    if inspect.isawaitable(content):
        content = await content
    return content or b""


async def resolve_image(image_input: ImageInput | None) -> ReferenceImage | None:
    """
    Resolve an image input into a single ReferenceImage.

    Uploads are read once and base64 encoded; base64 strings lose their
    data-URI prefix and are checked for valid base64.
    """
    if image_input is None:
        return None

    if isinstance(image_input, UploadedImage):
        content = await _read_upload(image_input)
        if not content:
            return None
        content_type = (image_input.content_type or "").strip()
        if content_type in _UNKNOWN_MIME_TYPES:
            content_type = DEFAULT_IMAGE_MIME_TYPE
        return ReferenceImage(
            data=base64.b64encode(content).decode("ascii"),
            mime_type=content_type,
        )

    payload, uri_mime_type = strip_data_uri(image_input.data.strip())
    payload = "".join(payload.split())
    if not payload:
        return None

    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("Invalid image data: expected base64", e)

    mime_type = image_input.mime_type or uri_mime_type or DEFAULT_IMAGE_MIME_TYPE
    return ReferenceImage(data=payload, mime_type=mime_type)


def _image_inputs(fields: Mapping[str, Any]) -> Iterator[ImageInput]:
    """Yield image inputs in priority order: binary upload, then base64 string."""
    image_file = fields.get("imageFile")
    if image_file is not None and hasattr(image_file, "read"):
        yield UploadedImage(
            file=image_file,
            content_type=getattr(image_file, "content_type", None),
        )

    image_base64 = _clean_str(fields.get("imageBase64"))
    if image_base64:
        yield Base64Image(
            data=image_base64,
            mime_type=_clean_str(fields.get("imageMimeType")),
        )


async def normalize_fields(fields: Mapping[str, Any]) -> GenerationRequest:
    """
    Validate raw request fields and build a GenerationRequest.

    Args:
        fields: JSON object or multipart form fields

    Returns:
        The normalized request

    Raises:
        ValidationError: If the prompt is missing or the image data is invalid
    """
    prompt = _clean_str(fields.get("prompt"))
    if not prompt:
        raise ValidationError("Missing prompt")

    # The first input that yields data wins; empty uploads fall through
    image = None
    for image_input in _image_inputs(fields):
        image = await resolve_image(image_input)
        if image is not None:
            logger.info(f"Attached reference image ({image.mime_type})")
            break

    return GenerationRequest(
        prompt=prompt,
        model=_clean_str(fields.get("model")),
        duration_seconds=parse_duration(fields.get("duration")),
        aspect_ratio=parse_aspect_ratio(fields.get("aspectRatio")),
        negative_prompt=_clean_str(fields.get("negativePrompt")),
        image=image,
    )


async def normalize_request(request: Request) -> GenerationRequest:
    """
    Read the body of an inbound request and normalize it.

    Multipart and urlencoded bodies are read as forms; anything else is
    parsed as JSON and must be an object.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        try:
            form = await request.form()
        except StarletteHTTPException as e:
            raise ValidationError(str(e.detail), e)
        return await normalize_fields(form)

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Invalid JSON body", e)

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    return await normalize_fields(body)
