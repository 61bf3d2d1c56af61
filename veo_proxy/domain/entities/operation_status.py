"""Status of a long-running video generation operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PendingStatus:
    """The operation has not finished yet."""

    done = False


@dataclass(frozen=True)
class SucceededStatus:
    """The operation finished without an error payload."""

    # None when the service reported success but returned no video
    video_uri: str | None = None

    done = True


@dataclass(frozen=True)
class FailedStatus:
    """The operation finished with an error payload."""

    message: str

    done = True


OperationStatus = PendingStatus | SucceededStatus | FailedStatus
