"""Abstract interface for video generation."""

from abc import ABC, abstractmethod

from ..entities.generation_request import GenerationRequest
from ..entities.operation_status import OperationStatus


class VideoGenerator(ABC):
    """
    Abstract interface for video generation.

    Generation is asynchronous on the service side: ``submit`` starts a job
    and returns its operation name, ``get_status`` reads the job's current
    state. Driving a job to completion is the job of the OperationPoller.
    """

    @abstractmethod
    async def submit(self, request: GenerationRequest) -> str:
        """
        Submit one generation job.

        Args:
            request: Normalized generation request

        Returns:
            The operation name (handle) of the started job

        Raises:
            SubmissionError: If the service did not return an operation name
            UpstreamError: If the submission call failed
        """
        pass

    @abstractmethod
    async def get_status(self, operation_name: str) -> OperationStatus:
        """
        Fetch the current status of a job.

        Args:
            operation_name: Handle returned by ``submit``

        Returns:
            PendingStatus, SucceededStatus or FailedStatus

        Raises:
            UpstreamError: If the status call failed
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the video generation service is healthy.

        Returns:
            True if service is available, False otherwise
        """
        pass


class VideoGenerationError(Exception):
    """Exception raised when video generation fails."""

    status_code = 500

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(VideoGenerationError):
    """The request was rejected before anything was submitted."""

    status_code = 400


class GenerationTimeoutError(VideoGenerationError):
    """The job was still running when the poll budget ran out."""

    status_code = 504


class UpstreamError(VideoGenerationError):
    """The service reported a failure or could not be reached."""


class ContractError(VideoGenerationError):
    """The service reported success but left out data it should have returned."""


class SubmissionError(ContractError):
    """The submission reply carried no usable operation handle."""
