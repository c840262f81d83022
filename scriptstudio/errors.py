from __future__ import annotations


GENERIC_ERROR_MESSAGE = "Something went wrong while generating the script."


class StudioError(Exception):
    """Base class for failures that end one submission.

    The message is shown to the user as-is.
    """

    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StudioError):
    default_message = "Please enter your idea."


class AttachmentExtractionError(StudioError):
    def __init__(self, file_name: str, detail: str = "") -> None:
        self.file_name = file_name
        text = f"Could not read text from {file_name}"
        super().__init__(f"{text}: {detail}" if detail else text)


class NoResponseText(StudioError):
    default_message = "No response received from the AI."


class MalformedResponse(StudioError):
    pass


class ServiceError(StudioError):
    pass
