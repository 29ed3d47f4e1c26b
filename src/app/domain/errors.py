from __future__ import annotations


class DraftServiceError(Exception):
    """Base error for one AI draft round trip."""

    user_message = "Something went wrong while drafting with AI. Please try again."


class MissingApiKeyError(DraftServiceError):
    user_message = "Add a Gemini API key in Settings to draft with AI."

    def __init__(self, message: str = "No Gemini API key configured"):
        super().__init__(message)


class InvalidUrlError(DraftServiceError):
    user_message = "Unable to reach the Gemini service right now. Please try again."

    def __init__(self, url: str, reason: str = "Invalid endpoint URL"):
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class InvalidResponseError(DraftServiceError):
    user_message = "Unable to reach the Gemini service right now. Please try again."

    def __init__(self, message: str = "Invalid response from Gemini", status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(DraftServiceError):
    user_message = "Gemini returned an empty response. Try adjusting your prompt and sending again."

    def __init__(self, message: str = "Gemini response contained no text"):
        super().__init__(message)


class DecodingFailedError(DraftServiceError):
    user_message = "Gemini sent back an unexpected format. Try regenerating your draft."

    def __init__(self, message: str = "Gemini text was not a valid draft"):
        super().__init__(message)


class ApiError(DraftServiceError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return self.message


class SecretStoreError(Exception):
    """The secret store could not be written."""

    user_message = "Unable to save the API key on this device. Check that a system keyring is available."

    def __init__(self, name: str, reason: str = "Secret store unavailable"):
        super().__init__(f"{reason}: {name}")
        self.name = name
        self.reason = reason
