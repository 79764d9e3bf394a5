# src/moodtunes/curator/errors.py


class PlaylistError(Exception):
    """
    Base class for failures of a single playlist request.

    `message` is safe to show to the user; `status_code` is the HTTP status
    the API answers with.
    """

    status_code = 500
    default_message = "Failed to generate playlist."

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(PlaylistError):
    status_code = 400
    default_message = "Text input is required."


class ProviderUnavailable(PlaylistError):
    default_message = "The music curator is unavailable right now. Please try again later."


class EmptyProviderResponse(PlaylistError):
    default_message = "The music curator returned an empty response. Please try again."


class MalformedProviderJSON(PlaylistError):
    default_message = "The music curator returned an invalid reply. Please try again."


class InvalidProviderSchema(PlaylistError):
    default_message = "The music curator reply is missing 'mood' or 'playlist' data."
