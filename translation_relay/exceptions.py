"""
Custom exception classes for the application.

Every exception carries an HTTP status so the same error can be reported
as an HTTP response or as a WebSocket `error` frame.
"""


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message, sent to the client.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidMessageError(AppException):
    """
    A client frame could not be decoded or failed validation.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class NotJoinedError(AppException):
    """
    A room-scoped frame arrived on a connection that is not in a room,
    either before `join_room` or after it left.

    HTTP Status: 409 Conflict
    """

    http_status = 409


class DuplicateParticipantError(AppException):
    """
    A participant id is already in use in the room and the duplicate
    policy is `reject`.

    HTTP Status: 409 Conflict
    """

    http_status = 409


class InvalidAudioError(AppException):
    """
    Uploaded or streamed audio is missing, not audio, or not decodable.

    HTTP Status: 400 Bad Request
    """

    http_status = 400


class PayloadTooLargeError(AppException):
    """
    Uploaded audio exceeds the configured size limit.

    HTTP Status: 413 Content Too Large
    """

    http_status = 413


class ProviderError(AppException):
    """
    A translation or transcription provider call failed.

    HTTP Status: 502 Bad Gateway
    """

    http_status = 502
