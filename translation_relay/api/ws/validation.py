from pydantic import TypeAdapter, ValidationError

from translation_relay.exceptions import InvalidMessageError
from translation_relay.logging import logger
from translation_relay.schemas.request import ClientMessage

client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


def parse_client_message(data: str | bytes) -> ClientMessage:
    """
    Decode and validate a client frame into one of the client message models.

    Args:
        data: Raw JSON text of the frame.

    Returns:
        The validated request model for the frame's `type`.

    Raises:
        InvalidMessageError: The frame is not JSON, has a missing or unknown
            `type`, or its fields fail validation.
    """
    try:
        return client_message_adapter.validate_json(data)
    except ValidationError as ex:
        logger.debug(f"Invalid client frame: {data!r}\n{ex}")
        raise InvalidMessageError(_describe(ex)) from ex


def _describe(ex: ValidationError) -> str:
    error = ex.errors()[0]
    error_type = error["type"]

    if error_type == "json_invalid":
        return "Malformed JSON frame"
    if error_type == "union_tag_not_found":
        return "Message type is required"
    if error_type == "union_tag_invalid":
        tag = error.get("ctx", {}).get("tag")
        return f"Unknown message type: {tag}"
    if error_type in ("model_attributes_type", "model_type", "dict_type"):
        return "Message must be a JSON object"

    location = ".".join(str(part) for part in error["loc"][1:])
    if location:
        return f"Invalid message: {location}: {error['msg']}"
    return f"Invalid message: {error['msg']}"
