"""Centralized message codes and default messages for client errors."""

from enum import Enum


class MessageCode(str, Enum):
    """Error kinds surfaced by the API key client."""

    # Local errors
    REQUEST_ENCODE_FAILED = "REQUEST_ENCODE_FAILED"

    # Transport errors
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    TIMEOUT = "TIMEOUT"

    # Status errors
    API_KEY_NOT_FOUND = "API_KEY_NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNEXPECTED_STATUS = "UNEXPECTED_STATUS"

    # Response errors
    RESPONSE_DECODE_FAILED = "RESPONSE_DECODE_FAILED"


DEFAULT_MESSAGES = {
    MessageCode.REQUEST_ENCODE_FAILED: "Could not encode request body",
    MessageCode.TRANSPORT_FAILED: "Request to API key service failed",
    MessageCode.TIMEOUT: "Request to API key service timed out",
    MessageCode.API_KEY_NOT_FOUND: "API key not found",
    MessageCode.CONFLICT: "API key conflicts with existing state",
    MessageCode.VALIDATION_FAILED: "API key service rejected the request",
    MessageCode.UNEXPECTED_STATUS: "Unexpected status from API key service",
    MessageCode.RESPONSE_DECODE_FAILED: "Could not decode API key service response",
}


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "API key client error")
