"""
Application-level constants for protocol and identity formats.

These values define the wire protocol and id formats shared with clients.
For configurable values (history size, duplicate id policy, providers),
see translation_relay/settings.py.
"""

# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# Close code sent to clients when the server shuts down (RFC 6455 "going away")
WS_GOING_AWAY_CODE = 1001

# Maximum length of a room identifier accepted in `join_room`
MAX_ROOM_ID_LENGTH = 128

# Maximum length of a client supplied user id or display name
MAX_USER_FIELD_LENGTH = 64


# ============================================================================
# Identity Formats
# ============================================================================

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

USER_ID_PREFIX = "user_"
USER_ID_RANDOM_LENGTH = 9

TRANSLATION_ID_PREFIX = "trans_"
TRANSLATION_ID_RANDOM_LENGTH = 5

# Language tag used when the source language is not reported
AUTO_DETECTED_LANGUAGE = "auto-detected"


# ============================================================================
# Provider Behavior
# ============================================================================

TRANSLATION_MAX_TOKENS = 1000
TRANSLATION_TEMPERATURE = 0.3

# Transcript produced by the mock transcription provider
MOCK_TRANSCRIPT = "Test speech - audio detected"

# Content type assumed for audio chunks received over the WebSocket
AUDIO_CHUNK_CONTENT_TYPE = "audio/webm"
AUDIO_CHUNK_FILENAME = "chunk.webm"
