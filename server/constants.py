"""
Faerie MUD Constants

Central location for configuration defaults, Socket.IO event names, message
types and environment variable names shared by the front ends (cli.py and
server.py). Keeping them here avoids magic strings in the handlers and lets
tests assert the protocol in one place.
"""

# =============================================================================
# Socket.IO Event Names
# =============================================================================

# The event name that clients send when they want to issue a command
MESSAGE_IN = 'message_to_server'

# The event name the server uses to send messages back to clients
MESSAGE_OUT = 'message'

# =============================================================================
# Message Types
# =============================================================================

# System messages - command results, room views, world notices
MSG_TYPE_SYSTEM = 'system'

# Error messages - failed moves, invalid payloads, refused connections
MSG_TYPE_ERROR = 'error'

# =============================================================================
# Server Configuration Defaults
# =============================================================================

# Maximum length for incoming player messages to prevent spam/abuse
DEFAULT_MAX_MESSAGE_LENGTH = 1000

# Default values for server networking
DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 5000

# Prefix for generated names when a client connects without choosing one
DEFAULT_NAME_PREFIX = 'Adventurer'

# Prompt printed by the command line client before reading a line
CLI_PROMPT = '>>> '

# =============================================================================
# Environment Variable Keys
# =============================================================================

ENV_HOST = 'HOST'
ENV_PORT = 'PORT'
ENV_SECRET_KEY = 'SECRET_KEY'
ENV_MAX_MESSAGE_LEN = 'MUD_MAX_MESSAGE_LEN'
ENV_CORS_ALLOWED_ORIGINS = 'MUD_CORS_ALLOWED_ORIGINS'

# Logging: MUD_LOG_LEVEL = DEBUG|INFO|WARNING|ERROR|CRITICAL, MUD_LOG_FORMAT = text|json
ENV_LOG_LEVEL = 'MUD_LOG_LEVEL'
ENV_LOG_FORMAT = 'MUD_LOG_FORMAT'

# =============================================================================
# Helper Functions for Constants
# =============================================================================

def get_message_payload(msg_type: str, content: str) -> dict:
    """
    Create a standardized message payload for Socket.IO emission.

    Args:
        msg_type: One of MSG_TYPE_* constants (system, error)
        content: The message text to display to the user

    Returns:
        Dictionary ready for Socket.IO emit() calls
    """
    return {
        'type': msg_type,
        'content': content
    }
