from .client import API_VERSION, DEFAULT_BASE_URL, DEFAULT_MODEL, Client
from .context import RequestContext
from .errors import CancelledError, ClientError, ConfigurationError, DecodingError, StatusError
from .types import (
    ROLE_ASSISTANT,
    ROLE_FUNCTION,
    ROLE_SYSTEM,
    ROLE_TOOL,
    ROLE_USER,
    ChatRequest,
    ChatResponse,
    Choice,
    Message,
    ModelResponse,
)

__version__ = "0.1.0"
