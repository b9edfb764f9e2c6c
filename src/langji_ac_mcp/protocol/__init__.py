"""Protocol layer: RTU framing, CRC, request builders, and response parsing."""

from .framing import build_request, validate_response
from .commands import FunctionCode
