from .requests import (
    AttributeRequest,
    ConnectionRequest,
    MessageRequest,
    NewObjectRequest,
    NumberRequest,
    TextRequest,
)
from .response import AckResponse, ConsoleEntry, ConsoleResponse, ErrorResponse, ResultsResponse, StatusResponse

__all__ = [
    "AckResponse",
    "AttributeRequest",
    "ConnectionRequest",
    "ConsoleEntry",
    "ConsoleResponse",
    "ErrorResponse",
    "MessageRequest",
    "NewObjectRequest",
    "NumberRequest",
    "ResultsResponse",
    "StatusResponse",
    "TextRequest",
]
