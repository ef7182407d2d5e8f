from curltui.core.builder import build_args, send_request
from curltui.core.errors import (
    DiagnosticError,
    ProcessFailure,
    RequestError,
    ValidationError,
)
from curltui.core.models import HeaderPair, HttpMethod, RequestState, ResponseState
from curltui.core.navigator import Navigator

__all__ = [
    'build_args',
    'send_request',
    'Navigator',
    'HeaderPair',
    'HttpMethod',
    'RequestState',
    'ResponseState',
    'RequestError',
    'ValidationError',
    'ProcessFailure',
    'DiagnosticError',
]
