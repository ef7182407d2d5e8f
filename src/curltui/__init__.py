from .core import Navigator, RequestState, ResponseState, build_args, send_request
from .util.logging import configure_logging

__all__ = [
    'Navigator',
    'RequestState',
    'ResponseState',
    'build_args',
    'send_request',
    'configure_logging',
]
