"""Turn a composed request into an HTTP client invocation and run it.

The client is an external binary (``curl`` unless configured otherwise).
``send_request`` never raises for request problems: every failure comes back
as a ``ResponseState`` carrying an error, so the UI loop is never interrupted.
"""
from __future__ import annotations

import asyncio
import shlex
import signal

from curltui.core.errors import DiagnosticError, ProcessFailure, ValidationError
from curltui.core.models import RequestState, ResponseState
from curltui.settings import CLIENT_SETTINGS
from curltui.util.logging import get_logger

log = get_logger(__name__)


def build_args(request: RequestState) -> list[str]:
    """Build the client's argument list (without the binary itself).

    Raises:
        ValidationError: if the URL is empty once trimmed.
    """
    url = request.url.strip()
    if not url:
        raise ValidationError("URL cannot be empty")

    method = request.method.value
    args = [CLIENT_SETTINGS.silent_flag, CLIENT_SETTINGS.method_flag, method, url]

    for pair in request.headers:
        key = pair.key.strip()
        value = pair.value.strip()
        # rows without a key are skipped; an empty value is still sent
        if key:
            args += [CLIENT_SETTINGS.header_flag, f"{key}: {value}"]

    if method in CLIENT_SETTINGS.payload_methods:
        body = request.body.strip()
        if body:
            args += [CLIENT_SETTINGS.data_flag, body]

    return args


def format_command(args: list[str], binary: str | None = None) -> str:
    """Render an invocation as a copy-pasteable shell line."""
    return shlex.join([binary or CLIENT_SETTINGS.binary, *args])


def _exit_detail(returncode: int) -> str:
    if returncode < 0:
        try:
            name = signal.strsignal(-returncode)
        except ValueError:
            name = None
        # "signal: killed", falling back to the number
        return f"signal: {(name or str(-returncode)).lower()}"
    return f"exit status {returncode}"


async def send_request(request: RequestState, *, binary: str | None = None) -> ResponseState:
    """Run the client for ``request`` and collect its output.

    Args:
        request: Snapshot of the composed request.
        binary: Client executable; defaults to ``SETTINGS.client.binary``.

    Returns:
        A ``ResponseState`` whose ``body`` is the full captured stdout (empty
        when no process ran) and whose ``error`` is set when validation
        failed, the process failed, or it wrote anything to stderr.
    """
    ctx = {"method": request.method.value, "url": request.url.strip() or "-"}
    try:
        args = build_args(request)
    except ValidationError as exc:
        log.debug("request rejected", extra=ctx)
        return ResponseState(body="", error=exc)

    binary = binary or CLIENT_SETTINGS.binary
    log.debug(f"dispatching {format_command(args, binary)}", extra=ctx)

    try:
        proc = await asyncio.create_subprocess_exec(
            binary,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        log.warning(f"could not start {binary}", extra=ctx)
        return ResponseState(body="", error=ProcessFailure(str(exc)))

    stdout, stderr = await proc.communicate()
    body = stdout.decode("utf-8", errors="replace")
    diagnostics = stderr.decode("utf-8", errors="replace")

    if proc.returncode != 0:
        error = ProcessFailure(_exit_detail(proc.returncode))
        log.warning(str(error), extra=ctx)
    elif diagnostics:
        # stderr output counts as an error even on a clean exit
        error = DiagnosticError(diagnostics)
        log.warning("client wrote to stderr", extra=ctx)
    else:
        error = None
        log.debug(f"received {len(stdout)} bytes", extra=ctx)

    return ResponseState(body=body, error=error)
