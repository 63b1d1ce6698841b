"""Execute one logical call, replaying it while the server rate-limits us.

Classification per attempt:
    - transport failure (connect, DNS, timeout, body read) -> permanent
    - non-2xx with an undecodable body -> permanent ``JSONDeserializeError``
    - 429 whose envelope type is not ``insufficient_quota`` -> transient
    - any other non-2xx -> permanent ``ApiError``
    - 2xx -> decoded result

Transient failures wait for the next :class:`ExponentialBackoff` delay and
retry. Once the schedule's time budget is spent the last ``ApiError`` is
raised.

Only requests whose body is held in memory can be sent more than once.
Multipart and streamed bodies are executed exactly once whatever the outcome;
:func:`is_replayable` reports that property.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..errors import ApiError, ErrorCode, TransportError, is_retryable_rate_limit
from ..logging import LogContext, get_logger, normalized_log_event
from ..response_decoder import JsonObject, decode_response
from .backoff import BackoffPolicy

logger = get_logger(__name__)

# Indirection so tests can observe delays without waiting.
_sleep = asyncio.sleep


def is_replayable(request: httpx.Request) -> bool:
    """Return True when the request body can be sent again.

    ``httpx`` keeps JSON, raw-bytes and empty bodies as an in-memory
    ``ByteStream``; multipart and iterator bodies are consumed on send.
    """
    return isinstance(request.stream, httpx.ByteStream)


def _duplicate(request: httpx.Request) -> httpx.Request:
    return httpx.Request(
        request.method,
        request.url,
        headers=request.headers,
        content=request.content or None,
        extensions=dict(request.extensions),
    )


async def send_once(http_client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Send ``request`` and read the whole body, mapping transport failures."""
    try:
        return await http_client.send(request)
    except httpx.RequestError as err:
        raise TransportError(f"{type(err).__name__}: {err}", raw=err) from err


async def execute(
    http_client: httpx.AsyncClient,
    request: httpx.Request,
    policy: BackoffPolicy,
    output_type: Any = JsonObject,
) -> Any:
    """Drive ``request`` to a decoded result or a terminal error.

    Raises:
        TransportError: the request could not be delivered or read.
        ApiError: permanent API failure, or a rate limit that outlived the
            backoff budget.
        JSONDeserializeError: a body did not match the expected shape.
    """
    ctx = LogContext.for_request(request)

    if not is_replayable(request):
        normalized_log_event(
            logger,
            "request.not_replayable",
            ctx,
            phase="execute",
            level=logging.DEBUG,
            attempt=1,
            reason="request body cannot be read twice; executing without retry",
        )
        response = await send_once(http_client, request)
        return decode_response(response.status_code, response.content, output_type)

    schedule = policy.start()
    attempt = 0
    while True:
        attempt += 1
        response = await send_once(http_client, _duplicate(request))
        try:
            return decode_response(response.status_code, response.content, output_type)
        except ApiError as err:
            if not is_retryable_rate_limit(err.status_code, err.error):
                raise
            delay = schedule.next_delay()
            if delay is None:
                normalized_log_event(
                    logger,
                    "request.retry_exhausted",
                    ctx.with_response(response),
                    phase="retry",
                    level=logging.WARNING,
                    attempt=attempt,
                    error_code=ErrorCode.RATE_LIMIT.value,
                    elapsed=round(schedule.elapsed, 3),
                )
                raise
            normalized_log_event(
                logger,
                "request.rate_limited",
                ctx.with_response(response),
                phase="retry",
                level=logging.WARNING,
                attempt=attempt,
                error_code=ErrorCode.RATE_LIMIT.value,
                delay=round(delay, 3),
                message=f"Rate limited: {err.error.message}",
            )
            await _sleep(delay)


__all__ = ["execute", "is_replayable", "send_once"]
