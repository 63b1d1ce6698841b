"""Client handle: configuration snapshot plus a long-lived HTTP transport.

``Client`` owns one ``httpx.AsyncClient`` for its whole lifetime and shares it
with every call and with every handle derived through ``with_*``. Single-object
calls go through the retrying executor; streaming calls go through the stream
bridge and are never retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import httpx

from .base.dto.multipart import MultipartForm
from .base.http import create_http_client
from .base.request_builder import JsonPayload, QueryParams, build_request
from .base.resilience import BackoffPolicy, execute
from .base.response_decoder import JsonObject
from .base.streaming import StreamHandle, open_stream
from .base.timeouts import TimeoutConfig
from .config import ClientConfig

if TYPE_CHECKING:  # pragma: no cover
    from .resources import (
        Completions,
        Edits,
        Embeddings,
        Files,
        FineTunes,
        Images,
        Models,
        Moderations,
    )


class Client:
    """Container for credentials, base URL, organization id and backoff policy.

    Parameters:
        config: Configuration snapshot; read from ``OPENAI_*`` environment
            variables when omitted.
        http_client: Transport to share. When omitted the handle creates one
            and closes it in :meth:`aclose`.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config if config is not None else ClientConfig.from_env()
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else create_http_client(self._config.timeouts)

    # Configuration ---------------------------------------------------------
    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_base(self) -> str:
        return self._config.api_base

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http

    def _derive(self, config: ClientConfig) -> "Client":
        return Client(config, http_client=self._http)

    def with_api_key(self, api_key: str) -> "Client":
        return self._derive(self._config.with_api_key(api_key))

    def with_org_id(self, org_id: str) -> "Client":
        return self._derive(self._config.with_org_id(org_id))

    def with_api_base(self, api_base: str) -> "Client":
        return self._derive(self._config.with_api_base(api_base))

    def with_backoff(self, backoff: BackoffPolicy) -> "Client":
        """Retry rate-limited requests on ``backoff``. Form submissions are not retried."""
        return self._derive(self._config.with_backoff(backoff))

    def with_timeouts(self, timeouts: TimeoutConfig) -> "Client":
        return self._derive(self._config.with_timeouts(timeouts))

    # API groups ------------------------------------------------------------
    def models(self) -> "Models":
        from .resources import Models

        return Models(self)

    def completions(self) -> "Completions":
        from .resources import Completions

        return Completions(self)

    def edits(self) -> "Edits":
        from .resources import Edits

        return Edits(self)

    def images(self) -> "Images":
        from .resources import Images

        return Images(self)

    def moderations(self) -> "Moderations":
        from .resources import Moderations

        return Moderations(self)

    def files(self) -> "Files":
        from .resources import Files

        return Files(self)

    def fine_tunes(self) -> "FineTunes":
        from .resources import FineTunes

        return FineTunes(self)

    def embeddings(self) -> "Embeddings":
        from .resources import Embeddings

        return Embeddings(self)

    # Verbs -----------------------------------------------------------------
    async def get(self, path: str, *, output_type: Any = JsonObject) -> Any:
        """GET ``path`` and decode the response body."""
        request = build_request(self._config, "GET", path)
        return await execute(self._http, request, self._config.backoff, output_type)

    async def delete(self, path: str, *, output_type: Any = JsonObject) -> Any:
        """DELETE ``path`` and decode the response body."""
        request = build_request(self._config, "DELETE", path)
        return await execute(self._http, request, self._config.backoff, output_type)

    async def post(
        self,
        path: str,
        payload: Optional[JsonPayload] = None,
        *,
        output_type: Any = JsonObject,
    ) -> Any:
        """POST a JSON ``payload`` to ``path`` and decode the response body."""
        request = build_request(self._config, "POST", path, json=payload)
        return await execute(self._http, request, self._config.backoff, output_type)

    async def post_form(
        self,
        path: str,
        form: MultipartForm,
        *,
        output_type: Any = JsonObject,
    ) -> Any:
        """POST a multipart ``form`` to ``path``; executed once, never retried."""
        request = build_request(self._config, "POST", path, form=form)
        return await execute(self._http, request, self._config.backoff, output_type)

    async def post_stream(
        self,
        path: str,
        payload: JsonPayload,
        *,
        output_type: Any = JsonObject,
    ) -> StreamHandle[Any]:
        """POST ``payload`` and stream the server-sent events of the response."""
        request = build_request(self._config, "POST", path, json=payload, stream=True)
        return await open_stream(self._http, request, output_type)

    async def get_stream(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        *,
        output_type: Any = JsonObject,
    ) -> StreamHandle[Any]:
        """GET ``path`` with query ``params`` and stream the server-sent events."""
        request = build_request(self._config, "GET", path, params=params, stream=True)
        return await open_stream(self._http, request, output_type)

    # Lifecycle -------------------------------------------------------------
    async def aclose(self) -> None:
        """Close the transport if this handle created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Client({self._config!r})"


__all__ = ["Client"]
