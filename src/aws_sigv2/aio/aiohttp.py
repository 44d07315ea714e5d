# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from itertools import chain
from typing import Final

import aiohttp
from yarl import URL

from .._http import AWSRequest, HTTPResponse, tuples_to_fields
from ..exceptions import TransportError
from .interfaces import HTTPClient, HTTPClientConfiguration, HTTPRequestConfiguration

logger: Final = logging.getLogger(__name__)


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.HTTPClient` using aiohttp."""

    def __init__(
        self,
        *,
        client_config: HTTPClientConfiguration | None = None,
        _session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        :param client_config: Configuration that applies to all requests made with this
        client.
        """
        self._config = client_config or HTTPClientConfiguration()
        self._session = _session

    async def send(
        self,
        request: AWSRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        """
        request_config = request_config or HTTPRequestConfiguration()
        timeout = aiohttp.ClientTimeout(
            total=self._config.timeout, sock_read=request_config.read_timeout
        )
        headers_list = list(
            chain.from_iterable(fld.as_tuples() for fld in request.fields)
        )

        logger.debug("Sending %s %s", request.method, request.destination.authority)
        # The signed query is already percent-encoded, so yarl must not re-encode it.
        try:
            async with self._get_session().request(
                method=request.method,
                url=URL(request.destination.build(), encoded=True),
                headers=headers_list,
                data=request.body,
                timeout=timeout,
            ) as resp:
                response = HTTPResponse(
                    status=resp.status,
                    fields=tuples_to_fields(resp.headers.items()),
                    body=await resp.read(),
                    reason=resp.reason,
                )
        except aiohttp.ClientError as e:
            raise TransportError(str(e) or type(e).__name__) from e
        logger.debug("Received response with status %s", response.status)
        return response

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the underlying session, if one was opened."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
