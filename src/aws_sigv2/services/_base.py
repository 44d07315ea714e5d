# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from typing import Final, Self
from xml.etree import ElementTree as ET

from .._http import URI, AWSRequest, HTTPResponse, QueryParameters
from ..aio.aiohttp import AIOHTTPClient
from ..aio.interfaces import HTTPClient
from ..exceptions import ResponseParseError, ServiceError, TransportError
from ..interfaces.identity import AWSCredentialsIdentity
from ..signers import SigningProfile, SigV2Signer, SigV2SigningProperties
from ._xml import find_text, parse_xml

logger: Final = logging.getLogger(__name__)


class QueryServiceClient:
    """Shared plumbing for services that take signed GET query requests and reply
    with XML documents."""

    signer = SigV2Signer()

    def __init__(self, *, http_client: HTTPClient | None = None) -> None:
        # Only a client created here is closed by this service.
        self._owned_http_client: AIOHTTPClient | None = None
        if http_client is None:
            http_client = self._owned_http_client = AIOHTTPClient()
        self._http_client = http_client

    async def close(self) -> None:
        """Release the HTTP session of the default client, if one was created."""
        if self._owned_http_client is not None:
            await self._owned_http_client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _signed_request(
        self,
        *,
        identity: AWSCredentialsIdentity,
        destination: URI,
        params: QueryParameters,
        profile: SigningProfile = SigningProfile.DEFAULT,
    ) -> AWSRequest:
        request = AWSRequest(destination=destination, method="GET")
        request.with_query_params(params)
        return self.signer.sign(
            signing_properties=SigV2SigningProperties(profile=profile),
            http_request=request,
            identity=identity,
        )

    async def _send(self, request: AWSRequest, *, operation: str) -> HTTPResponse:
        logger.debug("Calling %s on %s", operation, request.destination.authority)
        try:
            return await self._http_client.send(request)
        except TransportError:
            raise
        except (OSError, TimeoutError) as e:
            raise TransportError(f"Failed to contact AWS for {operation}: {e}") from e

    async def _call(
        self,
        *,
        identity: AWSCredentialsIdentity,
        destination: URI,
        params: QueryParameters,
        operation: str,
        error_prefix: str | None = None,
    ) -> ET.Element:
        """Sign and send a request, then decode the XML response document.

        :raises TransportError: The request could not be sent.
        :raises ResponseParseError: The response body is not well-formed XML.
        :raises ServiceError: The response contains an error document or has a
            non-success status code.
        """
        request = self._signed_request(
            identity=identity, destination=destination, params=params
        )
        response = await self._send(request, operation=operation)
        try:
            root = parse_xml(response.body)
        except ET.ParseError as e:
            if response.status >= 300:
                raise ServiceError(
                    f"{operation} failed with HTTP status {response.status}"
                ) from e
            raise ResponseParseError(f"Malformed response for {operation}: {e}") from e

        error = root.find(".//Error")
        if error is not None:
            message = find_text(error, "Message")
            prefix = error_prefix or f"{operation} failed"
            raise ServiceError(f"{prefix}: {message}", code=find_text(error, "Code"))
        if response.status >= 300:
            raise ServiceError(f"{operation} failed with HTTP status {response.status}")
        return root
