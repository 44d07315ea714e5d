# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass

from .._http import URI, QueryParameters
from ..aio.interfaces import HTTPClient
from ..interfaces.identity import AWSCredentialsIdentity
from ._base import QueryServiceClient
from ._xml import find_text


@dataclass(frozen=True)
class PublishResult:
    message_id: str
    request_id: str


class Topic(QueryServiceClient):
    """An SNS topic, addressed by the regional endpoint host and the topic ARN."""

    def __init__(
        self, host: str, arn: str, *, http_client: HTTPClient | None = None
    ) -> None:
        super().__init__(http_client=http_client)
        self.host = host
        self.arn = arn

    async def publish(
        self, identity: AWSCredentialsIdentity, message: str
    ) -> PublishResult:
        """Publish a message to the topic, signing the request with ``identity``."""
        params = QueryParameters(
            {"TopicArn": self.arn, "Message": message, "Action": "Publish"}
        )
        root = await self._call(
            identity=identity,
            destination=URI(host=self.host, path="/"),
            params=params,
            operation="Publish",
        )
        return PublishResult(
            message_id=find_text(root, "PublishResult/MessageId"),
            request_id=find_text(root, "ResponseMetadata/RequestId"),
        )
