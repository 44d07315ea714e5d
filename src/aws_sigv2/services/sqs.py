# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import timedelta

from .._http import URI, QueryParameters
from ..aio.interfaces import HTTPClient
from ..interfaces.identity import AWSCredentialsIdentity
from ._base import QueryServiceClient
from ._xml import find_text

API_VERSION = "2009-02-01"
MAX_WAIT_SECONDS = 20
MAX_RECEIVE_MESSAGES = 10
VISIBILITY_TIMEOUT = 5


@dataclass(frozen=True)
class SQSMessage:
    receipt_handle: str
    body: str


class Queue(QueryServiceClient):
    """An SQS queue, addressed by its queue URL."""

    def __init__(self, url: str, *, http_client: HTTPClient | None = None) -> None:
        super().__init__(http_client=http_client)
        self.url = url
        # Requests are sent to the queue URL with a trailing slash.
        self._destination = URI.from_url(url.rstrip("/") + "/")

    async def receive_messages(
        self,
        identity: AWSCredentialsIdentity,
        max_messages: int,
        wait: timedelta,
    ) -> list[SQSMessage]:
        """Receive at most ``max_messages`` messages, long polling for up to ``wait``.

        :raises ValueError: ``wait`` is longer than 20 seconds or negative, or
            ``max_messages`` is outside 0 to 10.
        """
        seconds = int(wait.total_seconds())
        if seconds < 0 or seconds > MAX_WAIT_SECONDS:
            raise ValueError(
                f"Wait time must be no longer than {MAX_WAIT_SECONDS} seconds. "
                f"Got: {seconds}"
            )
        if max_messages < 0 or max_messages > MAX_RECEIVE_MESSAGES:
            raise ValueError(
                f"Max messages must be no larger than {MAX_RECEIVE_MESSAGES}. "
                f"Got: {max_messages}"
            )

        params = QueryParameters(
            {
                "Action": "ReceiveMessage",
                "MaxNumberOfMessages": str(max_messages),
                "VisibilityTimeout": str(VISIBILITY_TIMEOUT),
                "WaitTimeSeconds": str(seconds),
                "Version": API_VERSION,
            }
        )
        root = await self._call(
            identity=identity,
            destination=self._destination,
            params=params,
            operation="ReceiveMessage",
        )
        return [
            SQSMessage(
                receipt_handle=find_text(msg, "ReceiptHandle"),
                body=find_text(msg, "Body"),
            )
            for msg in root.iterfind("ReceiveMessageResult/Message")
        ]

    async def delete_message(
        self, identity: AWSCredentialsIdentity, receipt_handle: str
    ) -> None:
        params = QueryParameters(
            {
                "Action": "DeleteMessage",
                "ReceiptHandle": receipt_handle,
                "Version": API_VERSION,
            }
        )
        await self._call(
            identity=identity,
            destination=self._destination,
            params=params,
            operation="DeleteMessage",
        )
