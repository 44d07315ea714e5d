# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
from typing import Final, Protocol

from ._identity import AWSCredentialIdentity
from .exceptions import AWSIdentityError

logger: Final = logging.getLogger(__name__)


class CredentialsResolver(Protocol):
    """Resolves the credentials used to sign requests."""

    async def get_identity(self) -> AWSCredentialIdentity: ...


class StaticCredentialsResolver(CredentialsResolver):
    """Resolve static AWS credentials."""

    def __init__(self, *, credentials: AWSCredentialIdentity) -> None:
        self._credentials = credentials

    async def get_identity(self) -> AWSCredentialIdentity:
        return self._credentials


class EnvironmentCredentialsResolver(CredentialsResolver):
    """Resolves AWS credentials from system environment variables."""

    def __init__(self) -> None:
        self._credentials: AWSCredentialIdentity | None = None

    async def get_identity(self) -> AWSCredentialIdentity:
        if self._credentials is not None:
            return self._credentials

        access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
        secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")

        if not access_key_id or not secret_access_key:
            raise AWSIdentityError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
            )

        logger.debug("Resolved credentials for %s from environment.", access_key_id)
        self._credentials = AWSCredentialIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
        )
        return self._credentials
