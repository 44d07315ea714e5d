# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AWSCredentialsIdentity(Protocol):
    """AWS Credentials Identity."""

    access_key_id: str
    """A unique identifier for an AWS user or role.

    Sent in clear text with every signed request.
    """

    secret_access_key: str
    """A secret key used in conjunction with the access key ID to sign requests.

    Never transmitted.
    """
