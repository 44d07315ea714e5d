# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Signature Version 2 request signing for AWS query services, with thin async
callers for SQS, SNS and Flexible Payments."""

from __future__ import annotations

from ._http import URI, AWSRequest, Field, Fields, HTTPResponse, QueryParameters
from ._identity import AWSCredentialIdentity
from .signers import (
    SigningProfile,
    SigV2Signer,
    SigV2SigningProperties,
    attach_signature,
    signing_values,
)

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "AWSRequest",
    "Field",
    "Fields",
    "HTTPResponse",
    "QueryParameters",
    "SigV2Signer",
    "SigV2SigningProperties",
    "SigningProfile",
    "attach_signature",
    "signing_values",
)
