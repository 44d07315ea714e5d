# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable
from urllib.parse import parse_qsl, quote_plus

import pytest
from aws_sigv2 import AWSCredentialIdentity, AWSRequest, SigningProfile
from aws_sigv2.testing import MockHTTPClient

from .helpers import ACCESS_KEY, SECRET_KEY, reference_signature


@pytest.fixture
def aws_identity() -> AWSCredentialIdentity:
    return AWSCredentialIdentity(access_key_id=ACCESS_KEY, secret_access_key=SECRET_KEY)


@pytest.fixture
def mock_http_client() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture
def expected_signature() -> Callable[[AWSRequest, SigningProfile], str]:
    """Recompute the signature of a signed request independently of the signer."""

    def _expected(request: AWSRequest, profile: SigningProfile) -> str:
        pairs = sorted(
            f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
            for key, value in parse_qsl(
                request.destination.query or "", keep_blank_values=True
            )
            if key != profile.signature_parameter
        )
        query = "&".join(pairs).replace("+", "%20")
        query = query.replace("(", "%28").replace(")", "%29")
        destination = request.destination
        string_to_sign = "\n".join(
            [
                request.method.upper(),
                destination.authority,
                destination.path or "",
                query,
            ]
        )
        return reference_signature(SECRET_KEY, string_to_sign)

    return _expected
