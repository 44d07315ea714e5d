# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import hashlib
import hmac

ACCESS_KEY: str = "AKIDEXAMPLE"
SECRET_KEY: str = "secret"


def reference_signature(secret_key: str, string_to_sign: str) -> str:
    """HMAC-SHA256 over ``string_to_sign``, base64 encoded with padding."""
    digest = hmac.new(
        secret_key.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")
