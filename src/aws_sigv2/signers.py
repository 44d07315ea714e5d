# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import datetime
import hmac
import logging
from copy import deepcopy
from enum import Enum
from hashlib import sha256
from typing import Final, Required, TypedDict, assert_never

from ._http import AWSRequest, QueryParameters
from .interfaces.identity import AWSCredentialsIdentity

logger: Final = logging.getLogger(__name__)

SIGV2_TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"
SIGNATURE_VERSION: str = "2"
SIGNATURE_METHOD: str = "HmacSHA256"


class SigningProfile(Enum):
    """The parameter naming convention a service expects for SigV2 requests."""

    DEFAULT = "default"
    """Queue and notification services.

    Injects ``Timestamp``, ``AWSAccessKeyId``, ``SignatureVersion`` and
    ``SignatureMethod``. The signature is sent as ``Signature``.
    """

    PURCHASE = "purchase"
    """The payment pipeline.

    Injects ``accessKey``, ``signatureVersion`` and ``signatureMethod``, with no
    timestamp. The signature is sent as ``signature``.
    """

    @property
    def signature_parameter(self) -> str:
        """The query parameter name the signature is written to."""
        match self:
            case SigningProfile.DEFAULT:
                return "Signature"
            case SigningProfile.PURCHASE:
                return "signature"
            case _:
                assert_never(self)


class SigV2SigningProperties(TypedDict, total=False):
    profile: Required[SigningProfile]
    timestamp: str


def signing_values(
    profile: SigningProfile,
    identity: AWSCredentialsIdentity,
    params: QueryParameters,
    timestamp: str | None = None,
) -> QueryParameters:
    """Return a copy of ``params`` with the profile's baseline values merged in.

    Baseline values replace any caller-supplied values of the same name.

    :param timestamp: The ``Timestamp`` value for the default profile. The current UTC
        time is used when omitted. Ignored by the purchase profile.
    """
    new_params = deepcopy(params)
    match profile:
        case SigningProfile.DEFAULT:
            if timestamp is None:
                timestamp = _utc_timestamp()
            new_params.set("Timestamp", timestamp)
            new_params.set("AWSAccessKeyId", identity.access_key_id)
            new_params.set("SignatureVersion", SIGNATURE_VERSION)
            new_params.set("SignatureMethod", SIGNATURE_METHOD)
        case SigningProfile.PURCHASE:
            new_params.set("accessKey", identity.access_key_id)
            new_params.set("signatureVersion", SIGNATURE_VERSION)
            new_params.set("signatureMethod", SIGNATURE_METHOD)
        case _:
            assert_never(profile)
    return new_params


def attach_signature(
    profile: SigningProfile, params: QueryParameters, signature: str
) -> QueryParameters:
    """Write ``signature`` under the profile's signature parameter, replacing any
    previous signature."""
    params.set(profile.signature_parameter, signature)
    return params


def _utc_timestamp() -> str:
    return datetime.datetime.now(datetime.UTC).strftime(SIGV2_TIMESTAMP_FORMAT)


class SigV2Signer:
    """Request signer for applying the AWS Signature Version 2 algorithm with
    HmacSHA256."""

    def sign(
        self,
        *,
        signing_properties: SigV2SigningProperties,
        http_request: AWSRequest,
        identity: AWSCredentialsIdentity,
    ) -> AWSRequest:
        """Generate and apply a SigV2 signature to a copy of the supplied request.

        :param signing_properties: SigV2SigningProperties selecting the signing
            profile and, optionally, a fixed timestamp.
        :param http_request: An AWSRequest to sign prior to sending to the service.
        :param identity: The credentials to sign with.
        """
        self._validate_identity(identity=identity)
        profile = signing_properties["profile"]

        new_request = deepcopy(http_request)
        existing = new_request.query_params
        # A signature left over from an earlier signing is never part of the input.
        if profile.signature_parameter in existing:
            del existing[profile.signature_parameter]
        params = signing_values(
            profile, identity, existing, signing_properties.get("timestamp")
        )

        canonical_query = self.canonical_query_string(params=params)
        string_to_sign = self.string_to_sign(
            http_request=new_request, canonical_query=canonical_query
        )
        logger.debug("SigV2 string to sign: %r", string_to_sign)

        signature = self._signature(
            string_to_sign=string_to_sign, secret_key=identity.secret_access_key
        )
        attach_signature(profile, params, signature)
        new_request.with_query_params(params)
        return new_request

    def canonical_query_string(self, *, params: QueryParameters) -> str:
        """Build the canonical query string.

        Each parameter is form-encoded as ``key=value`` and the encoded pairs are
        sorted as whole strings, not by key alone. The joined result then has ``+``,
        ``(`` and ``)`` replaced by ``%20``, ``%28`` and ``%29``, in that order.
        """
        query = "&".join(sorted(params.encoded_pairs()))
        query = query.replace("+", "%20")
        query = query.replace("(", "%28")
        query = query.replace(")", "%29")
        return query

    def string_to_sign(self, *, http_request: AWSRequest, canonical_query: str) -> str:
        """The SigV2 string to sign.

        Defined as:
            <HTTPMethod>\n
            <Host>\n
            <Path>\n
            <CanonicalQueryString>
        """
        destination = http_request.destination
        return (
            f"{http_request.method.upper()}\n"
            f"{destination.authority}\n"
            f"{destination.path or ''}\n"
            f"{canonical_query}"
        )

    def _signature(self, *, string_to_sign: str, secret_key: str) -> str:
        digest = hmac.new(
            key=secret_key.encode(), msg=string_to_sign.encode(), digestmod=sha256
        ).digest()
        return base64.b64encode(digest).decode()

    def _validate_identity(self, *, identity: AWSCredentialsIdentity) -> None:
        if not isinstance(identity, AWSCredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
