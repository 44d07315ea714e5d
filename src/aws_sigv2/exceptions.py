# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class BaseAWSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""


class AWSIdentityError(BaseAWSSDKException):
    """Credentials could not be resolved."""


class ServiceCallError(BaseAWSSDKException):
    """Base exception for failures of a service operation."""


class TransportError(ServiceCallError):
    """The HTTP request could not be completed."""


class ResponseParseError(ServiceCallError):
    """The service response body could not be decoded."""


class ServiceError(ServiceCallError):
    """The service returned an error document or an unsuccessful status."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
