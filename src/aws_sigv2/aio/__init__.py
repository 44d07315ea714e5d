# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .aiohttp import AIOHTTPClient
from .interfaces import HTTPClient, HTTPClientConfiguration, HTTPRequestConfiguration

__all__ = (
    "AIOHTTPClient",
    "HTTPClient",
    "HTTPClientConfiguration",
    "HTTPRequestConfiguration",
)
