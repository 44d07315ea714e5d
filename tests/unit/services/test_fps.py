# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable

import pytest
from aws_sigv2 import (
    URI,
    AWSCredentialIdentity,
    AWSRequest,
    QueryParameters,
    SigningProfile,
)
from aws_sigv2.exceptions import ServiceError
from aws_sigv2.services import Purchase, SettleResult, Store, TransactionStatus
from aws_sigv2.testing import MockHTTPClient

RETURN_URL = "https://shop.example.com/return"

STATUS_RESPONSE = b"""<GetTransactionStatusResponse
    xmlns="http://fps.amazonaws.com/doc/2008-09-17/">
  <GetTransactionStatusResult>
    <TransactionId>14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA</TransactionId>
    <TransactionStatus>Success</TransactionStatus>
    <StatusCode>Success</StatusCode>
    <StatusMessage>The transaction was successful.</StatusMessage>
  </GetTransactionStatusResult>
  <ResponseMetadata><RequestId>a1b2c3</RequestId></ResponseMetadata>
</GetTransactionStatusResponse>"""

PENDING_STATUS_RESPONSE = b"""<GetTransactionStatusResponse>
  <GetTransactionStatusResult>
    <TransactionId>14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA</TransactionId>
    <TransactionStatus>Pending</TransactionStatus>
    <StatusCode>PendingNetworkResponse</StatusCode>
    <StatusMessage>The transaction is pending.</StatusMessage>
  </GetTransactionStatusResult>
</GetTransactionStatusResponse>"""

SETTLE_RESPONSE = b"""<SettleResponse xmlns="http://fps.amazonaws.com/doc/2008-09-17/">
  <SettleResult>
    <TransactionId>14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA</TransactionId>
    <TransactionStatus>Pending</TransactionStatus>
  </SettleResult>
  <ResponseMetadata><RequestId>d4e5f6</RequestId></ResponseMetadata>
</SettleResponse>"""

SETTLE_ERROR_RESPONSE = b"""<Response>
  <Errors>
    <Error>
      <Code>InvalidTransactionState</Code>
      <Message>The transaction is not in a reserved state.</Message>
    </Error>
  </Errors>
  <RequestID>g7h8i9</RequestID>
</Response>"""

VERIFY_RESPONSE = b"""<VerifySignatureResponse
    xmlns="http://fps.amazonaws.com/doc/2008-09-17/">
  <VerifySignatureResult>
    <VerificationStatus>Success</VerificationStatus>
  </VerifySignatureResult>
</VerifySignatureResponse>"""

VERIFY_FAILURE_RESPONSE = b"""<VerifySignatureResponse>
  <VerifySignatureResult>
    <VerificationStatus>Failure</VerificationStatus>
  </VerifySignatureResult>
</VerifySignatureResponse>"""


@pytest.fixture
def store(mock_http_client: MockHTTPClient) -> Store:
    return Store(RETURN_URL, http_client=mock_http_client)


class TestCreatePurchaseURL:
    def test_signed_with_purchase_profile(
        self,
        store: Store,
        aws_identity: AWSCredentialIdentity,
        expected_signature: Callable[[AWSRequest, SigningProfile], str],
    ) -> None:
        url = store.create_purchase_url(
            aws_identity,
            Purchase(
                description="A (small) widget", price="USD 10.00", reference_id="1"
            ),
        )
        uri = URI.from_url(url)
        assert uri.host == "authorize.payments.amazon.com"
        assert uri.path == "/pba/paypipeline"

        request = AWSRequest(destination=uri)
        params = request.query_params
        assert params["description"] == "A (small) widget"
        assert params["amount"] == "USD 10.00"
        assert params["cobrandingStyle"] == "logo"
        assert params["immediateReturn"] == "1"
        assert params["processImmediate"] == "0"
        assert params["referenceId"] == "1"
        assert params["returnURL"] == RETURN_URL
        assert params["accessKey"] == "AKIDEXAMPLE"
        assert "AWSAccessKeyId" not in params
        assert "Timestamp" not in params
        assert params["signature"] == expected_signature(
            request, SigningProfile.PURCHASE
        )

    def test_is_deterministic(
        self, store: Store, aws_identity: AWSCredentialIdentity
    ) -> None:
        purchase = Purchase(description="Widget", price="USD 1.00")
        first = store.create_purchase_url(aws_identity, purchase)
        second = store.create_purchase_url(aws_identity, purchase)
        assert first == second

    def test_reference_id_is_optional(
        self, store: Store, aws_identity: AWSCredentialIdentity
    ) -> None:
        url = store.create_purchase_url(
            aws_identity, Purchase(description="Widget", price="USD 1.00")
        )
        assert "referenceId" not in AWSRequest(destination=URI.from_url(url)).query_params

    def test_sandbox_host(self, aws_identity: AWSCredentialIdentity) -> None:
        store = Store(RETURN_URL, sandbox=True, http_client=MockHTTPClient())
        url = store.create_purchase_url(
            aws_identity, Purchase(description="Widget", price="USD 1.00")
        )
        assert URI.from_url(url).host == "authorize.payments-sandbox.amazon.com"

    def test_requires_usd(
        self, store: Store, aws_identity: AWSCredentialIdentity
    ) -> None:
        with pytest.raises(ValueError):
            store.create_purchase_url(
                aws_identity, Purchase(description="Widget", price="EUR 1.00")
            )


async def test_get_transaction_status(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
    expected_signature: Callable[[AWSRequest, SigningProfile], str],
) -> None:
    mock_http_client.add_response(body=STATUS_RESPONSE)

    status = await store.get_transaction_status(
        aws_identity, "14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA"
    )

    assert status == TransactionStatus(
        transaction_id="14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA",
        transaction_status="Success",
        status_code="Success",
        status_message="The transaction was successful.",
    )
    request = mock_http_client.captured_requests[0]
    assert request.destination.host == "fps.amazonaws.com"
    params = request.query_params
    assert params["Action"] == "GetTransactionStatus"
    assert params["Version"] == "2008-09-17"
    assert params["Signature"] == expected_signature(request, SigningProfile.DEFAULT)


async def test_get_transaction_status_not_success(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    mock_http_client.add_response(body=PENDING_STATUS_RESPONSE)

    with pytest.raises(ServiceError) as exc_info:
        await store.get_transaction_status(aws_identity, "14GN")
    assert exc_info.value.code == "PendingNetworkResponse"
    assert "The transaction is pending." in str(exc_info.value)


async def test_settle_transaction(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    mock_http_client.add_response(body=SETTLE_RESPONSE)

    result = await store.settle_transaction(
        aws_identity, "14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA", "USD 10.00"
    )

    assert result == SettleResult(
        transaction_id="14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA",
        transaction_status="Pending",
    )
    params = mock_http_client.captured_requests[0].query_params
    assert params["Action"] == "Settle"
    assert params["ReserveTransactionId"] == "14GN1RA8LLTJ2ADC5OC5TMRVN5ZRUKAJVOA"
    assert params["TransactionAmount.CurrencyCode"] == "USD"
    assert params["TransactionAmount.Value"] == "10.00"


async def test_settle_transaction_error(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    mock_http_client.add_response(status=400, body=SETTLE_ERROR_RESPONSE)

    with pytest.raises(ServiceError, match="Amazon returned an error") as exc_info:
        await store.settle_transaction(aws_identity, "14GN", "USD 10.00")
    assert exc_info.value.code == "InvalidTransactionState"


async def test_settle_transaction_requires_usd(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    with pytest.raises(ValueError):
        await store.settle_transaction(aws_identity, "14GN", "10.00")
    assert mock_http_client.call_count == 0


async def test_verify_payment_params(
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    store = Store(RETURN_URL, sandbox=True, http_client=mock_http_client)
    mock_http_client.add_response(body=VERIFY_RESPONSE)
    received = QueryParameters({"status": "PS", "signature": "abc+/="})

    await store.verify_payment_params(aws_identity, received)

    request = mock_http_client.captured_requests[0]
    assert request.destination.host == "fps.sandbox.amazonaws.com"
    params = request.query_params
    assert params["Action"] == "VerifySignature"
    assert params["UrlEndPoint"] == RETURN_URL
    assert params["HttpParameters"] == "signature=abc%2B%2F%3D&status=PS"


async def test_verify_payment_params_failure(
    store: Store,
    mock_http_client: MockHTTPClient,
    aws_identity: AWSCredentialIdentity,
) -> None:
    mock_http_client.add_response(body=VERIFY_FAILURE_RESPONSE)

    with pytest.raises(ServiceError, match="Invalid signature verification: Failure"):
        await store.verify_payment_params(aws_identity, QueryParameters())
