# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Amazon Flexible Payments Service and the Simple Pay purchase pipeline."""

from dataclasses import dataclass

from .._http import URI, QueryParameters
from ..aio.interfaces import HTTPClient
from ..exceptions import ServiceError
from ..interfaces.identity import AWSCredentialsIdentity
from ..signers import SigningProfile
from ._base import QueryServiceClient
from ._xml import find_text

API_VERSION = "2008-09-17"
USD_PREFIX = "USD "

PIPELINE_HOST = "authorize.payments.amazon.com"
PIPELINE_SANDBOX_HOST = "authorize.payments-sandbox.amazon.com"
PIPELINE_PATH = "/pba/paypipeline"
FPS_HOST = "fps.amazonaws.com"
FPS_SANDBOX_HOST = "fps.sandbox.amazonaws.com"


@dataclass(frozen=True)
class Purchase:
    """A purchasable item.

    :param price: The amount including currency, for example ``"USD 10.00"``. Only US
        dollars are accepted.
    """

    description: str
    price: str
    reference_id: str = ""


@dataclass(frozen=True)
class TransactionStatus:
    transaction_id: str
    transaction_status: str
    status_code: str
    status_message: str


@dataclass(frozen=True)
class SettleResult:
    transaction_id: str
    transaction_status: str


class Store(QueryServiceClient):
    """Store-wide settings for accepting payments.

    :param return_url: Where the purchase pipeline sends buyers once they finish, and
        the endpoint whose parameters are verified by :py:meth:`verify_payment_params`.
    :param sandbox: Use the sandbox endpoints instead of production.
    """

    def __init__(
        self,
        return_url: str,
        *,
        sandbox: bool = False,
        http_client: HTTPClient | None = None,
    ) -> None:
        super().__init__(http_client=http_client)
        self.return_url = return_url
        self.sandbox = sandbox

    @property
    def _fps_destination(self) -> URI:
        return URI(host=FPS_SANDBOX_HOST if self.sandbox else FPS_HOST, path="/")

    def create_purchase_url(
        self, identity: AWSCredentialsIdentity, purchase: Purchase
    ) -> str:
        """Create a signed URL that sends the buyer through the purchase pipeline.

        No request is made; the URL is meant to be handed to the buyer's browser.

        :raises ValueError: The price is not in US dollars.
        """
        if not purchase.price.startswith(USD_PREFIX):
            raise ValueError("AWS only supports USD prices")

        params = QueryParameters(
            {
                "description": purchase.description,
                "amount": purchase.price,
                "cobrandingStyle": "logo",
                "immediateReturn": "1",
                "processImmediate": "0",
            }
        )
        if purchase.reference_id:
            params.set("referenceId", purchase.reference_id)
        params.add("returnURL", self.return_url)

        destination = URI(
            host=PIPELINE_SANDBOX_HOST if self.sandbox else PIPELINE_HOST,
            path=PIPELINE_PATH,
        )
        request = self._signed_request(
            identity=identity,
            destination=destination,
            params=params,
            profile=SigningProfile.PURCHASE,
        )
        return request.destination.build()

    async def get_transaction_status(
        self, identity: AWSCredentialsIdentity, transaction_id: str
    ) -> TransactionStatus:
        """Get the status of a transaction by id.

        :raises ServiceError: The service did not report a ``Success`` status code.
        """
        params = QueryParameters(
            {
                "Action": "GetTransactionStatus",
                "TransactionId": transaction_id,
                "Version": API_VERSION,
            }
        )
        root = await self._call(
            identity=identity,
            destination=self._fps_destination,
            params=params,
            operation="GetTransactionStatus",
        )
        status = TransactionStatus(
            transaction_id=find_text(root, "GetTransactionStatusResult/TransactionId"),
            transaction_status=find_text(
                root, "GetTransactionStatusResult/TransactionStatus"
            ),
            status_code=find_text(root, "GetTransactionStatusResult/StatusCode"),
            status_message=find_text(root, "GetTransactionStatusResult/StatusMessage"),
        )
        if status.status_code != "Success":
            raise ServiceError(
                "Amazon returned an invalid status: "
                f"({status.status_code}) {status.status_message}",
                code=status.status_code,
            )
        return status

    async def settle_transaction(
        self, identity: AWSCredentialsIdentity, transaction_id: str, amount: str
    ) -> SettleResult:
        """Settle a transaction that has been reserved.

        :param amount: The amount to settle, for example ``"USD 10.00"``.
        :raises ValueError: The amount is not in US dollars.
        """
        if not amount.startswith(USD_PREFIX):
            raise ValueError("Cannot settle a non-USD transaction")

        params = QueryParameters(
            {
                "Action": "Settle",
                "ReserveTransactionId": transaction_id,
                "TransactionAmount.CurrencyCode": "USD",
                "TransactionAmount.Value": amount.removeprefix(USD_PREFIX),
                "Version": API_VERSION,
            }
        )
        root = await self._call(
            identity=identity,
            destination=self._fps_destination,
            params=params,
            operation="Settle",
            error_prefix="Amazon returned an error",
        )
        return SettleResult(
            transaction_id=find_text(root, "SettleResult/TransactionId"),
            transaction_status=find_text(root, "SettleResult/TransactionStatus"),
        )

    async def verify_payment_params(
        self, identity: AWSCredentialsIdentity, params: QueryParameters
    ) -> None:
        """Verify the signature of parameters received on the return URL.

        :raises ServiceError: The parameters failed verification.
        """
        request_params = QueryParameters(
            {
                "Action": "VerifySignature",
                "UrlEndPoint": self.return_url,
                "HttpParameters": params.encode(),
                "Version": API_VERSION,
            }
        )
        root = await self._call(
            identity=identity,
            destination=self._fps_destination,
            params=request_params,
            operation="VerifySignature",
            error_prefix="Failed to validate signature",
        )
        status = find_text(root, "VerifySignatureResult/VerificationStatus")
        if status != "Success":
            raise ServiceError(
                f"Invalid signature verification: {status}", code=status or None
            )
