# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from .fps import Purchase, SettleResult, Store, TransactionStatus
from .sns import PublishResult, Topic
from .sqs import Queue, SQSMessage

__all__ = (
    "PublishResult",
    "Purchase",
    "Queue",
    "SQSMessage",
    "SettleResult",
    "Store",
    "Topic",
    "TransactionStatus",
)
