from __future__ import annotations

from pydantic import BaseModel

from skybooking.cancellation.domain import CancellationPolicy
from skybooking.shared.domain import Money


class PolicyData(BaseModel):
    """キャンセルポリシーのレスポンスモデル"""

    refund_percentage: int
    hours_remaining: int
    cancellation_fee: str
    refund_amount: str
    currency: str
    can_modify: bool


def to_policy_data(policy: CancellationPolicy, refund_amount: Money) -> PolicyData:
    return PolicyData(
        refund_percentage=policy.refund_percentage,
        hours_remaining=policy.hours_remaining,
        cancellation_fee=str(policy.flat_fee.amount),
        refund_amount=str(refund_amount.amount),
        currency=str(refund_amount.currency),
        can_modify=policy.allows_modification,
    )


def policy_body(evaluated: tuple[CancellationPolicy, Money]) -> dict:
    policy, refund_amount = evaluated
    return {
        "status": "success",
        "data": to_policy_data(policy, refund_amount).model_dump(),
    }
