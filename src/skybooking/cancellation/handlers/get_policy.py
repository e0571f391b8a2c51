from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.cancellation.handlers.response_models import policy_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """キャンセルポリシー取得 Lambda Handler（払い戻し見込み額を含む）"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        container = get_container()
        service = container.cancellation
        outcome = container.executor.run(
            lambda: (
                service.get_cancellation_policy(reservation_id),
                service.calculate_refund_amount(reservation_id),
            ),
            OperationBudget.DEFAULT,
            "get_cancellation_policy",
        )
        return outcome_response(outcome, policy_body)
    except Exception:
        logger.exception("Failed to evaluate cancellation policy")
        return api_response(500, {"message": "Internal server error"})
