from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.response_models import refunds_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約の払い戻し履歴 Lambda Handler"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.payment_query.get_refunds(reservation_id),
            OperationBudget.DEFAULT,
            "list_refunds",
        )
        return outcome_response(outcome, refunds_body)
    except Exception:
        logger.exception("Failed to list refunds")
        return api_response(500, {"message": "Internal server error"})
