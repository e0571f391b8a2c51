from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.response_models import payment_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """決済取得 Lambda Handler"""
    path_params = event.path_parameters or {}
    payment_id = path_params.get("payment_id")

    if not payment_id:
        return api_response(400, {"message": "payment_id is required"})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.payment_query.get_payment(payment_id),
            OperationBudget.DEFAULT,
            "get_payment",
        )
        if outcome.ok and outcome.value is None:
            return api_response(404, {"message": f"Payment not found: {payment_id}"})
        return outcome_response(outcome, payment_body)
    except Exception:
        logger.exception("Failed to fetch payment")
        return api_response(500, {"message": "Internal server error"})
