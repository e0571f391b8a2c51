from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.request_models import RefundRequest
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import (
    api_response,
    outcome_response,
    validation_error_response,
)

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """決済払い戻し Lambda Handler"""
    path_params = event.path_parameters or {}
    payment_id = path_params.get("payment_id")

    if not payment_id:
        return api_response(400, {"message": "payment_id is required"})

    try:
        request = RefundRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    logger.info("Received refund request", extra={"payment_id": payment_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.refund_payment.refund(payment_id, request.reason),
            OperationBudget.PAYMENT,
            "refund_payment",
        )
        return outcome_response(
            outcome,
            lambda refunded: {
                "status": "success",
                "payment_id": payment_id,
                "refunded": refunded,
            },
        )
    except Exception:
        logger.exception("Failed to refund payment")
        return api_response(500, {"message": "Internal server error"})
