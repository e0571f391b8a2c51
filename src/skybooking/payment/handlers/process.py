from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.request_models import ProcessPaymentRequest
from skybooking.payment.handlers.response_models import payment_body
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
    """決済処理 Lambda Handler

    成功時は予約が CONFIRMED になり、航空券が発行される。
    """
    logger.info("Received payment request")

    try:
        request = ProcessPaymentRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.process_payment.process(
                reservation_id=request.reservation_id,
                customer_id=request.customer_id,
                amount=request.amount,
                method=request.payment_method,
                card_number=request.card_number,
                card_holder=request.card_holder,
                expiry_date=request.expiry_date,
                cvv=request.cvv,
            ),
            OperationBudget.PAYMENT,
            "process_payment",
        )
        if not outcome.ok:
            logger.warning(
                "Payment rejected",
                extra={
                    "reservation_id": request.reservation_id,
                    "kind": outcome.kind.value,
                },
            )
        return outcome_response(outcome, payment_body, status_code=201)
    except Exception:
        logger.exception("Failed to process payment")
        return api_response(500, {"message": "Internal server error"})
