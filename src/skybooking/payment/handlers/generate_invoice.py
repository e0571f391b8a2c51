from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.request_models import GenerateInvoiceRequest
from skybooking.payment.handlers.response_models import invoice_body
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
    """請求書発行 Lambda Handler（発行済みの場合は既存の請求書を返す）"""
    try:
        request = GenerateInvoiceRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    logger.info("Generating invoice", extra={"payment_id": request.payment_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.generate_invoice.generate(request.payment_id),
            OperationBudget.DEFAULT,
            "generate_invoice",
        )
        return outcome_response(outcome, invoice_body, status_code=201)
    except Exception:
        logger.exception("Failed to generate invoice")
        return api_response(500, {"message": "Internal server error"})
