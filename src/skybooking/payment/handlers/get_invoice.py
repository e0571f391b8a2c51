from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.response_models import invoice_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """請求書取得 Lambda Handler"""
    path_params = event.path_parameters or {}
    invoice_id = path_params.get("invoice_id")

    if not invoice_id:
        return api_response(400, {"message": "invoice_id is required"})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.generate_invoice.get_invoice(invoice_id),
            OperationBudget.DEFAULT,
            "get_invoice",
        )
        if outcome.ok and outcome.value is None:
            return api_response(404, {"message": f"Invoice not found: {invoice_id}"})
        return outcome_response(outcome, invoice_body)
    except Exception:
        logger.exception("Failed to fetch invoice")
        return api_response(500, {"message": "Internal server error"})
