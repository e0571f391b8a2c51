from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.payment.handlers.response_models import invoices_body, payments_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """顧客の決済履歴・請求書一覧 Lambda Handler

    クエリパラメータ type=invoices の場合は請求書を返す。
    """
    path_params = event.path_parameters or {}
    customer_id = path_params.get("customer_id")

    if not customer_id:
        return api_response(400, {"message": "customer_id is required"})

    query_params = event.query_string_parameters or {}
    listing = query_params.get("type", "payments")

    try:
        container = get_container()
        if listing == "invoices":
            outcome = container.executor.run(
                lambda: container.generate_invoice.get_customer_invoices(customer_id),
                OperationBudget.DEFAULT,
                "list_customer_invoices",
            )
            return outcome_response(outcome, invoices_body)
        if listing != "payments":
            return api_response(400, {"message": f"Unsupported type: {listing}"})

        outcome = container.executor.run(
            lambda: container.payment_query.get_customer_payments(customer_id),
            OperationBudget.DEFAULT,
            "list_customer_payments",
        )
        return outcome_response(outcome, payments_body)
    except Exception:
        logger.exception("Failed to list customer payments")
        return api_response(500, {"message": "Internal server error"})
