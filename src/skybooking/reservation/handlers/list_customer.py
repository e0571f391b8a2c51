from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.reservation.handlers.response_models import reservations_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """顧客の予約一覧 Lambda Handler"""
    path_params = event.path_parameters or {}
    customer_id = path_params.get("customer_id")

    if not customer_id:
        return api_response(400, {"message": "customer_id is required"})

    logger.info("Listing customer reservations", extra={"customer_id": customer_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.reservation_query.get_customer_reservations(customer_id),
            OperationBudget.DEFAULT,
            "list_customer_reservations",
        )
        return outcome_response(outcome, reservations_body)
    except Exception:
        logger.exception("Failed to list reservations")
        return api_response(500, {"message": "Internal server error"})
