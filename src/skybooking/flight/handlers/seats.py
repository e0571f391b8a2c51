from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.flight.domain.value_object import FlightId
from skybooking.flight.handlers.response_models import seats_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """空席一覧 Lambda Handler"""
    path_params = event.path_parameters or {}
    flight_id = path_params.get("flight_id")

    if not flight_id:
        return api_response(400, {"message": "flight_id is required"})

    logger.info("Listing available seats", extra={"flight_id": flight_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.seat_inventory.list_available(FlightId(value=flight_id)),
            OperationBudget.SEARCH,
            "list_available_seats",
        )
        return outcome_response(outcome, seats_body)
    except Exception:
        logger.exception("Failed to list seats")
        return api_response(500, {"message": "Internal server error"})
