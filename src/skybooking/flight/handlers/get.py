from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.flight.domain.value_object import FlightId
from skybooking.flight.handlers.response_models import flight_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """フライト詳細 Lambda Handler"""
    path_params = event.path_parameters or {}
    flight_id = path_params.get("flight_id")

    if not flight_id:
        return api_response(400, {"message": "flight_id is required"})

    logger.info("Fetching flight", extra={"flight_id": flight_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.flight_query.get_flight(FlightId(value=flight_id)),
            OperationBudget.DEFAULT,
            "get_flight",
        )
        if outcome.ok and outcome.value is None:
            return api_response(404, {"message": f"Flight not found: {flight_id}"})
        return outcome_response(outcome, flight_body)
    except Exception:
        logger.exception("Failed to fetch flight")
        return api_response(500, {"message": "Internal server error"})
