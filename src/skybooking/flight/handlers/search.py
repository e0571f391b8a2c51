from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.flight.handlers.request_models import SearchFlightsRequest
from skybooking.flight.handlers.response_models import flights_body
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
    """フライト検索 Lambda Handler"""
    try:
        request = SearchFlightsRequest.model_validate(
            event.query_string_parameters or {}
        )
    except ValidationError as e:
        return validation_error_response(e)

    logger.info(
        "Searching flights",
        extra={
            "departure_city": request.departure_city,
            "arrival_city": request.arrival_city,
            "date": request.date,
        },
    )

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.flight_query.search_flights(
                departure_city=request.departure_city,
                arrival_city=request.arrival_city,
                departure_date=request.date,
                passengers=request.passengers,
            ),
            OperationBudget.SEARCH,
            "search_flights",
        )
        return outcome_response(outcome, flights_body)
    except Exception:
        logger.exception("Failed to search flights")
        return api_response(500, {"message": "Internal server error"})
