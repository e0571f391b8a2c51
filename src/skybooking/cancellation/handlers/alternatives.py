from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.flight.handlers.response_models import flights_body
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """代替便一覧 Lambda Handler（同じ路線・同じ出発日）"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.modification.get_alternative_flights(reservation_id),
            OperationBudget.SEARCH,
            "get_alternative_flights",
        )
        return outcome_response(outcome, flights_body)
    except Exception:
        logger.exception("Failed to list alternative flights")
        return api_response(500, {"message": "Internal server error"})
