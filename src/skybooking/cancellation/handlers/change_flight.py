from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.cancellation.handlers.request_models import ChangeFlightRequest
from skybooking.reservation.handlers.response_models import to_response
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
    """便の振替 Lambda Handler"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        request = ChangeFlightRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    logger.info(
        "Received flight change",
        extra={"reservation_id": reservation_id, "flight_id": request.flight_id},
    )

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.modification.change_flight(
                reservation_id, request.flight_id
            ),
            OperationBudget.MODIFICATION,
            "change_flight",
        )
        return outcome_response(outcome, to_response)
    except Exception:
        logger.exception("Failed to change flight")
        return api_response(500, {"message": "Internal server error"})
