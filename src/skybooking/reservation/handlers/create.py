from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.reservation.handlers.request_models import CreateReservationRequest
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
    """予約作成 Lambda Handler"""
    logger.info("Received create reservation request")

    try:
        request = CreateReservationRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.create_reservation.create(
                customer_id=request.customer_id,
                flight_id=request.flight_id,
                seat_numbers=request.seat_numbers,
                passengers=[p.model_dump() for p in request.passengers],
            ),
            OperationBudget.RESERVATION,
            "create_reservation",
        )
        if outcome.ok:
            logger.info(
                "Reservation created",
                extra={"reservation_id": str(outcome.value.id)},
            )
        return outcome_response(outcome, to_response, status_code=201)
    except Exception:
        logger.exception("Failed to create reservation")
        return api_response(500, {"message": "Internal server error"})
