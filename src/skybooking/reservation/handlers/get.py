from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.reservation.handlers.response_models import to_response
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約詳細取得 Lambda Handler（航空券を含む）"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    logger.info("Fetching reservation", extra={"reservation_id": reservation_id})

    try:
        container = get_container()
        query = container.reservation_query

        def _load():
            reservation = query.get_reservation(reservation_id)
            if reservation is None:
                return None
            return reservation, query.get_tickets(reservation_id)

        outcome = container.executor.run(
            _load, OperationBudget.DEFAULT, "get_reservation"
        )
        if outcome.ok and outcome.value is None:
            return api_response(
                404, {"message": f"Reservation not found: {reservation_id}"}
            )
        return outcome_response(outcome, lambda found: to_response(*found))
    except Exception:
        logger.exception("Failed to fetch reservation")
        return api_response(500, {"message": "Internal server error"})
