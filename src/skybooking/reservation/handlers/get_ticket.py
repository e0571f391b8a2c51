from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.reservation.handlers.response_models import (
    to_reservation_data,
    to_ticket_data,
)
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """航空券取得 Lambda Handler（予約情報を含む）"""
    path_params = event.path_parameters or {}
    ticket_id = path_params.get("ticket_id")

    if not ticket_id:
        return api_response(400, {"message": "ticket_id is required"})

    logger.info("Fetching ticket", extra={"ticket_id": ticket_id})

    try:
        container = get_container()
        query = container.reservation_query

        def _load():
            ticket = query.get_ticket_by_id(ticket_id)
            if ticket is None:
                return None
            return ticket, query.get_reservation_by_ticket_id(ticket_id)

        outcome = container.executor.run(_load, OperationBudget.DEFAULT, "get_ticket")
        if outcome.ok and outcome.value is None:
            return api_response(404, {"message": f"Ticket not found: {ticket_id}"})

        def _body(found) -> dict:
            ticket, reservation = found
            body: dict = {
                "status": "success",
                "data": to_ticket_data(ticket).model_dump(),
            }
            if reservation is not None:
                body["reservation"] = to_reservation_data(reservation).model_dump()
            return body

        return outcome_response(outcome, _body)
    except Exception:
        logger.exception("Failed to fetch ticket")
        return api_response(500, {"message": "Internal server error"})
