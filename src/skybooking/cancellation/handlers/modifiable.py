from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from skybooking.bootstrap import get_container
from skybooking.shared.execution import OperationBudget
from skybooking.shared.utils import api_response, outcome_response

logger = Logger()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約が変更可能かを返す Lambda Handler"""
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.modification.can_modify_reservation(reservation_id),
            OperationBudget.DEFAULT,
            "can_modify_reservation",
        )
        return outcome_response(
            outcome,
            lambda allowed: {
                "status": "success",
                "reservation_id": reservation_id,
                "can_modify": allowed,
            },
        )
    except Exception:
        logger.exception("Failed to check modification window")
        return api_response(500, {"message": "Internal server error"})
