from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from skybooking.bootstrap import get_container
from skybooking.cancellation.handlers.request_models import CancelReservationRequest
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
    """予約キャンセル Lambda Handler

    タイムアウト（504）の場合、キャンセルが完了したかどうかは
    予約を再取得して確認すること。
    """
    path_params = event.path_parameters or {}
    reservation_id = path_params.get("reservation_id")

    if not reservation_id:
        return api_response(400, {"message": "reservation_id is required"})

    try:
        request = CancelReservationRequest.model_validate(event.json_body or {})
    except ValidationError as e:
        return validation_error_response(e)

    logger.info("Received cancellation", extra={"reservation_id": reservation_id})

    try:
        container = get_container()
        outcome = container.executor.run(
            lambda: container.cancellation.cancel_reservation(
                reservation_id, request.reason
            ),
            OperationBudget.CANCELLATION,
            "cancel_reservation",
        )
        if not outcome.ok:
            return outcome_response(outcome, dict)

        body: dict = {
            "status": "success",
            "reservation_id": reservation_id,
            "cancelled": outcome.value,
        }
        # 払い戻し記録の取得に失敗してもキャンセル自体は完了している
        refunds = container.executor.run(
            lambda: container.payment_query.get_refunds(reservation_id),
            OperationBudget.DEFAULT,
            "list_refunds",
        )
        if refunds.ok and refunds.value:
            latest = refunds.value[-1]
            body["refund_amount"] = str(latest.amount.amount)
            body["refund_status"] = latest.status.value
        return api_response(200, body)
    except Exception:
        logger.exception("Failed to cancel reservation")
        return api_response(500, {"message": "Internal server error"})
