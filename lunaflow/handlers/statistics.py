"""
Lambda handler for the statistics view of the active profile.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from lunaflow.models.profile import UserProfile
from lunaflow.services.cycle import get_cycle_status, predict_next_period
from lunaflow.services.profiles import get_active_profile
from lunaflow.services.statistics import calculate_cycle_statistics, calculate_duration_history
from lunaflow.utils.api import api_response, error_response, get_param
from lunaflow.utils.clients import get_store
from lunaflow.utils.logging import logger

tracer = Tracer()


def build_statistics_view(profile: UserProfile, clock=None) -> Dict:
    """
    Compute every derived view for a profile.

    Args:
        profile: Profile whose entries are analyzed
        clock: Optional clock used for "today"

    Returns:
        Dictionary with stats, prediction, status and duration history;
        stats, prediction and status are None when data is insufficient
    """
    stats = calculate_cycle_statistics(profile.entries, clock=clock)
    prediction = predict_next_period(profile.entries, stats, clock=clock)
    status = get_cycle_status(profile.entries, clock=clock)
    history = calculate_duration_history(profile.entries, clock=clock)

    return {
        "profile": {"id": profile.id, "name": profile.name, "themeColor": profile.theme_color},
        "stats": stats.model_dump(by_alias=True) if stats else None,
        "prediction": prediction.model_dump(by_alias=True) if prediction else None,
        "status": status.model_dump(by_alias=True) if status else None,
        "durationHistory": [point.model_dump(by_alias=True) for point in history]
    }


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle statistics request.

    Args:
        event: API Gateway event with account_id query parameter
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        account_id = get_param(event, "account_id")
        if not account_id:
            return error_response(400, "account_id is required")

        data = get_store().load(account_id)
        profile = get_active_profile(data)
        if profile is None:
            return error_response(404, "No active profile")

        view = build_statistics_view(profile)
        logger.info("Statistics generated", extra={
            "account_id": account_id,
            "profile_id": profile.id,
            "entries": len(profile.entries)
        })
        return api_response(200, view)

    except Exception:
        logger.exception("Error generating statistics")
        return error_response(500, "Internal error")
