"""
Lambda handler for adding and switching profiles.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from lunaflow.services.exceptions import ProfileNotFoundError
from lunaflow.services.profiles import add_profile, switch_profile
from lunaflow.utils.api import api_response, error_response, get_param, parse_body
from lunaflow.utils.clients import get_store
from lunaflow.utils.logging import logger

tracer = Tracer()


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle profile requests.

    POST adds a profile and makes it active, PUT switches the active profile.

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        method = event.get("httpMethod", "POST")
        body = parse_body(event)
        account_id = get_param(event, "account_id", body)
        if not account_id:
            return error_response(400, "account_id is required")

        store = get_store()
        data = store.load(account_id)

        if method == "POST":
            profile = add_profile(data, body.get("name") or "")
            status_code = 201
        elif method == "PUT":
            try:
                profile = switch_profile(data, body.get("user_id"))
            except ProfileNotFoundError as e:
                return error_response(404, str(e))
            status_code = 200
        else:
            return error_response(405, f"Method {method} not allowed")

        store.save(account_id, data)
        return api_response(status_code, {
            "profile": profile.model_dump(by_alias=True, exclude={"entries"}),
            "activeUserId": data.active_user_id
        })

    except ValueError as e:
        return error_response(400, str(e))
    except Exception:
        logger.exception("Error processing profile request")
        return error_response(500, "Internal error")
