"""
Lambda handler for logging, editing and deleting periods.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from lunaflow.services.entries import delete_entry, list_entries, save_entry
from lunaflow.services.exceptions import EntryNotFoundError
from lunaflow.services.profiles import get_active_profile
from lunaflow.utils.api import api_response, error_response, get_param, parse_body
from lunaflow.utils.clients import get_store
from lunaflow.utils.logging import logger

tracer = Tracer()


def handle_list(event: Dict) -> Dict:
    """List every entry of the active profile, newest first."""
    account_id = get_param(event, "account_id")
    if not account_id:
        return error_response(400, "account_id is required")

    profile = get_active_profile(get_store().load(account_id))
    if profile is None:
        return error_response(404, "No active profile")

    items = list_entries(profile)
    return api_response(200, {
        "profileId": profile.id,
        "entries": [item.model_dump(by_alias=True, exclude_none=True) for item in items]
    })


def handle_save(event: Dict) -> Dict:
    """Save a new or edited entry for the active profile."""
    body = parse_body(event)
    account_id = get_param(event, "account_id", body)
    if not account_id:
        return error_response(400, "account_id is required")

    store = get_store()
    data = store.load(account_id)
    profile = get_active_profile(data)
    if profile is None:
        return error_response(404, "No active profile")

    try:
        entry, error = save_entry(
            profile,
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            intensities=body.get("intensities"),
            entry_id=body.get("entry_id")
        )
    except EntryNotFoundError as e:
        return error_response(404, str(e))
    except ValidationError:
        return error_response(400, "Invalid entry data")

    if error:
        return error_response(400, error)

    store.save(account_id, data)
    return api_response(200, {"entry": entry.model_dump(by_alias=True, exclude_none=True)})


def handle_delete(event: Dict) -> Dict:
    """Delete an entry of the active profile."""
    body = parse_body(event)
    account_id = get_param(event, "account_id", body)
    entry_id = get_param(event, "entry_id", body)
    if not account_id or not entry_id:
        return error_response(400, "account_id and entry_id are required")

    store = get_store()
    data = store.load(account_id)
    profile = get_active_profile(data)
    if profile is None:
        return error_response(404, "No active profile")

    if not delete_entry(profile, entry_id):
        return error_response(404, f"Entry {entry_id} not found")

    store.save(account_id, data)
    return api_response(200, {"message": "Entry deleted", "entry_id": entry_id})


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle entry requests.

    GET lists the entries, POST saves one, DELETE removes one.

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        method = event.get("httpMethod", "POST")
        if method == "GET":
            return handle_list(event)
        if method == "POST":
            return handle_save(event)
        if method == "DELETE":
            return handle_delete(event)
        return error_response(405, f"Method {method} not allowed")

    except ValueError as e:
        return error_response(400, str(e))
    except Exception:
        logger.exception("Error processing entry request")
        return error_response(500, "Internal error")
