"""
Lambda handler for exporting and importing the data document.
"""
from typing import Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from lunaflow.services.backup import backup_filename, export_data, import_data
from lunaflow.services.exceptions import ImportDataError
from lunaflow.utils.api import api_response, error_response, get_param
from lunaflow.utils.clients import get_store
from lunaflow.utils.logging import logger

tracer = Tracer()


@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict, context: LambdaContext) -> Dict:
    """
    Handle backup requests.

    GET returns the stored document as a JSON file. POST replaces the stored
    document with the file sent as the request body; a rejected file leaves
    the stored document untouched.

    Args:
        event: API Gateway event with account_id query parameter
        context: Lambda context

    Returns:
        API Gateway response
    """
    try:
        method = event.get("httpMethod", "GET")
        account_id = get_param(event, "account_id")
        if not account_id:
            return error_response(400, "account_id is required")

        store = get_store()

        if method == "GET":
            data = store.load(account_id)
            return api_response(200, export_data(data), headers={
                "Content-Disposition": f'attachment; filename="{backup_filename()}"'
            })

        if method == "POST":
            try:
                data = import_data(event.get("body") or "")
            except ImportDataError as e:
                logger.warning("Import rejected", extra={"account_id": account_id, "error": str(e)})
                return error_response(400, str(e))

            store.save(account_id, data)
            return api_response(200, {
                "message": "Data imported successfully!",
                "profiles": len(data.users)
            })

        return error_response(405, f"Method {method} not allowed")

    except Exception:
        logger.exception("Error processing backup request")
        return error_response(500, "Internal error")
