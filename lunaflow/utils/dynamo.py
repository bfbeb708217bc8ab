"""
DynamoDB access for the per-account data document.

Each account owns one item:

    PK = "ACCOUNT#<account_id>", SK = "APPDATA", data = <JSON document>
"""
import os
from typing import Any, Dict, Optional

import boto3

TABLE_NAME_ENV = "TRACKER_TABLE_NAME"

_dynamo_instance = None


def get_dynamo() -> 'DynamoDBClient':
    """
    Return the shared table client, creating it on first use.

    Raises:
        EnvironmentError: If the table name is not configured
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        table_name = os.environ.get(TABLE_NAME_ENV)
        if not table_name:
            raise EnvironmentError(
                f"{TABLE_NAME_ENV} is not set; it must name the table holding account documents."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance


class DynamoDBClient:
    """Thin wrapper over the boto3 table resource for document items."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.table = boto3.resource('dynamodb').Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """Write a document item, replacing any previous version."""
        return self.table.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Read a document item.

        Args:
            key: PK and SK of the item

        Returns:
            The stored item, or None when the account has none yet
        """
        return self.table.get_item(Key=key).get('Item')


def create_pk(account_id: str) -> str:
    """Partition key of an account."""
    return f"ACCOUNT#{account_id}"


def create_data_sk() -> str:
    """Sort key of the item holding the whole data document."""
    return "APPDATA"
