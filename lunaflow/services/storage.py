"""
Persistence of the data document.

The whole document for an account lives in a single DynamoDB item as a
JSON string. Loading replaces the in-memory document wholesale and saving
writes it back wholesale; there are no partial updates.

Typical usage:
    store = DataStore()
    data = store.load(account_id)
    save_entry(get_active_profile(data), "2024-01-29")
    store.save(account_id, data)
"""
import json
from datetime import datetime
from typing import Optional

from aws_lambda_powertools import Logger

from lunaflow.models.profile import AppData
from lunaflow.services.exceptions import ImportDataError, StorageError
from lunaflow.services.migration import migrate_data
from lunaflow.utils.dynamo import create_data_sk, create_pk, get_dynamo

logger = Logger()


class DataStore:
    """Service for loading and saving data documents."""

    def __init__(self, clock=None):
        """Initialize data store service."""
        self.dynamo = get_dynamo()
        self.clock = clock

    def _key(self, account_id: str) -> dict:
        return {
            "PK": create_pk(account_id),
            "SK": create_data_sk()
        }

    def load(self, account_id: str) -> AppData:
        """
        Load the data document of an account.

        A missing or unreadable document yields an empty one.

        Args:
            account_id: Account owning the document

        Returns:
            AppData with every entry migrated to the current shape

        Raises:
            StorageError: If DynamoDB cannot be read
        """
        try:
            item = self.dynamo.get_item(self._key(account_id))
        except Exception as e:
            logger.error("Error loading data", extra={
                "account_id": account_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise StorageError(f"Failed to load data: {str(e)}")

        if not item or not item.get("data"):
            logger.info("No stored data found", extra={"account_id": account_id})
            return AppData()

        try:
            data = migrate_data(json.loads(item["data"]), clock=self.clock)
        except (ValueError, ImportDataError) as e:
            logger.error("Stored data is unreadable, starting fresh", extra={
                "account_id": account_id,
                "error": str(e)
            })
            return AppData()

        logger.info("Loaded data", extra={"account_id": account_id, "profiles": len(data.users)})
        return data

    def save(self, account_id: str, data: AppData) -> Optional[str]:
        """
        Save the whole data document of an account.

        Documents without any profile are not written.

        Args:
            account_id: Account owning the document
            data: Document to store

        Returns:
            Timestamp of the write, None if nothing was written

        Raises:
            StorageError: If DynamoDB cannot be written
        """
        if not data.users:
            logger.info("Skipping save of empty document", extra={"account_id": account_id})
            return None

        updated_at = datetime.now().isoformat()
        try:
            self.dynamo.put_item({
                **self._key(account_id),
                "data": json.dumps(data.to_document()),
                "version": data.version,
                "updated_at": updated_at
            })
        except Exception as e:
            logger.error("Error saving data", extra={
                "account_id": account_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise StorageError(f"Failed to save data: {str(e)}")

        logger.info("Saved data", extra={"account_id": account_id, "profiles": len(data.users)})
        return updated_at
