"""Pydantic schemas for persistence and invocation results."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PersistResult(BaseModel):
    """
    Outcome of one transactional insert.

    Attributes:
        status: "committed" or "rolled_back"
        rows_inserted: Number of rows written (0 or 1)
        error: Error description when rolled back
    """

    status: Literal["committed", "rolled_back"] = Field(
        ..., description="Transaction outcome"
    )
    rows_inserted: int = Field(default=0, ge=0, description="Rows written")
    error: Optional[str] = Field(None, description="Failure reason")

    @property
    def succeeded(self) -> bool:
        return self.status == "committed"


class IngestResult(BaseModel):
    """
    Outcome of one handler invocation.

    Attributes:
        status: "persisted", "persist_failed" or "skipped"
        correlation_id: Lambda request id
        postal_code: Postal code that was looked up
        persist: Persistence outcome, absent when skipped
        message: Human-readable summary
    """

    status: Literal["persisted", "persist_failed", "skipped"] = Field(
        ..., description="Invocation outcome"
    )
    correlation_id: str = Field(..., description="Request correlation id")
    postal_code: str = Field(..., description="Postal code looked up")
    persist: Optional[PersistResult] = Field(
        None, description="Persistence outcome"
    )
    message: str = Field(..., description="Summary message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "persisted",
                "correlation_id": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
                "postal_code": "08111430",
                "persist": {
                    "status": "committed",
                    "rows_inserted": 1,
                    "error": None,
                },
                "message": "Address persisted",
            }
        }
    )
