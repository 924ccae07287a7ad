"""Request schemas for Billing API

Pydantic models for validating incoming HTTP requests. Dates stay strings
here; the use cases parse DD/MM/YYYY and ISO forms.
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


class ManualPayRequestSchema(BaseModel):
    """
    Request schema for marking a month as paid

    Used for POST /admin/clients/{user_id}/payments/manual-pay endpoint.
    """

    reference_date: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("reference_date", "referenceDate"),
        description="Any date inside the month being settled (DD/MM/YYYY or ISO)"
    )

    paid_at: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("paid_at", "paidAt"),
        description="Settlement date (defaults to now)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "reference_date": "05/03/2026",
                "paid_at": "2026-03-07"
            }
        }


class DueDateRequestSchema(BaseModel):
    """
    Request schema for changing the anchor due date

    Used for PATCH /admin/clients/{user_id}/due-date endpoint.
    """

    due_date: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("due_date", "dueDate"),
        description="New anchor date (DD/MM/YYYY or ISO)"
    )

    class Config:
        json_schema_extra = {
            "example": {"due_date": "10/01/2026"}
        }


class InitialSubscriptionRequestSchema(BaseModel):
    """
    Request schema for opening the first subscription of a new client

    Used for POST /admin/clients/{user_id}/initial-subscription endpoint.
    """

    first_due_date: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("first_due_date", "firstDueDate"),
        description="First due date (DD/MM/YYYY or ISO); nothing is opened when absent"
    )
