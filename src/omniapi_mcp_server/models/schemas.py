"""Pydantic models for tool arguments.

Tool inputs arrive as loosely typed JSON; these models give the handlers
validated attributes and turn malformed input into a ``ValidationError``.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]


class AddApiRequest(BaseModel):
    """Arguments of ``add_api``."""

    name: str = Field(description="Name to identify this API")
    base_url: str = Field(
        alias="baseUrl", description="API base URL (e.g., https://api.example.com)"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Optional headers (e.g., Authorization)"
    )

    model_config = {"populate_by_name": True, "extra": "ignore"}


class CallApiRequest(BaseModel):
    """Arguments of ``call_api``."""

    api: str = Field(description="Name of the configured API")
    endpoint: str = Field(description="API endpoint (e.g., /users, /posts/1)")
    method: HttpMethod = Field(default="GET", description="HTTP method")
    body: Optional[Any] = Field(
        default=None, description="Data to send in the body (for POST/PUT/PATCH)"
    )
    params: Optional[Dict[str, str]] = Field(
        default=None, description="Query parameters"
    )

    model_config = {"extra": "ignore"}

    @field_validator("method", mode="before")
    @classmethod
    def upper_method(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("params", mode="before")
    @classmethod
    def stringify_params(cls, v):
        if not isinstance(v, dict):
            return v
        return {str(k): _query_value(val) for k, val in v.items()}


class DiscoverApiRequest(BaseModel):
    """Arguments of ``discover_api``."""

    api: str = Field(description="Name of the configured API")

    model_config = {"extra": "ignore"}


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value
