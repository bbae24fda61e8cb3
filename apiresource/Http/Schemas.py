from __future__ import annotations

from typing import Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from apiresource.config import settings

JSON_HEADERS: Dict[str, str] = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}


class ClientOptions(BaseModel):
    """Validated options of the shared HTTP client."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str = Field(default_factory=lambda: settings.BASE_URL)
    headers: Dict[str, str] = Field(default_factory=dict, validate_default=True)
    timeout: float = Field(default_factory=lambda: settings.TIMEOUT, gt=0)
    token: Optional[str] = Field(default_factory=lambda: settings.TOKEN)
    transport: Optional[httpx.BaseTransport] = None

    @field_validator('headers')
    @classmethod
    def add_json_headers(cls, v: Dict[str, str]) -> Dict[str, str]:
        if 'Accept' in v:
            return v
        return {**JSON_HEADERS, **v}

    def client_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        headers = dict(self.headers)
        if self.token and 'Authorization' not in headers:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers
