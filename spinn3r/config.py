from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_API_URL = "http://api.spinn3r.com/rss"
DEFAULT_VERSION = "2.1.3"
USER_AGENT = "spinn3r-python/2.1.3"


class FetchPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    retries: int = Field(
        default=5, ge=1, description="Number of HTTP attempts per page"
    )
    retry_sleep: float = Field(
        default=30, ge=0, description="Delay between retries in seconds"
    )
    timeout: float = Field(
        default=30, gt=0, description="Connect/read timeout in seconds"
    )
    page_delay: float = Field(
        default=0, ge=0, description="Delay between pagination requests in seconds"
    )


class RequestConfig(BaseModel):
    """
    Describes the first request of a Spinn3r stream.

    A ``version`` entry in ``params`` overrides the default API version and
    is removed from the extra query parameters.
    """

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(default=DEFAULT_API_URL, description="Base API URL")
    api: str = Field(description="API method, e.g. permalink.getDelta")
    version: str = Field(default=DEFAULT_VERSION, description="API version")
    params: dict[str, Any] = Field(
        default_factory=dict, description="Query parameters, vendor included"
    )
    encode_params: bool = Field(
        default=True, description="Percent-encode query parameter values"
    )

    @model_validator(mode="before")
    @classmethod
    def promote_version(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        params = dict(data.get("params") or {})
        if params.get("version") is not None:
            data["version"] = str(params.pop("version"))
        data["params"] = params
        return data

    @field_validator("api")
    @classmethod
    def require_api(cls, value: str) -> str:
        if not value:
            raise ValueError("Need api name")
        return value

    @field_validator("params")
    @classmethod
    def require_vendor(cls, value: dict[str, Any]) -> dict[str, Any]:
        if not value.get("vendor"):
            raise ValueError("Need vendor key")
        return value

    @property
    def vendor(self) -> str:
        return str(self.params["vendor"])
