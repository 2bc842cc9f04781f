import pytest
from pydantic import ValidationError

from spinn3r.config import DEFAULT_API_URL, DEFAULT_VERSION, FetchPolicy, RequestConfig


def test_request_config_defaults():
    """Test defaults for api_url and version."""
    config = RequestConfig(api="feed.getDelta", params={"vendor": "acme"})
    assert config.api_url == DEFAULT_API_URL
    assert config.version == DEFAULT_VERSION
    assert config.encode_params is True
    assert config.vendor == "acme"


def test_request_config_requires_vendor():
    """Test that a missing or empty vendor key is rejected."""
    with pytest.raises(ValidationError, match="Need vendor key"):
        RequestConfig(api="feed.getDelta", params={"limit": 5})

    with pytest.raises(ValidationError, match="Need vendor key"):
        RequestConfig(api="feed.getDelta", params={"vendor": ""})


def test_request_config_requires_api():
    """Test that a missing or empty api name is rejected."""
    with pytest.raises(ValidationError, match="Need api name"):
        RequestConfig(api="", params={"vendor": "acme"})

    with pytest.raises(ValidationError):
        RequestConfig(params={"vendor": "acme"})


def test_version_param_is_promoted():
    """Test that a version parameter overrides the API version."""
    params = {"vendor": "acme", "version": "3.0.0", "limit": 5}
    config = RequestConfig(api="feed.getDelta", params=params)

    assert config.version == "3.0.0"
    assert "version" not in config.params
    assert config.params == {"vendor": "acme", "limit": 5}
    # Caller's mapping is left alone
    assert params["version"] == "3.0.0"


def test_request_config_is_frozen():
    config = RequestConfig(api="feed.getDelta", params={"vendor": "acme"})
    with pytest.raises(ValidationError):
        config.api = "permalink.getDelta"


def test_fetch_policy_defaults():
    policy = FetchPolicy()
    assert policy.retries == 5
    assert policy.retry_sleep == 30
    assert policy.timeout == 30
    assert policy.page_delay == 0


def test_fetch_policy_requires_one_attempt():
    with pytest.raises(ValidationError):
        FetchPolicy(retries=0)


def test_fetch_policy_from_dict():
    policy = FetchPolicy.model_validate({"retries": 3, "retry_sleep": 0.5})
    assert policy.retries == 3
    assert policy.retry_sleep == 0.5
