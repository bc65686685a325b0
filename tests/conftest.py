"""Pytest configuration and shared fixtures for cpsclient tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest
import requests
import yaml
from requests import Response

from cpsclient.models import AuthCredential, TransactionDescriptor
from cpsclient.utils import CpsConfig


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    return {
        'api': {
            'endpoint_url': 'https://test.example.com/api',
            'customer_id': 'test_cid',
            'user': 'test_user',
            'password': 'test_password',
        },
        'client': {
            'request_timeout': 15.0,
            'verify_ssl': True,
            'default_lang': 'en',
            'api_version': '1.8.12',
        },
        'logging': {
            'console_level': 'INFO',
        },
    }


@pytest.fixture
def sample_config(sample_config_dict: dict[str, Any]) -> CpsConfig:
    """Create a sample CpsConfig for testing."""
    return CpsConfig.model_validate(sample_config_dict)


@pytest.fixture
def temp_config_file(tmp_path: Path, sample_config: CpsConfig) -> Path:
    """Create a temporary config file for testing."""
    config_path: Path = tmp_path / 'config.yaml'

    config_dict: dict[str, Any] = sample_config.model_dump(mode='json')
    # SecretStr dumps masked; write the real value back
    config_dict['api']['password'] = 'test_password'

    config_path.write_text(yaml.safe_dump(config_dict, sort_keys=False))
    return config_path


@pytest.fixture
def auth() -> AuthCredential:
    return AuthCredential(customer_id='test_cid', user='test_user', password='test_password')


@pytest.fixture
def contact_transaction() -> TransactionDescriptor:
    return TransactionDescriptor(
        group='contact',
        action='create',
        attribute='contact',
        object='%%AUTO%%',
        values={'firstname': 'Jane', 'lastname': 'Doe'},
    )


@pytest.fixture
def success_xml() -> str:
    """A plain successful response without auto values."""
    return """<?xml version="1.0" encoding="utf-8"?>
<response>
    <result>
        <code>1000</code>
        <message>Command completed successfully</message>
        <detail>Contact deleted</detail>
    </result>
    <transaction>
        <active_transactions_id>TX-1</active_transactions_id>
        <created>2024-11-14 15:30:45</created>
    </transaction>
</response>"""


@pytest.fixture
def auto_values_xml() -> str:
    """A successful create response carrying a server-allocated contact id."""
    return """<?xml version="1.0" encoding="utf-8"?>
<response>
    <result>
        <code>1000</code>
        <message>Command completed successfully</message>
        <detail>Contact created</detail>
        <note>Allocated automatically</note>
        <auto_values>
            <contact_id>ABC123</contact_id>
        </auto_values>
    </result>
    <transaction>
        <active_transactions_id>TX-2</active_transactions_id>
        <created>2024-11-14 15:31:00</created>
        <customer_ref>REF-9</customer_ref>
    </transaction>
</response>"""


@pytest.fixture
def error_xml() -> str:
    """A rejected transaction (object exists)."""
    return """<?xml version="1.0" encoding="utf-8"?>
<response>
    <result>
        <code>2303</code>
        <message>Object does not exist</message>
        <detail>contact JD1234 not found</detail>
    </result>
    <transaction>
        <active_transactions_id>TX-3</active_transactions_id>
        <created>2024-11-14 15:32:00</created>
    </transaction>
</response>"""


def _wrap_detail(values_blocks: str, code: str = '1000') -> str:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<response>
    <result>
        <code>{code}</code>
        <message>Command completed successfully</message>
        <detail>{values_blocks}</detail>
    </result>
    <transaction>
        <active_transactions_id>TX-9</active_transactions_id>
        <created>2024-11-14 16:00:00</created>
    </transaction>
</response>"""


@pytest.fixture
def mock_requests_response(success_xml: str) -> Mock:
    """Create a mock requests.Response object."""
    response = Mock(spec=Response)
    response.status_code = 200
    response.text = success_xml
    response.reason = 'OK'
    response.headers = {'Content-Type': 'text/xml'}
    response.raise_for_status = Mock(return_value=None)
    return response


@pytest.fixture
def make_response_xml() -> Callable[..., str]:
    """Return a factory wrapping <values> blocks in a full response document."""
    return _wrap_detail


def _http_response(
    body: bytes, content_type: str = 'text/xml', status_code: int = 200
) -> Response:
    response = Response()
    response.status_code = status_code
    response._content = body
    response.headers['Content-Type'] = content_type
    # What the requests adapter derives from the headers
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    return response


@pytest.fixture
def make_http_response() -> Callable[..., Response]:
    """Return a factory for real requests.Response objects carrying raw bytes."""
    return _http_response
