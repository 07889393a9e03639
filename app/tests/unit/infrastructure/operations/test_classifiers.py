"""Unit tests for gateway response and transport error classifiers."""

import pytest
import requests

from infrastructure.operations import (
    GATEWAY_UNREACHABLE,
    OperationResult,
    OperationStatus,
    classify_gateway_response,
    classify_transport_error,
)


@pytest.mark.parametrize("status_code", [200, 202])
def test_accepted_statuses_are_success(status_code):
    result = classify_gateway_response(status_code)

    assert result.is_success
    assert result.data == status_code
    assert result.error_code is None


@pytest.mark.parametrize("status_code", [201, 400, 404, 500, 502])
def test_other_statuses_are_transient(status_code):
    result = classify_gateway_response(status_code)

    assert result.status == OperationStatus.TRANSIENT_ERROR
    assert result.error_code == f"HTTP_{status_code}"
    assert result.data == status_code
    assert str(status_code) in result.message


def test_connection_error_is_unreachable():
    result = classify_transport_error(requests.ConnectionError("refused"))

    assert result.status == OperationStatus.TRANSIENT_ERROR
    assert result.error_code == "GATEWAY_UNREACHABLE"
    assert result.data == GATEWAY_UNREACHABLE == 502


def test_timeout_is_unreachable():
    result = classify_transport_error(requests.Timeout("read timed out"))

    assert result.error_code == "TIMEOUT"
    assert result.data == GATEWAY_UNREACHABLE


def test_other_request_exception_is_unexpected():
    result = classify_transport_error(requests.RequestException("bad url"))

    assert result.error_code == "UNEXPECTED_ERROR"
    assert result.data == GATEWAY_UNREACHABLE


def test_operation_result_success_helpers():
    ok = OperationResult.success(data=202)
    failed = OperationResult.transient_error("nope", error_code="X", data=500)

    assert ok.is_success is True
    assert ok.message == "ok"
    assert failed.is_success is False
    assert failed.data == 500
