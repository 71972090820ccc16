# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

from unittest.mock import MagicMock, patch

import pytest

from saferm_lib.core.config import CFG
from saferm_lib.core.error import InvalidRequestError
from saferm_lib.core.error_handlers import handle_invalid_request, handle_removal_error


@patch("saferm_lib.core.error_handlers.logger")
def test_handle_removal_error_logs_and_continues(mock_logger):
    metadata = MagicMock()
    metadata.items = ["a", "b"]
    metadata.encountered_errors = {0: OSError("x")}

    error = OSError("could not remove")
    handle_removal_error(error, metadata)

    mock_logger.error.assert_called_once_with(error)


@patch("saferm_lib.core.error_handlers.logger")
def test_handle_removal_error_reports_when_everything_failed(mock_logger):
    metadata = MagicMock()
    metadata.items = ["a", "b"]
    metadata.encountered_errors = {0: OSError("x"), 1: OSError("y")}

    handle_removal_error(OSError("y"), metadata)

    assert mock_logger.error.call_count == 2
    mock_logger.error.assert_called_with("No path could be removed.")


@patch("saferm_lib.core.error_handlers.logger")
def test_handle_removal_error_single_path(mock_logger):
    metadata = MagicMock()
    metadata.items = ["a"]
    metadata.encountered_errors = {0: OSError("x")}

    handle_removal_error(OSError("x"), metadata)

    mock_logger.error.assert_called_once()


@patch("saferm_lib.core.error_handlers.logger")
def test_handle_invalid_request_exits(mock_logger):
    error = InvalidRequestError("bad option")

    with pytest.raises(SystemExit) as e:
        handle_invalid_request(error, MagicMock())

    assert e.value.code == CFG.exit_codes.default
    mock_logger.error.assert_called_once_with(error)


@patch("saferm_lib.core.error_handlers.logger")
def test_handle_invalid_request_uses_exit_code_of_error(_mock_logger):
    error = InvalidRequestError("bad option")
    error.exit_code = 42

    with pytest.raises(SystemExit) as e:
        handle_invalid_request(error, MagicMock())

    assert e.value.code == 42
