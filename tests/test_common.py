import pytest

from idcrunch import common
from idcrunch.common import bit_length, byte_length, log, log_deep, \
    log_error, set_log_info


@pytest.fixture(autouse=True)
def reset_log_info():
    yield
    set_log_info(0, False)


def test_byte_length():
    set_log_info(0, False)
    assert byte_length(12) == '12b'

    set_log_info(0, True)
    assert byte_length(1) == '1 byte'
    assert byte_length(12) == '12 bytes'


def test_bit_length():
    set_log_info(0, False)
    assert bit_length(2) == '2.0bit'

    set_log_info(0, True)
    assert bit_length(2) == '2.00 bits'


def test_log_levels(capsys):
    set_log_info(1, False)
    log("shown")
    log_deep("hidden")
    assert capsys.readouterr().out == "shown\n"

    set_log_info(2, False)
    log_deep("deep")
    log("with extra", extra=" (more)")
    assert capsys.readouterr().out == "deep\nwith extra (more)\n"
    assert common.log_level == 2


def test_log_error_always_shown(capsys):
    set_log_info(0, False)
    log_error("broken")
    assert capsys.readouterr().err == "Error: broken\n"
