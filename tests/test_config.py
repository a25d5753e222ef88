import pytest

from showercalib.config import ConfigurationError, check_parameters


def test_known_parameters_are_returned():
    result = check_parameters({"AtomicNumber": 54}, {"AtomicNumber"}, ())
    assert result == {"AtomicNumber": 54}


def test_ignored_parameters_are_dropped():
    result = check_parameters(
        {"AtomicNumber": 54, "service_type": "AtomicNumberService"},
        {"AtomicNumber"},
        {"service_type"},
    )
    assert result == {"AtomicNumber": 54}


def test_unknown_parameter_raises():
    with pytest.raises(ConfigurationError, match="Bogus"):
        check_parameters({"Bogus": 1}, {"AtomicNumber"}, {"service_type"})


def test_none_is_an_empty_table():
    assert check_parameters(None, {"AtomicNumber"}, ()) == {}


def test_non_mapping_raises():
    with pytest.raises(ConfigurationError):
        check_parameters([("AtomicNumber", 18)], {"AtomicNumber"}, ())


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        check_parameters({"x": 1}, (), ())