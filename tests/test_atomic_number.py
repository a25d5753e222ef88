import pytest

from showercalib.atomic_number import AtomicNumber
from showercalib.config import ConfigurationError


def test_default_configuration():
    assert AtomicNumber.from_parameters({}).z == 18


def test_empty_configuration_none():
    assert AtomicNumber.from_parameters(None).z == 18


def test_xenon_configuration():
    assert AtomicNumber.from_parameters({"AtomicNumber": 54}).z == 54


def test_service_type_is_ignored():
    params = {"service_type": "AtomicNumberService", "AtomicNumber": 54}
    assert AtomicNumber.from_parameters(params).z == 54


def test_expected_from_same_table_format():
    expected = {"AtomicNumber": 10}
    provider = AtomicNumber.from_parameters({"AtomicNumber": 10})
    assert provider.z == expected["AtomicNumber"]


def test_default_constructor():
    assert AtomicNumber().z == 18


def test_unknown_parameter_rejected():
    with pytest.raises(ConfigurationError):
        AtomicNumber.from_parameters({"AtomicNumbr": 54})


@pytest.mark.parametrize("value", [-1, 1.5, "54", True])
def test_invalid_values_rejected(value):
    with pytest.raises(ConfigurationError):
        AtomicNumber.from_parameters({"AtomicNumber": value})