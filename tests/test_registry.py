from __future__ import annotations

import pytest

from jwt_cli.errors import UnsupportedAlgorithmError
from jwt_cli.registry import Algorithm, create, normalize, supported_algorithms


@pytest.mark.parametrize("name", ["HS256", "HS384", "HS512", "RS256"])
def test_create_returns_signer_named_after_algorithm(name):
    assert create(name).name == name


def test_create_accepts_enum_members():
    assert create(Algorithm.HS384).name == "HS384"


def test_create_returns_shared_instances():
    assert create("HS256") is create(Algorithm.HS256)


@pytest.mark.parametrize("name", ["hs256", "Rs256", "HS1024", "none", "", "INVALID"])
def test_create_is_exact_and_case_sensitive(name):
    with pytest.raises(UnsupportedAlgorithmError, match="unsupported algorithm"):
        create(name)


def test_unknown_algorithm_is_named_in_message():
    with pytest.raises(UnsupportedAlgorithmError) as excinfo:
        create("ES256")
    assert str(excinfo.value) == "unsupported algorithm: ES256"


def test_normalize_then_create():
    assert normalize(" hs512 ") == "HS512"
    assert create(normalize("rs256")).name == "RS256"


def test_supported_algorithms():
    assert supported_algorithms() == ["HS256", "HS384", "HS512", "RS256"]


def test_algorithm_str_is_its_value():
    assert str(Algorithm.RS256) == "RS256"
    assert f"{Algorithm.HS256}" == "HS256"
