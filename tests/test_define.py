import pytest

from ringkit.define import (
    HttpCode,
    HttpMethod,
    code_message_pair,
    from_code,
    parse_method,
)


@pytest.mark.parametrize("name", ["GET", "get", "Post", "delete", "PUT", "head", "options", "trace", "patch"])
def test_parse_method_round_trip(name):
    method = parse_method(name)
    assert method is not None
    assert method.value == name.upper()
    assert str(method) == name.upper()


@pytest.mark.parametrize("name", ["", "CONNECT", "fetch", "GETX"])
def test_parse_method_unknown(name):
    assert parse_method(name) is None


def test_method_matches_ignores_case():
    assert HttpMethod.POST.matches("post")
    assert HttpMethod.POST.matches("PoSt")
    assert not HttpMethod.POST.matches("PUT")
    assert not HttpMethod.PATCH.matches("")


def test_every_method_matches_itself():
    for method in HttpMethod:
        assert method.matches(method.value.lower())
        assert parse_method(method.value) is method


@pytest.mark.parametrize(
    "code,message",
    [
        (200, "OK"),
        (404, "Not Found"),
        (418, "I'm a teapot"),
        (500, "Internal Server Error"),
        (226, "IM Used"),
        (0, "Undefined HttpCode"),
    ],
)
def test_known_messages(code, message):
    assert from_code(code).message() == message


@pytest.mark.parametrize("code", [1, 99, 306, 420, 509, 600, -5])
def test_unknown_code_is_undefined(code):
    assert from_code(code) is HttpCode.UNDEFINED


def test_from_code_round_trip():
    for member in HttpCode:
        assert from_code(int(member)) is member


@pytest.mark.parametrize(
    "code,member",
    [(404, HttpCode.NOT_FOUND), (401, HttpCode.UNAUTHORIZED), (0, HttpCode.UNDEFINED)],
)
def test_code_values(code, member):
    found = from_code(code)
    assert found is member
    assert int(found) == code


def test_code_message_pair_covers_all_codes():
    pairs = code_message_pair()
    assert len(pairs) == len(list(HttpCode))
    assert pairs[0] == "Undefined HttpCode"
    assert pairs[403] == "Forbidden"
    for code, message in pairs.items():
        assert from_code(code).message() == message


def test_code_message_pair_is_a_copy():
    pairs = code_message_pair()
    pairs[200] = "changed"
    assert code_message_pair()[200] == "OK"
    assert HttpCode.OK.message() == "OK"