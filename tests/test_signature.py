import pytest
import redis

from ringkit.hashing import hmac_sha1
from ringkit.signature import (
    FRMT,
    INVD,
    LOAD,
    PAYL,
    NonceGuard,
    Payload,
    SignatureError,
    Signator,
    json_payload,
    payload_from_request,
)

NOW = 1_700_000_000
NONCE = "abcdefghij"
KEY = "secret"


class FakePipeline:
    def __init__(self, store):
        self.store = store
        self.ops = []

    def zadd(self, name, mapping):
        self.ops.append(("zadd", name, mapping))

    def zremrangebyscore(self, name, low, high):
        self.ops.append(("zrem", name, high))

    def expire(self, name, seconds):
        self.ops.append(("expire", name, seconds))

    def execute(self):
        for op in self.ops:
            if op[0] == "zadd":
                self.store.sets.setdefault(op[1], {}).update({k: float(v) for k, v in op[2].items()})
            elif op[0] == "zrem":
                members = self.store.sets.get(op[1], {})
                for member in [m for m, s in members.items() if s <= op[2]]:
                    del members[member]
            else:
                self.store.expiry[op[1]] = op[2]
        return [1] * len(self.ops)


class FakeRedis:
    def __init__(self):
        self.sets = {}
        self.expiry = {}

    def zscore(self, name, member):
        return self.sets.get(name, {}).get(member)

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class BrokenRedis:
    def zscore(self, name, member):
        raise redis.ConnectionError("connection refused")


def base_headers(**extra):
    headers = {"X-U": "u1", "X-T": str(NOW), "X-R": NONCE, "X-S": "0" * 40}
    headers.update(extra)
    return headers


def signed_headers(method, path, query, body):
    headers = base_headers()
    payload = payload_from_request(method, path, query, headers, body)
    headers["X-S"] = hmac_sha1(payload.text(), KEY)
    return headers


def make_signator(**kwargs):
    store = FakeRedis()
    signator = Signator(lambda user: KEY, NonceGuard(store), clock=lambda: NOW, **kwargs)
    return signator, store


def test_json_payload_scalars():
    assert json_payload(None) == "null"
    assert json_payload(True) == "true"
    assert json_payload(False) == "false"
    assert json_payload(42) == "42"
    assert json_payload("plain text") == "plain text"
    assert json_payload(2.5) == "2.5"


def test_json_payload_float_layouts():
    assert json_payload(1e20) == "1e20"
    assert json_payload(1e-05) == "0.00001"
    assert json_payload(100.0).endswith(".0")


def test_json_payload_object_key_order_does_not_matter():
    assert json_payload({"b": 1, "a": [1, "x"]}) == json_payload({"a": [1, "x"], "b": 1})
    text = json_payload({"b": 1, "a": 2})
    assert text.index("a=") < text.index("b=")
    assert text.startswith("{") and text.endswith("}")


def test_json_payload_array_joins_items():
    assert json_payload([1, "x", None]) == ",".join(["1", "x", "null"]).join("[]")


def test_payload_text_worked_example():
    payload = payload_from_request(
        "post", "/api/x", "b=2&a=1", base_headers(**{"X-R": NONCE}), b'{"z":true,"k":"v"}'
    )
    assert payload.method == "POST"
    assert payload.text() == "POST,/api/x,{u1,1700000000,abcdefghij},{a=1,b=2},{k=v,z=true}"


def test_get_request_has_no_body_part():
    payload = payload_from_request("GET", "/p", None, base_headers(), b'{"ignored":1}')
    assert payload.has_body is False
    assert payload.text() == f"GET,/p,{{u1,{NOW},{NONCE}}}"


def test_empty_post_body_is_null():
    payload = payload_from_request("POST", "/p", "", base_headers(), b"")
    assert payload.has_body is True
    assert payload.text().endswith(",null")


def test_headers_are_case_insensitive():
    headers = {"x-u": "u9", "x-t": "123", "x-r": NONCE, "x-s": "s"}
    payload = payload_from_request("GET", "/", "", headers, None)
    assert (payload.xu, payload.xt, payload.xr, payload.xs) == ("u9", "123", NONCE, "s")


def test_missing_headers_leave_gaps_in_text():
    payload = payload_from_request("GET", "/p", "", {}, None)
    assert payload.xu is None
    assert payload.text() == "GET,/p,{}"


def test_invalid_json_body_raises_payl():
    with pytest.raises(SignatureError) as info:
        payload_from_request("PUT", "/p", "", base_headers(), b"{not json")
    assert info.value.detail == PAYL


def test_guard_missing_header():
    payload = Payload(method="GET", path="/", xu="u1", xt=str(NOW), xr=NONCE)
    with pytest.raises(SignatureError) as info:
        payload.guard(NOW)
    assert info.value.detail == FRMT
    assert info.value.message == "missing signature data in header"


@pytest.mark.parametrize("now", [NOW + 301, NOW - 301])
def test_guard_time_skew(now):
    payload = payload_from_request("GET", "/", "", base_headers(), None)
    with pytest.raises(SignatureError) as info:
        payload.guard(now)
    assert info.value.message == "the time difference is too large"


def test_guard_small_timestamp_rejected():
    payload = payload_from_request("GET", "/", "", base_headers(**{"X-T": "10"}), None)
    with pytest.raises(SignatureError) as info:
        payload.guard(10)
    assert info.value.message == "the time difference is too large"


@pytest.mark.parametrize("nonce", ["a" * 8, "a" * 40])
def test_guard_nonce_length(nonce):
    payload = payload_from_request("GET", "/", "", base_headers(**{"X-R": nonce}), None)
    with pytest.raises(SignatureError) as info:
        payload.guard(NOW)
    assert info.value.message == "random string length invalid"


def test_guard_signature_length():
    payload = payload_from_request("GET", "/", "", base_headers(**{"X-S": "0" * 39}), None)
    with pytest.raises(SignatureError) as info:
        payload.guard(NOW)
    assert info.value.message == "invalid signature data in header"


def test_valid_reports_debug_data():
    payload = payload_from_request("GET", "/p", "a=1", base_headers(), None)
    with pytest.raises(SignatureError) as info:
        payload.valid(KEY)
    assert info.value.detail == INVD
    assert info.value.message == "invalid signature"
    assert info.value.data["server"] == hmac_sha1(payload.text(), KEY)
    assert info.value.data["client"] == "0" * 40
    assert info.value.data["payload"] == payload.text()


def test_nonce_guard_rejects_replay_then_allows_after_lifetime():
    store = FakeRedis()
    guard = NonceGuard(store, lifetime=300)
    guard.check("u1", NONCE, NOW)
    assert store.sets["XR:u1"][NONCE] == NOW
    assert store.expiry["XR:u1"] == 300
    with pytest.raises(SignatureError) as info:
        guard.check("u1", NONCE, NOW + 10)
    assert info.value.message == "duplicate rand value"
    guard.check("u1", NONCE, NOW + 300)
    assert store.sets["XR:u1"][NONCE] == NOW + 300


def test_nonce_guard_prunes_old_entries():
    store = FakeRedis()
    guard = NonceGuard(store, lifetime=300)
    guard.check("u1", "first-nonce", NOW)
    guard.check("u1", "second-nonce", NOW + 400)
    assert set(store.sets["XR:u1"]) == {"second-nonce"}


def test_nonce_guard_wraps_redis_errors():
    guard = NonceGuard(BrokenRedis())
    with pytest.raises(SignatureError) as info:
        guard.check("u1", NONCE, NOW)
    assert info.value.detail == INVD
    assert "connection refused" in info.value.message


def test_verify_accepts_signed_request():
    signator, store = make_signator()
    body = b'{"amount":3,"items":["a","b"]}'
    headers = signed_headers("POST", "/orders", "page=1", body)
    context = signator.verify("POST", "/orders", "page=1", headers, body)
    assert context.ident == "u1"
    assert NONCE in store.sets["XR:u1"]


def test_verify_rejects_replayed_request():
    signator, _ = make_signator()
    headers = signed_headers("GET", "/items", "", None)
    signator.verify("GET", "/items", "", headers, None)
    with pytest.raises(SignatureError) as info:
        signator.verify("GET", "/items", "", headers, None)
    assert info.value.message == "duplicate rand value"


def test_verify_rejects_bad_signature():
    signator, store = make_signator()
    with pytest.raises(SignatureError) as info:
        signator.verify("GET", "/items", "", base_headers(), None)
    assert info.value.detail == INVD
    assert store.sets == {}


def test_verify_rear_bypasses_signature():
    rear = "placeholder"
    signator, _ = make_signator(rear=rear)
    headers = base_headers(**{"X-DEVELOPMENT-SKIP": rear})
    context = signator.verify("GET", "/items", "", headers, None)
    assert context.ident == "u1"


def test_verify_wrong_rear_does_not_bypass():
    signator, _ = make_signator(rear="placeholder")
    headers = base_headers(**{"X-DEVELOPMENT-SKIP": "other"})
    with pytest.raises(SignatureError) as info:
        signator.verify("GET", "/items", "", headers, None)
    assert info.value.message == "invalid signature"


def test_verify_key_loader_failure_is_load():
    def loader(user):
        raise LookupError(f"no key for {user}")

    signator = Signator(loader, NonceGuard(FakeRedis()), clock=lambda: NOW)
    with pytest.raises(SignatureError) as info:
        signator.verify("GET", "/items", "", base_headers(), None)
    assert info.value.detail == LOAD
    assert info.value.message == "no key for u1"


def test_verify_passes_user_to_key_loader():
    seen = []

    def loader(user):
        seen.append(user)
        return KEY

    signator = Signator(loader, NonceGuard(FakeRedis()), clock=lambda: NOW)
    headers = signed_headers("GET", "/x", "", None)
    context = signator.verify("GET", "/x", "", headers, None)
    assert context.ident == "u1"
    assert seen == ["u1"]


def test_exclusions():
    signator, _ = make_signator()
    assert signator.is_excluded("GET", "/health", {}) is False
    signator.add_exclude(lambda method, path, headers: path.startswith("/health"))
    assert signator.is_excluded("GET", "/health", {}) is True
    assert signator.is_excluded("GET", "/orders", {}) is False