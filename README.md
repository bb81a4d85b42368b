# ringkit

A toolkit of small helpers for building web services. You import it as a library. It has no commands.

## Modules

- **ringkit.ident**: makes time-ordered integer ids. Each id is built from milliseconds × 10^6 + sequence × 100 + shard. A `Factory` makes up to 1000 ids per millisecond for one shard. `Factory.make()` makes one id and `Factory.make_n(n)` makes several. `shared()` returns the process-wide factory for shard 0, and `new_id()` uses it. An `Id` can give a base-62 short form with `Id.short()`, and `id_from_short()` reverses it. `id_from_text()` parses a decimal id. Ids out of range raise `IdError`.
- **ringkit.signature**: checks signed requests. The signature is HMAC-SHA1 over a canonical payload. That payload is built from the method, the path, the `X-U`/`X-T`/`X-R` headers, the sorted query and the JSON body, with object keys sorted.
  - `payload_from_request()` builds a `Payload`.
  - `Payload.guard()` checks that the headers are present, that the time is within five minutes, and that the nonce and signature lengths are right.
  - `Payload.valid()` compares the signatures.
  - `NonceGuard` refuses a nonce that was used again within its lifetime. It keeps nonces in Redis sorted sets.
  - `Signator.verify()` runs all of these checks and returns a `Context` for the caller.
  - A failure raises `SignatureError`. Its `detail` is one of `PAYL`, `FRMT`, `LOAD` or `INVD`.
- **ringkit.httpclient**: an HTTP client built on httpx.
  - `ClientBuilder` sets default headers, the User-Agent, a proxy and TLS verification. The timeout is 10 seconds and redirects are not followed.
  - `Client` joins paths onto a base URL. `get`/`post`/`put`/`delete`/`head` return the text of the response. `*_json` return the decoded JSON.
  - A response that is not 2xx raises `HttpError`, and so does a transport error.
  - `UserAgentBuilder` composes User-Agent strings.
- **ringkit.url**:
  - `join()` joins two pieces with exactly one slash between them.
  - `url_encode()` form-encodes a string, and `url_decode()` percent-decodes one.
  - `parse_query()` and `parse_url_query()` return query parameters as a dict.
- **ringkit.define**: `HttpMethod` lists the HTTP methods and `parse_method()` looks one up. `HttpCode` lists the status codes with their reason phrases (`message()`). `from_code()` and `code_message_pair()` look codes up.
- **ringkit.fs**:
  - `normalize_path()` and `join_path()` normalise paths lexically. `working_dir()` returns the current directory.
  - `PathCheck` tells whether a path exists and what kind it is.
  - `Directory` lists the files, directories or symlinks in a directory.
  - `Content` reads and writes one file. It can read the head or tail as bytes, lines or a string. It can also read the whole file, truncate, write, append, clear, and read or write JSON.
- **ringkit.jsonutil**: `encode()` gives compact JSON and `encode_or_empty()` gives an empty string on failure. `pretty()` indents by two spaces. `decode()` is a strict parse, and `decode_file()` parses a file.
- **ringkit.hashing**: `sha1()` and `hmac_sha1()` return hex digests.
- **ringkit.strings**:
  - case-insensitive contains, prefix and suffix checks;
  - substrings with `sub_head`, `sub_tail`, `sub` and `extract`;
  - word helpers (`word_count`, `word_head`, `word_tail`, `word_format`);
  - `ucfirst`, `lcfirst`, `ucwords` and `lcwords`.
- **ringkit.validator**:
  - regex helpers (`regex_match`, `regex_extract`, `regex_replace`, `regex_split`, `regex_find`). A bad pattern does not raise; it gives an empty or false result.
  - format checks: e-mail, China mobile number, Chinese text, URL, IPv4, IPv6, MAC address;
  - length checks;
  - digit-class checks;
  - ASCII, alphabetic, alphanumeric and base64 checks.
- **ringkit.number**: `to_int()` and `to_float()` parse a string leniently and return a default on failure.
- **ringkit.timeutil**:
  - `Format` holds the date/time layouts.
  - `Timestamp` holds nanoseconds since the epoch. `timestamp_from()` guesses the unit from the size of the value.
  - `now_timestamp`, `now_utc`, `now_local` and `now_fixed` give the current time.
  - `is_leap` tells whether a year is a leap year.
- **ringkit.randutil**: random booleans, ints, floats, lower-case strings, dates and datetimes.
- **ringkit.context**: `Context` holds a caller identity, its creation time in microseconds and string values. `Pagination` holds a page and a size.
- **ringkit.charset**: the `Charset` enum of character set names.

## Installation

```
pip install ringkit
```

## Examples

Generate ids:

```python
from ringkit.ident import new_id, id_from_short

ident = new_id()
print(ident.value(), ident.millis(), ident.sequence())
assert id_from_short(ident.short()) == ident
```

Hash:

```python
from ringkit.hashing import hmac_sha1, sha1

digest = sha1("aaa")
mac = hmac_sha1("content", "secret")
```

Call a JSON API:

```python
from ringkit.httpclient import ClientBuilder, HttpError

builder = ClientBuilder("https://api.example.com")
builder.use_json().add_header("Authorization", "Bearer token")
with builder.build() as client:
    try:
        data = client.get_json("/items")
    except HttpError as err:
        print(err.status, err.body)
```

Verify a signed request:

```python
import redis

from ringkit.signature import NonceGuard, SignatureError, Signator

signator = Signator(
    key_loader=lambda user: "secret",
    nonce_guard=NonceGuard(redis.Redis.from_url("redis://localhost:6379/0")),
)
try:
    context = signator.verify("POST", "/api/items", "page=1", headers, body)
except SignatureError as err:
    print(err.detail, err.message)
```

Validate text:

```python
from ringkit.validator import is_email, regex_extract

is_email("someone@example.com")          # True
regex_extract(r"\w+", "Hello, world!")   # ["Hello", "world"]
```

## What it does not do

ringkit has no web server and no router. It does not hook into any web framework as middleware. `Signator.verify()` works on request parts that you pass to it: the method, path, query, headers and body. Wiring it into a server is up to you. The package also does not persist anything itself. The only storage it touches is the Redis server that you give to `NonceGuard`.

## Running the tests

```
pip install -e .[test]
pytest
```