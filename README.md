# atpkit

A set of small application helpers for network services:

- `atpkit.base64codec`: `encode(data)` and `decode(text)` for standard base64. Empty input raises `ValueError`. Decoding stops at the first `=` or NUL character.
- `atpkit.slice`: `Slice`, a sized view over bytes. It compares by content.
- `atpkit.codec`: JSON `encode(table)` and `decode(text)`. `encode(None)` gives an empty string. A parse failure raises `CodecError`.
- `atpkit.thread_storage`: `ThreadStorage` holds one value per thread. The value is created on first use by an init callback. A cleanup callback runs when the thread exits or on `clear()`.
- `atpkit.policy`: chunk allocation policies (`default_policy()`, `new_policy()`) and the `align(size, alignment)` helper.
- `atpkit.memory_pool`: `PoolHelper` hands out `Pool` objects. Their sizes are rounded up to fixed size classes. Released pools are cached for reuse, up to a maximum capacity.
- `atpkit.dao`: `RedisStore`, a synchronous wrapper around a Redis client. It supports `multi()`, `execute()` and `discard()` transactions. Get one with `connect(host, port)`.
- `atpkit.send_helper`: `SendHelper.send_message(ip, port, message, timeout)` does one exchange over a short-lived TCP connection. It opens the connection, sends one message and returns up to 4096 reply bytes. Failures raise `SendError`.
- `atpkit.post_client`: `PostClient` is a reusable HTTP POST client. It keeps the body of the last response.
- `atpkit.https_client`: `HttpsClient.launch_request(uri, data, data_type)` sends a one-shot HTTPS POST and returns the body as text. It returns `""` on any failure.
- `atpkit.rsa_crypto`: `RSACrypto` encrypts and decrypts with RSA key files in PEM format. It can also write out the public key of a certificate. Failures raise `RSAError`.
- `atpkit.uuidgen`: `UUIDGenerator` generates random lower-case UUIDs. It can also parse, compare and null-check them.

## Install

```
pip install atpkit
```

## Examples

```python
from atpkit import base64codec, codec

encoded = base64codec.encode(b"hello")
assert base64codec.decode(encoded) == b"hello"

text = codec.encode({"id": 1})
assert codec.decode(text) == {"id": 1}
```

```python
from atpkit.memory_pool import PoolHelper
from atpkit.policy import default_policy

helper = PoolHelper(default_policy(), 1 << 20)
pool = helper.create_pool("requests", 1000, 512)
block = pool.alloc(64)
helper.release_pool(pool)
helper.destroy()
```

```python
from atpkit.https_client import HttpsClient, DataType

client = HttpsClient(None)
body = client.launch_request("https://api.example.com/v1/echo", '{"a": 1}', DataType.JSON)
```

## What it does not do

This is a library only. It has no command-line program, no TCP or RPC server and no event loop. The network helpers are clients that make one request at a time.

## Tests

```
pip install atpkit[test]
pytest
```