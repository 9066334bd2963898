"""Application helpers: base64 and JSON codecs, thread storage, memory pools, Redis access, TCP and HTTP(S) POST clients, RSA and UUIDs."""

__version__ = "0.1.0"