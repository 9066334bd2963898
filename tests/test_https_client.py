import requests
import responses

from atpkit.https_client import JSON_CONTENT_TYPE, DataType, HttpsClient


def test_json_post_returns_body_and_sets_headers():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b'{"ok": true}')
        result = HttpsClient().launch_request("https://example.com/api", '{"a": 1}', DataType.JSON)
        assert result == '{"ok": true}'
        sent = rsps.calls[0].request
        assert sent.headers["Content-Type"] == "application/json;charset=UTF-8"
        assert JSON_CONTENT_TYPE == "application/json;charset=UTF-8"
        assert sent.headers["Connection"] == "close"
        assert sent.headers["Host"] == "example.com"
        assert sent.body == b'{"a": 1}'


def test_binary_post_has_no_json_content_type():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/bin", body=b"done")
        result = HttpsClient().launch_request("https://example.com/bin", b"\x01\x02", DataType.BINARY)
        assert result == "done"
        assert "Content-Type" not in rsps.calls[0].request.headers


def test_non_ok_status_gives_empty_string():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"nope", status=404)
        assert HttpsClient().launch_request("https://example.com/api", "x") == ""


def test_explicit_port_and_query_preserved():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com:8443/path?x=1", body=b"ok")
        result = HttpsClient().launch_request("https://example.com:8443/path?x=1", "d")
        assert result == "ok"
        assert rsps.calls[0].request.url == "https://example.com:8443/path?x=1"


def test_plain_http_scheme_still_uses_tls():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"secure")
        assert HttpsClient().launch_request("http://example.com/api", "d") == "secure"
        assert rsps.calls[0].request.url.startswith("https://")


def test_uri_without_host_gives_empty_string():
    assert HttpsClient().launch_request("/relative/only", "d") == ""


def test_connection_failure_gives_empty_string():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=requests.ConnectionError("down"))
        assert HttpsClient().launch_request("https://example.com/api", "d") == ""


def test_body_truncated_at_nul():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"abc\0def")
        assert HttpsClient().launch_request("https://example.com/api", "d") == "abc"


def test_supplied_session_is_used():
    session = requests.Session()
    session.headers["X-Session"] = "shared"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"ok")
        assert HttpsClient(session).launch_request("https://example.com/api", "d") == "ok"
        assert rsps.calls[0].request.headers["X-Session"] == "shared"
    session.close()


def test_data_type_by_value_selects_json_content_type():
    assert DataType(1) is DataType.JSON
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"typed")
        result = HttpsClient().launch_request("https://example.com/api", "{}", DataType(1))
        assert result == "typed"
        assert rsps.calls[0].request.headers["Content-Type"] == JSON_CONTENT_TYPE


def test_protobuf_data_type_has_no_json_content_type():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, "https://example.com/api", body=b"pb")
        result = HttpsClient().launch_request("https://example.com/api", b"\x08\x01", DataType(2))
        assert result == "pb"
        assert "Content-Type" not in rsps.calls[0].request.headers