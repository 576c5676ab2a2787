"""Configuration-driven sending stories: send_email and send_notification."""

from __future__ import annotations

from pathlib import Path

import pytest

from sendgrid_transport.adapters.memory import RecordingHttpClient
from sendgrid_transport.adapters.sendgrid.config import SendgridConfig
from sendgrid_transport.adapters.sendgrid.sender import load_attachment, send_email, send_notification
from sendgrid_transport.domain.errors import ConfigurationError, DeliveryError, InvalidAddressError


@pytest.fixture
def config() -> SendgridConfig:
    return SendgridConfig(
        api_key="SG.key",
        from_address="noreply@example.com",
        from_name="Alerts",
        recipients=["ops@example.com"],
    )


# ======================== Sender Resolution ========================


@pytest.mark.os_agnostic
def test_configured_sender_and_name_become_from(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", body="Hello", client=http_client)

    assert http_client.requests[0].json["from"] == {"email": "noreply@example.com", "name": "Alerts"}


@pytest.mark.os_agnostic
def test_from_override_replaces_configured_sender(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", body="x", from_address="Team <team@example.com>", client=http_client)

    assert http_client.requests[0].json["from"] == {"email": "team@example.com", "name": "Team"}


@pytest.mark.os_agnostic
def test_missing_sender_is_a_value_error(http_client: RecordingHttpClient) -> None:
    config = SendgridConfig(api_key="SG.key", recipients=["ops@example.com"])

    with pytest.raises(ValueError, match="No from_address configured"):
        send_email(config=config, subject="Hi", client=http_client)

    assert http_client.requests == []


@pytest.mark.os_agnostic
def test_invalid_from_override_is_rejected(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    with pytest.raises(InvalidAddressError):
        send_email(config=config, subject="Hi", from_address="nope", client=http_client)


# ======================== API Key ========================


@pytest.mark.os_agnostic
def test_missing_api_key_is_a_configuration_error(http_client: RecordingHttpClient) -> None:
    config = SendgridConfig(from_address="noreply@example.com", recipients=["ops@example.com"])

    with pytest.raises(ConfigurationError, match="API key"):
        send_email(config=config, subject="Hi", client=http_client)


@pytest.mark.os_agnostic
def test_configured_api_key_is_sent_as_bearer(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", body="x", client=http_client)

    assert http_client.requests[0].headers["Authorization"] == "Bearer SG.key"


@pytest.mark.os_agnostic
def test_configured_host_and_port_are_used(http_client: RecordingHttpClient) -> None:
    config = SendgridConfig(
        api_key="SG.key",
        host="api.eu.sendgrid.com",
        port=8443,
        from_address="noreply@example.com",
        recipients=["ops@example.com"],
    )

    send_email(config=config, subject="Hi", client=http_client)

    assert http_client.requests[0].url == "https://api.eu.sendgrid.com:8443/v3/mail/send"


# ======================== Recipients ========================


@pytest.mark.os_agnostic
def test_configured_recipients_are_used_by_default(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", body="x", client=http_client)

    assert http_client.requests[0].json["personalizations"][0]["to"] == [{"email": "ops@example.com"}]


@pytest.mark.os_agnostic
def test_runtime_recipients_replace_configured_ones(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, recipients=["a@example.com", "b@example.com"], subject="Hi", client=http_client)

    to = http_client.requests[0].json["personalizations"][0]["to"]
    assert to == [{"email": "a@example.com"}, {"email": "b@example.com"}]


@pytest.mark.os_agnostic
def test_single_recipient_string_is_accepted(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, recipients="solo@example.com", subject="Hi", client=http_client)

    assert http_client.requests[0].json["personalizations"][0]["to"] == [{"email": "solo@example.com"}]


@pytest.mark.os_agnostic
def test_no_recipients_anywhere_is_a_value_error(http_client: RecordingHttpClient) -> None:
    config = SendgridConfig(api_key="SG.key", from_address="noreply@example.com")

    with pytest.raises(ValueError, match="No recipients configured"):
        send_email(config=config, subject="Hi", client=http_client)


@pytest.mark.os_agnostic
def test_invalid_runtime_recipient_is_rejected(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    with pytest.raises(InvalidAddressError, match="Invalid recipient: broken"):
        send_email(config=config, recipients=["broken"], subject="Hi", client=http_client)

    assert http_client.requests == []


@pytest.mark.os_agnostic
def test_cc_bcc_and_reply_to_reach_the_payload(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(
        config=config,
        subject="Hi",
        body="x",
        cc=["cc@example.com"],
        bcc=["bcc@example.com"],
        reply_to="Help <help@example.com>",
        client=http_client,
    )

    payload = http_client.requests[0].json
    personalization = payload["personalizations"][0]
    assert personalization["to"] == [{"email": "ops@example.com"}]
    assert personalization["cc"] == [{"email": "cc@example.com"}]
    assert personalization["bcc"] == [{"email": "bcc@example.com"}]
    assert payload["reply_to"] == {"email": "help@example.com", "name": "Help"}


@pytest.mark.os_agnostic
def test_invalid_cc_is_rejected(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    with pytest.raises(InvalidAddressError):
        send_email(config=config, subject="Hi", cc=["bad"], client=http_client)


# ======================== Body, Headers, Attachments ========================


@pytest.mark.os_agnostic
def test_empty_bodies_produce_empty_content(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Ping", client=http_client)

    assert http_client.requests[0].json["content"] == []


@pytest.mark.os_agnostic
def test_text_and_html_bodies_are_both_sent(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", body="plain", body_html="<p>rich</p>", client=http_client)

    assert http_client.requests[0].json["content"] == [
        {"type": "text/plain", "value": "plain"},
        {"type": "text/html", "value": "<p>rich</p>"},
    ]


@pytest.mark.os_agnostic
def test_custom_headers_are_forwarded(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    send_email(config=config, subject="Hi", headers={"X-Campaign": "spring"}, client=http_client)

    assert http_client.requests[0].json["headers"] == {"X-Campaign": "spring"}


@pytest.mark.os_agnostic
def test_attachment_file_is_read_and_typed(
    config: SendgridConfig, http_client: RecordingHttpClient, attachment_file: Path
) -> None:
    send_email(config=config, subject="Report", attachments=[attachment_file], client=http_client)

    attachment = http_client.requests[0].json["attachments"][0]
    assert attachment["filename"] == "report.csv"
    assert attachment["type"] == "text/csv"
    assert attachment["disposition"] == "attachment"


@pytest.mark.os_agnostic
def test_missing_attachment_raises_before_sending(
    config: SendgridConfig, http_client: RecordingHttpClient, tmp_path: Path
) -> None:
    with pytest.raises(FileNotFoundError):
        send_email(config=config, subject="Hi", attachments=[tmp_path / "absent.pdf"], client=http_client)

    assert http_client.requests == []


@pytest.mark.os_agnostic
def test_load_attachment_without_known_suffix_has_no_type(tmp_path: Path) -> None:
    path = tmp_path / "blob.unknownext"
    path.write_bytes(b"\x00\x01")

    attachment = load_attachment(path)

    assert attachment.content == b"\x00\x01"
    assert attachment.content_type is None


# ======================== Results ========================


@pytest.mark.os_agnostic
def test_send_email_returns_the_provider_message_id(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    assert send_email(config=config, subject="Hi", client=http_client).message_id == "1"


@pytest.mark.os_agnostic
def test_rejection_surfaces_as_delivery_error(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    http_client.queue(403, json={"errors": [{"message": "Sender not verified"}]})

    with pytest.raises(DeliveryError, match="Sender not verified"):
        send_email(config=config, subject="Hi", client=http_client)


# ======================== Notifications ========================


@pytest.mark.os_agnostic
def test_notification_sends_plain_text_only(config: SendgridConfig, http_client: RecordingHttpClient) -> None:
    sent = send_notification(config=config, subject="Disk full", message="95% used", client=http_client)

    payload = http_client.requests[0].json
    assert payload["content"] == [{"type": "text/plain", "value": "95% used"}]
    assert payload["personalizations"][0]["subject"] == "Disk full"
    assert "attachments" not in payload
    assert sent.message_id == "1"


@pytest.mark.os_agnostic
def test_notification_honours_recipient_and_sender_overrides(
    config: SendgridConfig, http_client: RecordingHttpClient
) -> None:
    send_notification(
        config=config,
        recipients="oncall@example.com",
        subject="Alert",
        message="x",
        from_address="monitor@example.com",
        client=http_client,
    )

    payload = http_client.requests[0].json
    assert payload["from"] == {"email": "monitor@example.com"}
    assert payload["personalizations"][0]["to"] == [{"email": "oncall@example.com"}]
