"""
Transformer tests: address parsing, participant helpers, Resend -> Nylas
send bodies (grant and domain variants) and Nylas -> Resend responses.
"""

import base64
from datetime import UTC, datetime

import pytest

from nylas_resend.models import (
    NylasDomainSendRequest,
    NylasDomainSendResponse,
    NylasMessage,
    NylasSendRequest,
    NylasSendResponse,
    Participant,
    SendEmailRequest,
)
from nylas_resend.transformers import (
    build_send_request,
    format_participant,
    parse_email_address,
    participants_to_emails,
    to_participants,
    transform_domain_send_request,
    transform_domain_send_response,
    transform_message_to_email,
    transform_send_request,
    transform_send_response,
)

from conftest import make_nylas_message


def _request(**overrides) -> dict:
    request = {"from": "a@x.com", "to": "b@x.com", "subject": "S", "text": "T"}
    request.update(overrides)
    return request


class TestParseEmailAddress:
    def test_plain_address(self):
        assert parse_email_address("user@example.com") == Participant(email="user@example.com")

    def test_name_and_address(self):
        parsed = parse_email_address("John Doe <john@example.com>")
        assert parsed.name == "John Doe"
        assert parsed.email == "john@example.com"

    def test_only_angle_brackets_has_no_name(self):
        parsed = parse_email_address("<john@example.com>")
        assert parsed.email == "john@example.com"
        assert "name" not in parsed.to_dict()

    def test_whitespace_is_trimmed(self):
        parsed = parse_email_address("   John Doe   <  john@example.com  >  ")
        assert parsed.to_dict() == {"name": "John Doe", "email": "john@example.com"}

    def test_bare_address_is_trimmed(self):
        assert parse_email_address("  user@example.com \n").to_dict() == {"email": "user@example.com"}

    def test_byte_order_mark_is_trimmed(self):
        assert parse_email_address("\ufeffuser@example.com").to_dict() == {"email": "user@example.com"}
        parsed = parse_email_address("\ufeff John <john@example.com>")
        assert parsed.to_dict() == {"name": "John", "email": "john@example.com"}

    def test_punctuation_in_name_is_kept_verbatim(self):
        parsed = parse_email_address('"Doe, John" <john@example.com>')
        assert parsed.name == '"Doe, John"'

    def test_unbalanced_brackets_fall_through_to_whole_string(self):
        parsed = parse_email_address("John <john@example.com")
        assert parsed.to_dict() == {"email": "John <john@example.com"}

    @pytest.mark.parametrize("name", ["Alice", "Dr. Bob Smith", "O'Neil"])
    def test_format_round_trip_is_stable(self, name):
        participant = Participant(name=name, email="p@example.com")
        assert parse_email_address(format_participant(participant)) == participant


class TestParticipantHelpers:
    def test_to_participants_none(self):
        assert to_participants(None) is None

    def test_to_participants_empty_list_stays_empty(self):
        assert to_participants([]) == []

    def test_to_participants_wraps_single_string(self):
        assert to_participants("a@x.com") == [Participant(email="a@x.com")]

    def test_to_participants_mixed_formats(self):
        result = to_participants(["a@x.com", "Bee <b@x.com>", "<c@x.com>"])
        assert [p.to_dict() for p in result] == [
            {"email": "a@x.com"},
            {"name": "Bee", "email": "b@x.com"},
            {"email": "c@x.com"},
        ]

    def test_format_participant(self):
        assert format_participant(Participant(email="a@x.com")) == "a@x.com"
        assert format_participant(Participant(name="A", email="a@x.com")) == "A <a@x.com>"

    def test_participants_to_emails(self):
        assert participants_to_emails(None) == []
        participants = [Participant(name="A", email="a@x.com"), Participant(email="b@x.com")]
        assert participants_to_emails(participants) == ["a@x.com", "b@x.com"]


class TestTransformSendRequest:
    def test_minimal_request(self):
        result = transform_send_request(_request())
        assert result.to_dict() == {
            "from": [{"email": "a@x.com"}],
            "to": [{"email": "b@x.com"}],
            "subject": "S",
            "body": "T",
        }

    def test_prefers_html_over_text(self):
        result = transform_send_request(_request(html="<p>H</p>"))
        assert result.body == "<p>H</p>"

    def test_body_defaults_to_empty_string(self):
        result = transform_send_request(_request(text=None))
        assert result.to_dict()["body"] == ""

    def test_accepts_model_instance(self):
        request = SendEmailRequest.model_validate(_request())
        assert isinstance(transform_send_request(request), NylasSendRequest)

    def test_multiple_recipients_and_reply_to(self):
        result = transform_send_request(
            _request(
                to=["b@x.com", "Cee <c@x.com>"],
                cc="cc@x.com",
                bcc=["bcc@x.com"],
                replyTo="Reply <r@x.com>",
            )
        ).to_dict()
        assert result["to"] == [{"email": "b@x.com"}, {"name": "Cee", "email": "c@x.com"}]
        assert result["cc"] == [{"email": "cc@x.com"}]
        assert result["bcc"] == [{"email": "bcc@x.com"}]
        assert result["reply_to"] == [{"name": "Reply", "email": "r@x.com"}]

    def test_empty_recipient_lists_are_omitted(self):
        result = transform_send_request(_request(cc=[], bcc=[], replyTo=[])).to_dict()
        assert "cc" not in result
        assert "bcc" not in result
        assert "reply_to" not in result

    def test_string_attachment_content_passes_through(self):
        result = transform_send_request(
            _request(attachments=[{"filename": "a.txt", "content": "aGVsbG8="}])
        ).to_dict()
        assert result["attachments"] == [
            {"filename": "a.txt", "content": "aGVsbG8=", "content_type": "application/octet-stream"}
        ]

    def test_bytes_attachment_content_is_base64_encoded(self):
        result = transform_send_request(
            _request(
                attachments=[
                    {
                        "filename": "logo.png",
                        "content": b"\x89PNG",
                        "contentType": "image/png",
                        "contentId": "logo",
                    }
                ]
            )
        ).to_dict()
        attachment = result["attachments"][0]
        assert attachment["content"] == base64.b64encode(b"\x89PNG").decode()
        assert attachment["content_type"] == "image/png"
        assert attachment["content_id"] == "logo"

    def test_scheduled_at_becomes_epoch_seconds(self):
        result = transform_send_request(_request(scheduledAt="2024-01-15T10:30:00.900Z"))
        expected = int(datetime(2024, 1, 15, 10, 30, tzinfo=UTC).timestamp())
        assert result.send_at == expected

    def test_unparseable_scheduled_at_is_dropped(self):
        result = transform_send_request(_request(scheduledAt="next tuesday"))
        assert "send_at" not in result.to_dict()

    def test_warns_on_headers_and_tags(self):
        warnings = []
        transform_send_request(
            _request(headers={"X-Custom": "1"}, tags=[{"name": "k", "value": "v"}]),
            warn=warnings.append,
        )
        assert len(warnings) == 2
        assert "headers" in warnings[0].lower()
        assert "tags" in warnings[1].lower()

    def test_no_warning_for_empty_headers_and_tags(self):
        warnings = []
        transform_send_request(_request(headers={}, tags=[]), warn=warnings.append)
        assert warnings == []

    def test_default_sink_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="nylas_resend.transformers"):
            transform_send_request(_request(headers={"X-Custom": "1"}))
        assert "nylas-resend:" in caplog.text


class TestTransformDomainSendRequest:
    def test_text_only_is_plaintext(self):
        result = transform_domain_send_request(_request())
        assert result.to_dict() == {
            "from": {"email": "a@x.com"},
            "to": [{"email": "b@x.com"}],
            "subject": "S",
            "body": "T",
            "is_plaintext": True,
        }

    def test_html_is_not_plaintext(self):
        result = transform_domain_send_request(_request(html="<p>H</p>"))
        assert result.is_plaintext is False
        assert result.body == "<p>H</p>"

    def test_from_is_single_participant(self):
        result = transform_domain_send_request(_request(**{"from": "Acme <hi@acme.com>"}))
        assert result.from_ == Participant(name="Acme", email="hi@acme.com")

    def test_unsupported_fields_dropped_with_warnings(self):
        warnings = []
        result = transform_domain_send_request(
            _request(
                attachments=[{"filename": "a.txt", "content": "eA=="}],
                scheduledAt="2024-01-15T10:30:00Z",
                replyTo="r@x.com",
                cc=["cc@x.com"],
            ),
            warn=warnings.append,
        ).to_dict()
        assert "attachments" not in result
        assert "send_at" not in result
        assert "reply_to" not in result
        assert result["cc"] == [{"email": "cc@x.com"}]
        assert len(warnings) == 3
        assert any("Attachments" in w for w in warnings)
        assert any("scheduledAt" in w for w in warnings)
        assert any("replyTo" in w for w in warnings)

    def test_warns_on_headers_and_tags(self):
        warnings = []
        result = transform_domain_send_request(
            _request(headers={"X": "1"}, tags=[{"name": "k", "value": "v"}]),
            warn=warnings.append,
        ).to_dict()
        assert len(warnings) == 2
        assert "headers" in warnings[0].lower()
        assert "tags" in warnings[1].lower()
        assert "headers" not in result
        assert "tags" not in result

    def test_empty_cc_omitted(self):
        assert "cc" not in transform_domain_send_request(_request(cc=[])).to_dict()


class TestBuildSendRequest:
    def test_grant_variant(self):
        assert isinstance(build_send_request(_request(), domain_based=False), NylasSendRequest)

    def test_domain_variant(self):
        assert isinstance(build_send_request(_request(), domain_based=True), NylasDomainSendRequest)


class TestResponseTransformers:
    def test_send_response(self):
        response = NylasSendResponse.model_validate(
            {"request_id": "req-1", "data": make_nylas_message(id="sent-1")}
        )
        assert transform_send_response(response).to_dict() == {"id": "sent-1"}

    def test_domain_send_response(self):
        response = NylasDomainSendResponse.model_validate({"request_id": "r", "data": {"id": "d-1"}})
        assert transform_domain_send_response(response).id == "d-1"

    def test_message_to_email(self):
        message = NylasMessage.model_validate(
            make_nylas_message(
                cc=[{"email": "cc@example.com"}],
                reply_to=[{"name": "R", "email": "r@example.com"}],
            )
        )
        assert transform_message_to_email(message).to_dict() == {
            "id": "msg-1",
            "object": "email",
            "from": "Alice <alice@example.com>",
            "to": ["bob@example.com"],
            "cc": ["cc@example.com"],
            "bcc": [],
            "replyTo": ["r@example.com"],
            "subject": "Hello",
            "text": "<p>Hi Bob</p>",
            "html": "<p>Hi Bob</p>",
            "createdAt": "2023-11-14T22:13:20.000Z",
            "lastEvent": "email.sent",
        }

    def test_missing_from_becomes_empty_string(self):
        message = NylasMessage.model_validate(make_nylas_message(**{"from": []}))
        assert transform_message_to_email(message).from_ == ""
