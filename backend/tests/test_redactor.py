"""Tests for shield.redactor — regex PII redaction over JSON values."""

from __future__ import annotations

import copy

import pytest

from shield.redactor import (
    REDACTION_PATTERNS,
    redact,
    redact_envelope,
    redact_text,
)


# -----------------------------------------------------------------------
# Pattern table
# -----------------------------------------------------------------------


class TestPatterns:
    def test_pattern_order(self):
        assert [p.name for p in REDACTION_PATTERNS] == ["em", "ph", "ip", "id"]

    def test_tokens(self):
        assert [p.token for p in REDACTION_PATTERNS] == [
            "[REDACTED_em]", "[REDACTED_ph]", "[REDACTED_ip]", "[REDACTED_id]",
        ]


# -----------------------------------------------------------------------
# redact_text
# -----------------------------------------------------------------------


class TestRedactText:
    def test_email_and_phone(self):
        text = "contact me at a@b.com or 555-123-4567"
        assert redact_text(text) == "contact me at [REDACTED_em] or [REDACTED_ph]"

    def test_phone_with_country_code(self):
        assert redact_text("call +1-555-123-4567") == "call [REDACTED_ph]"

    def test_phone_with_parenthesised_area_code(self):
        assert redact_text("(555)123-4567") == "[REDACTED_ph]"

    def test_ip_address(self):
        assert redact_text("from 192.168.10.20 today") == "from [REDACTED_ip] today"

    def test_national_id(self):
        assert redact_text("SSN 123-45-6789") == "SSN [REDACTED_id]"

    def test_national_id_without_separators(self):
        assert redact_text("id 123456789 on file") == "id [REDACTED_id] on file"

    def test_multiple_matches_of_one_pattern(self):
        assert redact_text("a@x.org, b@y.net") == "[REDACTED_em], [REDACTED_em]"

    def test_adjacent_pii_of_different_kinds(self):
        text = "a@b.com 555-123-4567 10.0.0.1 123-45-6789"
        assert redact_text(text) == (
            "[REDACTED_em] [REDACTED_ph] [REDACTED_ip] [REDACTED_id]"
        )

    def test_email_wins_over_digits_inside_it(self):
        assert redact_text("5551234567@carrier.net") == "[REDACTED_em]"

    def test_empty_string(self):
        assert redact_text("") == ""

    def test_clean_text_untouched(self):
        text = "Senior engineer with 12 years of experience."
        assert redact_text(text) == text

    def test_non_ascii_digits_are_not_redacted(self):
        text = "١٢٣-٤٥-٦٧٨٩"
        assert redact_text(text) == text

    @pytest.mark.parametrize("token", [p.token for p in REDACTION_PATTERNS] + ["[REDACTED_em]x"])
    def test_idempotent_on_tokens(self, token):
        assert redact_text(token) == token

    def test_redacting_twice_is_stable(self):
        once = redact_text("mail a@b.com, call 555-123-4567")
        assert redact_text(once) == once


# -----------------------------------------------------------------------
# redact (structural walk)
# -----------------------------------------------------------------------


class TestRedactValue:
    def test_profile_record(self, sample_profile):
        result = redact(sample_profile)
        assert result == {
            "name": "Jane Doe",
            "bio": "Reach me at [REDACTED_em] or [REDACTED_ph].",
            "last_login_ip": "Logged in from [REDACTED_ip]",
            "tax_id": "[REDACTED_id]",
            "age": 34,
            "verified": True,
            "skills": ["python", "contact: [REDACTED_em]"],
            "manager": None,
        }

    def test_input_is_not_mutated(self, sample_profile):
        before = copy.deepcopy(sample_profile)
        redact(sample_profile)
        assert sample_profile == before

    def test_keys_are_never_redacted(self):
        data = {"a@b.com": "a@b.com"}
        assert redact(data) == {"a@b.com": "[REDACTED_em]"}

    def test_deep_nesting(self):
        data = {"a": [{"b": [[{"c": "ip 10.1.2.3"}]]}, 7]}
        assert redact(data) == {"a": [{"b": [[{"c": "ip [REDACTED_ip]"}]]}, 7]}

    @pytest.mark.parametrize("leaf", [None, 0, 1, -2.5, True, False, "", [], {}])
    def test_non_string_and_empty_leaves_pass_through(self, leaf):
        result = redact(leaf)
        assert result == leaf
        assert type(result) is type(leaf)

    def test_numbers_that_look_like_pii_stay_numbers(self):
        data = {"phone": 5551234567, "id": 123456789}
        result = redact(data)
        assert result == data
        assert isinstance(result["phone"], int)

    def test_shape_is_preserved(self):
        data = {"list": ["a@b.com", 1, None, ["x"]], "obj": {"k": "v", "n": {}}}
        result = redact(data)
        assert len(result["list"]) == 4
        assert set(result["obj"]) == {"k", "n"}
        assert result["list"][1:] == [1, None, ["x"]]

    def test_tuple_becomes_list(self):
        assert redact(("a@b.com",)) == ["[REDACTED_em]"]


# -----------------------------------------------------------------------
# redact_envelope
# -----------------------------------------------------------------------


class TestRedactEnvelope:
    def test_redacts_by_default(self):
        assert redact_envelope({"note": "a@b.com"}) == {"data": {"note": "[REDACTED_em]"}}

    def test_sys_flag_skips_redaction(self):
        data = {"note": "a@b.com", "x": 1}
        assert redact_envelope(data, sys=True) == {"data": data}

    def test_sys_flag_returns_same_object(self):
        data = ["555-123-4567"]
        assert redact_envelope(data, sys=True)["data"] is data

    def test_null_data(self):
        assert redact_envelope(None) == {"data": None}
