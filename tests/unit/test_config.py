"""Tests for UploadConfig defaults, validation and option mapping."""

import pytest

from imgpost.config import DEFAULT_RESPONSE_PATH, OPTION_FIELDS, UploadConfig


class TestDefaults:
    def test_defaults(self):
        config = UploadConfig()
        assert config.enabled is False
        assert config.url is None
        assert config.max_size_mib == 10
        assert config.format == "multipart"
        assert config.field == "image"
        assert config.headers == []
        assert config.timeout_seconds == 30
        assert config.response_path == DEFAULT_RESPONSE_PATH == "json:$.data.link"
        assert config.metrics is None

    def test_headers_not_shared(self):
        a, b = UploadConfig(), UploadConfig()
        a.headers.append("X-One: 1")
        assert b.headers == []

    def test_max_size_bytes(self):
        assert UploadConfig(max_size_mib=3).max_size_bytes == 3 * 1024 * 1024


class TestValidation:
    @pytest.mark.parametrize("value", [0, -1])
    def test_max_size_must_be_positive(self, value):
        with pytest.raises(ValueError, match="max_size_mib"):
            UploadConfig(max_size_mib=value)

    @pytest.mark.parametrize("value", [0, -30])
    def test_timeout_must_be_positive(self, value):
        with pytest.raises(ValueError, match="timeout_seconds"):
            UploadConfig(timeout_seconds=value)

    def test_unknown_format_accepted(self):
        # Rejected per upload, not at construction.
        assert UploadConfig(format="xml").format == "xml"


class TestFromOptions:
    def test_all_options(self):
        config = UploadConfig.from_options({
            "upload-enable": True,
            "upload-url": "https://0x0.st",
            "upload-max-size": 5,
            "upload-format": "binary",
            "upload-field": "file",
            "upload-header": ["User-Agent: test", "X-Token: abc"],
            "upload-timeout": 10,
            "upload-response-path": "regex:https?://[^\\s\"]+",
        })
        assert config.enabled is True
        assert config.url == "https://0x0.st"
        assert config.max_size_mib == 5
        assert config.format == "binary"
        assert config.field == "file"
        assert config.headers == ["User-Agent: test", "X-Token: abc"]
        assert config.timeout_seconds == 10
        assert config.response_path == 'regex:https?://[^\\s"]+'

    def test_single_header_string(self):
        config = UploadConfig.from_options({"upload-header": "X-One: 1"})
        assert config.headers == ["X-One: 1"]

    def test_empty_mapping_gives_defaults(self):
        assert UploadConfig.from_options({}) == UploadConfig()

    def test_unknown_option_raises(self):
        with pytest.raises(ValueError, match="upload-retries"):
            UploadConfig.from_options({"upload-retries": 3})

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError, match="timeout_seconds"):
            UploadConfig.from_options({"upload-timeout": 0})

    def test_every_option_maps_to_a_field(self):
        names = set(UploadConfig.__dataclass_fields__)
        assert set(OPTION_FIELDS.values()) <= names


class TestRepr:
    def test_sensitive_header_masked(self):
        config = UploadConfig(headers=["Authorization: Client-ID abcdef123456"])
        text = repr(config)
        assert "abcdef123456" not in text
        assert "<redacted:...3456>" in text

    def test_plain_header_visible(self):
        assert "User-Agent: imgpost" in repr(UploadConfig(headers=["User-Agent: imgpost"]))

    def test_other_fields_visible(self):
        text = repr(UploadConfig(url="https://0x0.st"))
        assert text.startswith("UploadConfig(")
        assert "url='https://0x0.st'" in text
