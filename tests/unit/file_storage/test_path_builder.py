"""Unit tests for StoragePathBuilder."""

import doctest
import os
import string
import time

import pytest
from loguru import logger

from file_storage.path_builder import StoragePathBuilder, clean_path
from tests.fixtures.factories import create_policy

ALPHANUMERIC = set(string.ascii_letters + string.digits)


@pytest.mark.unit
class TestGeneratePath:
    """Tests for directory rule expansion."""

    @pytest.mark.parametrize(("rule", "length"), [("{randomkey16}", 16), ("{randomkey8}", 8)])
    def test_random_keys(self, rule, length):
        builder = StoragePathBuilder(create_policy(dir_name_rule=rule))

        path = builder.generate_path(1, "/")

        assert len(path) == length
        assert set(path) <= ALPHANUMERIC

    def test_random_key_differs_between_calls(self):
        builder = StoragePathBuilder(create_policy(dir_name_rule="{randomkey8}"))

        first = builder.generate_path(1, "/")
        second = builder.generate_path(1, "/")

        assert first != second

    def test_timestamp(self):
        builder = StoragePathBuilder(create_policy(dir_name_rule="{timestamp}"))

        before = int(time.time())
        result = int(builder.generate_path(1, "/"))

        assert before <= result <= int(time.time())

    def test_uid(self):
        builder = StoragePathBuilder(create_policy(dir_name_rule="{uid}"))
        assert builder.generate_path(1, "/") == "1"

    @pytest.mark.parametrize(("rule", "length"), [("{datetime}", 14), ("{date}", 8), ("123{date}ss{datetime}", 27)])
    def test_time_lengths(self, rule, length):
        builder = StoragePathBuilder(create_policy(dir_name_rule=rule))
        assert len(builder.generate_path(1, "/")) == length

    def test_base_path_inserted_and_cleaned(self):
        """Test {path} is inserted and separators are normalized."""
        builder = StoragePathBuilder(create_policy(dir_name_rule="/1/{path}/456"))

        result = builder.generate_path(1, "/23")

        assert result in ("/1/23/456", "\\1\\23\\456")

    def test_default_rule(self, fixed_now):
        builder = StoragePathBuilder(create_policy(dir_name_rule="uploads/{uid}/{path}"))

        result = builder.generate_path(7, "/docs/2026", now=fixed_now)

        assert result == os.path.join("uploads", "7", "docs", "2026")

    def test_originname_not_available_in_dir_rule(self, fixed_now):
        builder = StoragePathBuilder(create_policy(dir_name_rule="a/{originname}"))
        assert builder.generate_path(1, "/", now=fixed_now) == os.path.join("a", "{originname}")

    def test_empty_rule(self):
        builder = StoragePathBuilder(create_policy(dir_name_rule=""))
        assert builder.generate_path(1, "/") == ""


@pytest.mark.unit
class TestCleanPath:
    """Tests for generated path normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/1//23//456", "/1/23/456"),
            ("//", "/"),
            ("a/./b/", "a/b"),
            ("a\\b", "a/b"),
            ("", ""),
        ],
    )
    def test_clean_path(self, raw, expected):
        assert clean_path(raw) == expected.replace("/", os.sep)

    @pytest.mark.skipif(os.sep != "/", reason="docstring example shows POSIX separators")
    def test_docstring_example(self):
        runner = doctest.DocTestRunner()
        for test in doctest.DocTestFinder().find(clean_path, globs={"clean_path": clean_path}):
            runner.run(test)

        result = runner.summarize(verbose=False)

        assert result.attempted == 1
        assert result.failed == 0


@pytest.mark.unit
class TestGenerateFileName:
    """Tests for file name rule expansion."""

    @pytest.mark.parametrize(("rule", "length"), [("{randomkey16}", 16), ("{randomkey8}", 8)])
    def test_random_keys(self, rule, length):
        builder = StoragePathBuilder(create_policy(file_name_rule=rule))
        assert len(builder.generate_file_name(1, "123.txt")) == length

    def test_random_key_differs_between_calls(self):
        builder = StoragePathBuilder(create_policy(file_name_rule="{randomkey8}"))

        first = builder.generate_file_name(1, "123.txt")
        second = builder.generate_file_name(1, "123.txt")

        assert first != second

    def test_uid_and_time_tokens(self):
        builder = StoragePathBuilder(create_policy(file_name_rule="{uid}"))
        assert builder.generate_file_name(1, "123.txt") == "1"

        builder = StoragePathBuilder(create_policy(file_name_rule="123{date}ss{datetime}"))
        assert len(builder.generate_file_name(1, "123.txt")) == 27

    def test_timestamp(self):
        builder = StoragePathBuilder(create_policy(file_name_rule="{timestamp}"))

        before = int(time.time())
        result = int(builder.generate_file_name(1, "123.txt"))

        assert before <= result <= int(time.time())

    def test_originname_local(self):
        builder = StoragePathBuilder(create_policy(policy_type="local", file_name_rule="123{originname}"))
        assert builder.generate_file_name(1, "123.txt") == "123123.txt"

    def test_originname_qiniu(self):
        builder = StoragePathBuilder(create_policy(policy_type="qiniu", file_name_rule="{uid}123{originname}"))
        assert builder.generate_file_name(1, "123.txt") == "1123123.txt"

    def test_originname_qiniu_empty(self):
        """Test empty original name on qiniu substitutes an empty string."""
        builder = StoragePathBuilder(create_policy(policy_type="qiniu", file_name_rule="{uid}123{originname}"))
        assert builder.generate_file_name(1, "") == "1123"

    def test_originname_oss_placeholder(self):
        builder = StoragePathBuilder(create_policy(policy_type="oss", file_name_rule="{uid}123{originname}"))
        assert builder.generate_file_name(1, "") == "1123${filename}"

    def test_originname_upyun_placeholder(self):
        builder = StoragePathBuilder(create_policy(policy_type="upyun", file_name_rule="{uid}123{originname}"))
        assert builder.generate_file_name(1, "") == "1123{filename}{.suffix}"

    def test_originname_empty_on_local(self):
        """Test empty original name on local substitutes an empty string."""
        builder = StoragePathBuilder(create_policy(policy_type="local", file_name_rule="{uid}_{originname}"))
        assert builder.generate_file_name(3, "") == "3_"

    def test_path_not_available_in_file_rule(self, fixed_now):
        builder = StoragePathBuilder(create_policy(file_name_rule="{path}{uid}"))
        assert builder.generate_file_name(1, "a.txt", now=fixed_now) == "{path}1"

    def test_auto_rename_disabled_keeps_origin(self):
        builder = StoragePathBuilder(create_policy(auto_rename=False, file_name_rule="{randomkey16}"))
        assert builder.generate_file_name(1, "report.pdf") == "report.pdf"


@pytest.mark.unit
class TestBackendDispatch:
    """Tests for upload URL and capability lookups."""

    def test_upload_url_local(self):
        builder = StoragePathBuilder(create_policy(policy_type="local", server="http://127.0.0.1"))
        assert builder.get_upload_url() == "http://127.0.0.1/api/v3/file/upload"

    def test_upload_url_remote(self):
        builder = StoragePathBuilder(create_policy(policy_type="remote", server="http://127.0.0.1"))
        assert builder.get_upload_url() == "http://127.0.0.1/api/v3/slave/upload"

    def test_upload_url_unknown(self):
        builder = StoragePathBuilder(create_policy(policy_type="unknown", server="http://127.0.0.1"))
        assert builder.get_upload_url() == "http://127.0.0.1"

    def test_upload_url_trailing_slash(self):
        builder = StoragePathBuilder(create_policy(policy_type="remote", server="http://10.0.0.2:5212/"))
        assert builder.get_upload_url() == "http://10.0.0.2:5212/api/v3/slave/upload"

    def test_directly_preview(self):
        assert StoragePathBuilder(create_policy(policy_type="local")).is_directly_preview() is True
        assert StoragePathBuilder(create_policy(policy_type="remote")).is_directly_preview() is False

    def test_path_generate_needed(self):
        assert StoragePathBuilder(create_policy(policy_type="qiniu")).is_path_generate_needed() is True
        assert StoragePathBuilder(create_policy(policy_type="remote")).is_path_generate_needed() is False
        assert StoragePathBuilder(create_policy(policy_type="unknown")).is_path_generate_needed() is False


@pytest.mark.unit
class TestResolutionLogging:
    """Tests for context bound to resolution logs."""

    @pytest.fixture
    def log_records(self):
        records = []
        handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
        yield records
        logger.remove(handler_id)

    def test_path_log_carries_context(self, log_records):
        builder = StoragePathBuilder(create_policy(policy_id=3, policy_type="oss", dir_name_rule="{uid}"))

        builder.generate_path(17, "/")

        extra = log_records[-1]["extra"]
        assert extra["policy_id"] == 3
        assert extra["user_id"] == 17
        assert extra["backend"] == "oss"

    def test_file_name_log_keeps_braces(self, log_records):
        """Test provider placeholders with braces are logged verbatim."""
        builder = StoragePathBuilder(create_policy(policy_type="upyun", file_name_rule="{uid}{originname}"))

        builder.generate_file_name(5, "")

        record = log_records[-1]
        assert record["message"] == "Generated file name: 5{filename}{.suffix}"
        assert record["extra"]["user_id"] == 5
        assert record["extra"]["backend"] == "upyun"
