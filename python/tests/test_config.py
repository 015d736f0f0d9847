import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from tag_search.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    SearchSettings,
    _convert_env_value,
    _deep_merge,
    load_config,
)
from tag_search.search_engine import TagSearchEngine
from .test_utils import BaseTestCase


class TestLoadConfig(BaseTestCase):
    """Test cases for configuration loading."""

    def setUp(self):
        super().setUp()
        self.temp_dir = tempfile.mkdtemp()
        self.original_cwd = os.getcwd()
        os.chdir(self.temp_dir)

        # Isolate from any TAG_SEARCH variables in the real environment
        clean_env = {
            key: value
            for key, value in os.environ.items()
            if not key.startswith("TAG_SEARCH")
        }
        self.env_patcher = patch.dict(os.environ, clean_env, clear=True)
        self.env_patcher.start()

    def tearDown(self):
        self.env_patcher.stop()
        os.chdir(self.original_cwd)
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        super().tearDown()

    def _write(self, name, content):
        path = os.path.join(self.temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_defaults_without_config_file(self):
        self.assertEqual(load_config(), DEFAULT_CONFIG)

    def test_yaml_file_is_merged_over_defaults(self):
        path = self._write("custom.yml", "suggestions:\n  default_limit: 8\n")

        config = load_config(path)

        self.assertEqual(config["suggestions"]["default_limit"], 8)
        self.assertEqual(config["suggestions"]["vocabulary_limit"], 10)
        self.assertEqual(config["tags"], DEFAULT_CONFIG["tags"])

    def test_engine_from_config_with_bad_value_uses_default(self):
        path = self._write("bad.yml", "suggestions:\n  default_limit: lots\n")

        engine = TagSearchEngine.from_config(path)

        self.assertEqual(engine.settings.suggestion_limit, 5)

    def test_default_file_in_working_directory(self):
        self._write("tag-search.yml", "logging:\n  level: DEBUG\n")

        self.assertEqual(load_config()["logging"]["level"], "DEBUG")

    def test_config_path_from_environment(self):
        path = self._write("env.yml", "tags:\n  max_length: 30\n")
        os.environ[CONFIG_ENV_VAR] = path

        self.assertEqual(load_config()["tags"]["max_length"], 30)

    def test_invalid_yaml_falls_back_to_defaults(self):
        path = self._write("broken.yml", "tags: [unclosed\n")

        self.assertEqual(load_config(path), DEFAULT_CONFIG)

    def test_non_mapping_yaml_falls_back_to_defaults(self):
        path = self._write("list.yml", "- a\n- b\n")

        self.assertEqual(load_config(path), DEFAULT_CONFIG)

    def test_missing_file_falls_back_to_defaults(self):
        missing = os.path.join(self.temp_dir, "missing.yml")

        self.assertEqual(load_config(missing), DEFAULT_CONFIG)

    def test_environment_overrides(self):
        os.environ["TAG_SEARCH__SUGGESTIONS__DEFAULT_LIMIT"] = "7"
        os.environ["TAG_SEARCH__LOGGING__LEVEL"] = "debug"

        config = load_config()

        self.assertEqual(config["suggestions"]["default_limit"], 7)
        self.assertEqual(config["logging"]["level"], "debug")

    def test_malformed_environment_keys_are_ignored(self):
        os.environ["TAG_SEARCH__LOGGING"] = "x"
        os.environ["TAG_SEARCH__TAGS____MAX_LENGTH"] = "1"

        self.assertEqual(load_config(), DEFAULT_CONFIG)

    def test_defaults_are_not_mutated(self):
        os.environ["TAG_SEARCH__TAGS__MAX_LENGTH"] = "12"

        load_config()

        self.assertEqual(DEFAULT_CONFIG["tags"]["max_length"], 50)


class TestConfigHelpers(BaseTestCase):
    def test_deep_merge_recurses_into_sections(self):
        merged = _deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})

        self.assertEqual(merged, {"a": {"x": 1, "y": 3}, "b": 1, "c": 4})

    def test_convert_env_value(self):
        self.assertIs(_convert_env_value("true"), True)
        self.assertIs(_convert_env_value("Off"), False)
        self.assertEqual(_convert_env_value("12"), 12)
        self.assertEqual(_convert_env_value("2.5"), 2.5)
        self.assertEqual(_convert_env_value("INFO"), "INFO")


class TestSearchSettings(BaseTestCase):
    def test_from_default_config(self):
        settings = SearchSettings.from_config(DEFAULT_CONFIG)

        self.assertEqual(settings, SearchSettings())

    def test_from_partial_config(self):
        settings = SearchSettings.from_config(
            {"suggestions": {"default_limit": "3"}, "logging": {"level": "INFO"}}
        )

        self.assertEqual(settings.suggestion_limit, 3)
        self.assertEqual(settings.vocabulary_limit, 10)
        self.assertEqual(settings.max_tag_length, 50)
        self.assertEqual(settings.log_level, "INFO")

    def test_invalid_values_keep_defaults(self):
        config = {
            "tags": {"max_length": "long", "max_per_record": None},
            "suggestions": {"default_limit": "lots", "vocabulary_limit": 4},
        }

        with patch("tag_search.config.logger") as mock_logger:
            settings = SearchSettings.from_config(config)

        self.assertEqual(settings.max_tag_length, 50)
        self.assertEqual(settings.max_tags_per_record, 20)
        self.assertEqual(settings.suggestion_limit, 5)
        self.assertEqual(settings.vocabulary_limit, 4)
        self.assertEqual(mock_logger.warning.call_count, 3)

    def test_non_mapping_section_is_ignored(self):
        settings = SearchSettings.from_config({"tags": 7, "suggestions": ["x"]})

        self.assertEqual(settings, SearchSettings())


if __name__ == "__main__":
    unittest.main()
