"""
Tests for externalized broker properties

Validates:
- File values bound unchanged
- Env overlay beats file values
- Multi-file merge (later file wins)
- Missing keys, bad ports and missing files are fatal
"""

import pytest

from envprofiles.config import (
    BrokerProperties,
    ConfigError,
    InvalidConfigValue,
    MissingConfigKey,
    PropertyFileNotFound,
    PropertyFileUnreadable,
    env_var_name,
    load_broker_properties,
    read_property_files,
)
from envprofiles.jms import FakeJmsBroker


class TestSingleFile:

    def test_values_bound_unchanged(self, fixtures_dir):
        props = load_broker_properties(fixtures_dir / "jms.properties")

        assert props == BrokerProperties(
            server="10.10.10.123", port=3330, user="Ron", password="Burgundy"
        )

    def test_broker_exposes_bound_values(self, fixtures_dir):
        broker = FakeJmsBroker.from_properties(load_broker_properties(fixtures_dir / "jms.properties"))

        assert broker.url == "10.10.10.123"
        assert broker.port == 3330
        assert broker.user == "Ron"
        assert broker.password == "Burgundy"
        assert "Burgundy" not in repr(broker)
        assert broker.describe()["password"] == "******"


class TestEnvOverlay:

    def test_env_port_overrides_file(self, fixtures_dir, monkeypatch):
        monkeypatch.setenv("GURU_JMS_PORT", "4440")

        props = load_broker_properties(fixtures_dir / "jms.properties")

        assert props.port == 4440
        assert props.server == "10.10.10.123"

    def test_explicit_environ_mapping(self, fixtures_dir):
        props = load_broker_properties(
            fixtures_dir / "jms.properties", environ={"GURU_JMS_USER": "Brick"}
        )
        assert props.user == "Brick"
        assert props.password == "Burgundy"

    def test_env_only_without_files(self):
        env = {
            "GURU_JMS_SERVER": "broker.internal",
            "GURU_JMS_PORT": "61616",
            "GURU_JMS_USER": "Veronica",
            "GURU_JMS_PASSWORD": "Corningstone",
        }
        props = load_broker_properties(environ=env)
        assert props == BrokerProperties("broker.internal", 61616, "Veronica", "Corningstone")

    def test_custom_prefix(self, tmp_path):
        path = tmp_path / "alt.properties"
        path.write_text(
            "app.mq.server=localhost\napp.mq.port=5672\napp.mq.user=guest\napp.mq.password=guest\n",
            encoding="utf-8",
        )
        props = load_broker_properties(path, prefix="app.mq", environ={"APP_MQ_PORT": "5673"})
        assert props.server == "localhost"
        assert props.port == 5673

    def test_env_var_name(self):
        assert env_var_name("guru.jms.port") == "GURU_JMS_PORT"
        assert env_var_name("guru.jms.some-key") == "GURU_JMS_SOME_KEY"


class TestMultiFile:

    def test_later_file_wins(self, fixtures_dir):
        props = load_broker_properties(
            fixtures_dir / "jms-base.properties",
            fixtures_dir / "jms-secret.properties",
        )

        assert props.server == "10.10.10.123"
        assert props.port == 3330
        assert props.user == "Ron"
        assert props.password == "&5$)(*&#^!@!@#$"

    def test_file_order_matters(self, fixtures_dir):
        props = load_broker_properties(
            fixtures_dir / "jms-secret.properties",
            fixtures_dir / "jms-base.properties",
        )
        assert props.password == "changeme"

    def test_read_property_files_merges(self, fixtures_dir):
        values = read_property_files(
            fixtures_dir / "jms.properties", fixtures_dir / "jms-secret.properties"
        )
        assert values["guru.jms.user"] == "Ron"
        assert values["guru.jms.password"] == "&5$)(*&#^!@!@#$"


class TestErrors:

    def test_missing_key(self, tmp_path):
        path = tmp_path / "partial.properties"
        path.write_text("guru.jms.server=10.10.10.123\nguru.jms.port=3330\n", encoding="utf-8")

        with pytest.raises(MissingConfigKey) as exc_info:
            load_broker_properties(path)

        assert exc_info.value.key == "guru.jms.user"
        assert exc_info.value.env_var == "GURU_JMS_USER"
        assert "GURU_JMS_USER" in str(exc_info.value)
        assert isinstance(exc_info.value, ConfigError)

    def test_missing_key_satisfied_by_env(self, tmp_path, monkeypatch):
        path = tmp_path / "partial.properties"
        path.write_text("guru.jms.server=10.10.10.123\nguru.jms.port=3330\n", encoding="utf-8")
        monkeypatch.setenv("GURU_JMS_USER", "Ron")
        monkeypatch.setenv("GURU_JMS_PASSWORD", "Burgundy")

        assert load_broker_properties(path).user == "Ron"

    def test_key_without_value_counts_as_missing(self, tmp_path):
        path = tmp_path / "novalue.properties"
        path.write_text(
            "guru.jms.server=a\nguru.jms.port=1\nguru.jms.user=b\nguru.jms.password\n",
            encoding="utf-8",
        )
        with pytest.raises(MissingConfigKey) as exc_info:
            load_broker_properties(path)
        assert exc_info.value.key == "guru.jms.password"

    @pytest.mark.parametrize("port", ["abc", "33.5", "0", "70000", "", "3_330", "+3330", "-1", "\u0663\u0663"])
    def test_invalid_port(self, fixtures_dir, monkeypatch, port):
        monkeypatch.setenv("GURU_JMS_PORT", port)

        with pytest.raises(InvalidConfigValue) as exc_info:
            load_broker_properties(fixtures_dir / "jms.properties")
        assert exc_info.value.key == "guru.jms.port"

    def test_missing_file(self, tmp_path):
        with pytest.raises(PropertyFileNotFound) as exc_info:
            load_broker_properties(tmp_path / "nope.properties")
        assert "nope.properties" in str(exc_info.value)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.properties"
        path.write_bytes(b"guru.jms.server=\xff\xfe\n")

        with pytest.raises(PropertyFileUnreadable) as exc_info:
            read_property_files(path)

        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert isinstance(exc_info.value, ConfigError)

    def test_padded_port_accepted(self, fixtures_dir, monkeypatch):
        monkeypatch.setenv("GURU_JMS_PORT", " 4440 ")
        assert load_broker_properties(fixtures_dir / "jms.properties").port == 4440

    def test_no_sources_at_all(self):
        with pytest.raises(MissingConfigKey) as exc_info:
            load_broker_properties(environ={})
        assert exc_info.value.key == "guru.jms.server"
