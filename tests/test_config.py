"""Tests for client configuration from dicts, environment and YAML files."""

from __future__ import annotations

import pytest
import yaml

from storefront_contract.config import ClientConfig, load_config
from storefront_contract.core.errors import ConfigurationError


class TestClientConfig:
    def test_scheme_is_added(self):
        config = ClientConfig(store_domain="shop.example/", access_token="KEY")

        assert config.store_domain == "https://shop.example"
        assert config.base_url == "https://shop.example/store-api"

    def test_explicit_scheme_kept(self):
        config = ClientConfig(store_domain="http://localhost:8000", access_token="KEY")
        assert config.base_url == "http://localhost:8000/store-api"

    def test_store_api_headers(self):
        config = ClientConfig(store_domain="shop.example", access_token="KEY")

        assert config.auth_headers() == {"sw-access-key": "KEY"}
        assert config.with_context_token("ctx").auth_headers() == {
            "sw-access-key": "KEY",
            "sw-context-token": "ctx",
        }

    def test_admin_api_headers(self):
        config = ClientConfig(store_domain="shop.example", access_token="TOKEN", api_type="admin-api")

        assert config.base_url == "https://shop.example/admin-api"
        assert config.auth_headers() == {"Authorization": "Bearer TOKEN"}

    @pytest.mark.parametrize("kwargs", [
        {"store_domain": "", "access_token": "KEY"},
        {"store_domain": "shop.example", "access_token": ""},
        {"store_domain": "shop.example", "access_token": "KEY", "api_type": "sync-api"},
        {"store_domain": "shop.example", "access_token": "KEY", "timeout": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            ClientConfig(**kwargs)

    def test_with_context_token_returns_copy(self):
        config = ClientConfig(store_domain="shop.example", access_token="KEY")
        assert config.with_context_token("ctx") is not config
        assert config.context_token is None


class TestFromEnv:
    @pytest.fixture(autouse=True)
    def env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("STORE_DOMAIN", "ACCESS_TOKEN", "API_TYPE", "CONTEXT_TOKEN", "TIMEOUT"):
            monkeypatch.delenv(f"SHOPWARE_{name}", raising=False)
        return monkeypatch

    def test_reads_variables(self, env):
        env.setenv("SHOPWARE_STORE_DOMAIN", "shop.example")
        env.setenv("SHOPWARE_ACCESS_TOKEN", "KEY")
        env.setenv("SHOPWARE_TIMEOUT", "5")

        config = ClientConfig.from_env()

        assert config.base_url == "https://shop.example/store-api"
        assert config.access_token == "KEY"
        assert config.timeout == 5.0
        assert config.context_token is None

    def test_api_type_and_context_token(self, env):
        env.setenv("SHOPWARE_STORE_DOMAIN", "shop.example")
        env.setenv("SHOPWARE_ACCESS_TOKEN", "KEY")
        env.setenv("SHOPWARE_API_TYPE", "admin-api")
        env.setenv("SHOPWARE_CONTEXT_TOKEN", "ctx")

        config = ClientConfig.from_env()

        assert config.api_type == "admin-api"
        assert config.context_token == "ctx"

    def test_defaults(self, env):
        env.setenv("SHOPWARE_STORE_DOMAIN", "env.example")
        env.setenv("SHOPWARE_ACCESS_TOKEN", "ENVKEY")
        env.setenv("SHOPWARE_API_TYPE", "")

        config = ClientConfig.from_env()

        assert config.store_domain == "https://env.example"
        assert config.api_type == "store-api"
        assert config.timeout == 30.0

    def test_missing_token(self, env):
        env.setenv("SHOPWARE_STORE_DOMAIN", "shop.example")

        with pytest.raises(ConfigurationError, match="access_token"):
            ClientConfig.from_env()

    def test_invalid_timeout(self, env):
        env.setenv("SHOPWARE_STORE_DOMAIN", "shop.example")
        env.setenv("SHOPWARE_ACCESS_TOKEN", "KEY")
        env.setenv("SHOPWARE_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="timeout"):
            ClientConfig.from_env()

    def test_dotenv_file(self, env, tmp_path):
        (tmp_path / ".env").write_text("SHOPWARE_STORE_DOMAIN=dotenv.example\nSHOPWARE_ACCESS_TOKEN=DOTKEY\n")

        config = ClientConfig.from_env()

        assert config.store_domain == "https://dotenv.example"
        assert config.access_token == "DOTKEY"


class TestYaml:
    def test_save_and_load(self, tmp_path):
        path = tmp_path / "storefront.yaml"
        config = ClientConfig(store_domain="shop.example", access_token="KEY", context_token="ctx", timeout=12)

        config.save(path)

        assert yaml.safe_load(path.read_text())["store_domain"] == "https://shop.example"
        assert load_config(path) == config

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") is None

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "storefront.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_to_dict_omits_empty_context_token(self):
        data = ClientConfig(store_domain="shop.example", access_token="KEY").to_dict()
        assert "context_token" not in data
        assert ClientConfig.from_dict(data).to_dict() == data
