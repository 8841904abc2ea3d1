"""Tests for the storefront-contract command line."""

from __future__ import annotations

import importlib
import json

import httpx
import pytest

from storefront_contract.cli import app
from storefront_contract.runtime.transport import HttpxTransport

cli_main = importlib.import_module("storefront_contract.cli.main")


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "storefront.yaml"
    path.write_text("store_domain: shop.example\naccess_token: SWSCTESTKEY\n")
    return path


@pytest.fixture
def http(monkeypatch):
    """Route the CLI's HTTP traffic to a handler set by the test."""
    state = {"requests": [], "response": httpx.Response(200, json={})}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["response"]

    def transport_factory(timeout: float = 30.0) -> HttpxTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxTransport(timeout=timeout, client=client)

    monkeypatch.setattr(cli_main, "HttpxTransport", transport_factory)
    return state


class TestOperations:
    def test_lists_all_keys(self, capsys):
        assert app(["operations"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert "readContext get /context" in lines
        assert "searchPage post /search  [added]" in lines
        assert "readCategory post /category/{navigationId}?slots  [overridden]" in lines

    def test_added_only(self, capsys):
        assert app(["operations", "--added"]) == 0
        assert capsys.readouterr().out.splitlines() == ["searchPage post /search  [added]"]

    def test_overridden_only(self, capsys):
        assert app(["operations", "--overridden"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 10
        assert all(line.endswith("[overridden]") for line in lines)


class TestDescribe:
    def test_describe_navigation(self, capsys):
        assert app(["describe", "readNavigation"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("readNavigation post /navigation/{activeId}/{rootId} sw-include-seo-urls")
        assert "sw-include-seo-urls (header, bool, optional)" in out
        assert "activeId (path, str, required)" in out
        assert "Body: NavigationCriteria (application/json, required)" in out
        assert "200: List[ExtendedCategory]" in out

    def test_describe_no_content(self, capsys):
        assert app(["describe", "deleteCart"]) == 0
        assert "204: -" in capsys.readouterr().out

    def test_describe_unknown(self, capsys):
        assert app(["describe", "readWishlist"]) == 1
        assert "Unknown operation" in capsys.readouterr().out


class TestInvoke:
    def test_prints_decoded_result(self, capsys, config_file, http):
        http["response"] = httpx.Response(200, json={"elements": [{"id": "p1", "name": "Shoe"}], "total": 1})

        code = app([
            "invoke", "searchPage",
            "--params", '{"search": "shoe", "limit": 10}',
            "--config", str(config_file),
            "--context-token", "ctx-1",
        ])

        assert code == 0
        request = http["requests"][0]
        assert str(request.url) == "https://shop.example/store-api/search"
        assert request.headers["sw-context-token"] == "ctx-1"
        assert json.loads(request.content) == {"search": "shoe", "limit": 10}

        output = json.loads(capsys.readouterr().out)
        assert output["elements"] == [{"id": "p1", "name": "Shoe"}]
        assert output["total"] == 1

    def test_structured_fault(self, capsys, config_file, http):
        http["response"] = httpx.Response(400, json={
            "errors": [{"code": "CHECKOUT__CART_INVALID_LINE_ITEM_QUANTITY", "messageKey": "product-out-of-stock",
                        "detail": "The product is out of stock."}],
        })

        code = app([
            "invoke", "addLineItem",
            "--params", '{"items": [{"referencedId": "p1", "quantity": 1}]}',
            "--config", str(config_file),
        ])

        assert code == 1
        out = capsys.readouterr().out
        assert "Error [structured_api]" in out
        assert "product-out-of-stock: The product is out of stock." in out

    def test_malformed_params(self, capsys, config_file, http):
        assert app(["invoke", "readCategory", "--params", "{}", "--config", str(config_file)]) == 1
        assert "Error [malformed_request]" in capsys.readouterr().out
        assert http["requests"] == []

    @pytest.mark.parametrize("params", ["{not json", "[1, 2]"])
    def test_invalid_params_json(self, capsys, params):
        assert app(["invoke", "readContext", "--params", params]) == 1
        assert "--params" in capsys.readouterr().out

    def test_missing_config_file(self, capsys, tmp_path):
        assert app(["invoke", "readContext", "--config", str(tmp_path / "missing.yaml")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_falls_back_to_environment(self, capsys, monkeypatch, tmp_path, http):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SHOPWARE_STORE_DOMAIN", "env.example")
        monkeypatch.setenv("SHOPWARE_ACCESS_TOKEN", "ENVKEY")
        monkeypatch.delenv("SHOPWARE_API_TYPE", raising=False)
        monkeypatch.delenv("SHOPWARE_TIMEOUT", raising=False)
        http["response"] = httpx.Response(200, json={"token": "ctx"})

        assert app(["invoke", "readContext"]) == 0
        assert http["requests"][0].headers["sw-access-key"] == "ENVKEY"

    def test_no_configuration(self, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("SHOPWARE_STORE_DOMAIN", raising=False)
        monkeypatch.delenv("SHOPWARE_ACCESS_TOKEN", raising=False)

        assert app(["invoke", "readContext"]) == 1
        assert "Error" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert app([]) == 0
    assert "storefront-contract" in capsys.readouterr().out
