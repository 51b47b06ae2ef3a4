from __future__ import annotations

import json

import pytest
import responses

from page_control.cli import main

from tests._helpers import BASE_URL, CREATE_URL, FETCH_URL


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "permissions.json"
    path.write_text(json.dumps([{"page": "Bank", "url": "master/bank"}]), encoding="utf-8")
    return path


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGE_CONTROL_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("PAGE_CONTROL_ACCESS_TOKEN", "cli-token")
    monkeypatch.delenv("PAGE_CONTROL_TELEMETRY_ENABLED", raising=False)


def test_catalog_lists_console_pages(capsys) -> None:
    main(["catalog"])

    catalog = json.loads(capsys.readouterr().out)
    assert catalog[0] == {"title": "Company", "url": "/master/branch"}
    assert {"title": "UserType", "url": "/user-type"} in catalog


def test_catalog_from_navigation_file(tmp_path, capsys) -> None:
    nav = tmp_path / "nav.json"
    nav.write_text(json.dumps([{"title": "Tools", "url": "#", "items": [{"title": "Audit", "url": "/audit"}]}]))

    main(["--navigation-file", str(nav), "catalog"])

    assert json.loads(capsys.readouterr().out) == [{"title": "Audit", "url": "/audit"}]


def test_options_from_registry_file_work_offline(registry_file, capsys) -> None:
    main(["options", "--registry-file", str(registry_file)])

    options = json.loads(capsys.readouterr().out)
    assert options[0] == "All"
    assert "Bank" not in options
    assert "Company" in options


def test_grant_dry_run_prints_rows(registry_file, capsys) -> None:
    main(["grant", "--all", "--user-ids", "7", "--registry-file", str(registry_file), "--dry-run"])

    rows = json.loads(capsys.readouterr().out)
    assert rows[0] == {"page": "Company", "url": "master/branch", "userIds": "7", "status": "Active"}
    assert all(row["page"] != "Bank" for row in rows)


@responses.activate
def test_grant_single_page_submits_and_refreshes(api_env, capsys) -> None:
    responses.add(responses.GET, FETCH_URL, json=[{"page": "Bank", "url": "master/bank"}], status=200)
    responses.add(responses.POST, CREATE_URL, json={"code": 200, "msg": "Page control created"}, status=200)
    responses.add(responses.GET, FETCH_URL, json=[{"page": "Vessel", "url": "master/vessel"}], status=200)

    main(["grant", "--page", "Vessel", "--user-ids", "3"])

    out = json.loads(capsys.readouterr().out)
    assert out["created"] == 1
    assert out["message"] == "Page control created"
    assert out["permissions_refreshed"] is True
    assert out["navigate_to"] == "/userManagement"
    body = json.loads(responses.calls[1].request.body)
    assert body == {"usercontrol_data": [{"page": "Vessel", "url": "master/vessel", "userIds": "3", "status": "Active"}]}
    assert responses.calls[1].request.headers["Authorization"] == "Bearer cli-token"


@responses.activate
def test_grant_rejection_exits_with_error(api_env, registry_file, capsys) -> None:
    responses.add(responses.POST, CREATE_URL, json={"message": "Not allowed"}, status=403)

    with pytest.raises(SystemExit) as excinfo:
        main(["grant", "--page", "Vessel", "--registry-file", str(registry_file)])

    assert excinfo.value.code == 1
    assert json.loads(capsys.readouterr().out)["message"] == "Not allowed"


def test_unknown_page_exits_with_error(registry_file, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["grant", "--page", "Nope", "--registry-file", str(registry_file), "--dry-run"])

    assert excinfo.value.code == 1
    assert "Unknown page" in json.loads(capsys.readouterr().out)["message"]


def test_malformed_navigation_file_is_a_configuration_error(tmp_path, capsys) -> None:
    nav = tmp_path / "nav.json"
    nav.write_text("[{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--navigation-file", str(nav), "catalog"])

    assert excinfo.value.code == 2
    out = json.loads(capsys.readouterr().out)
    assert out["title"] == "Configuration error"
    assert "nav.json" in out["message"]


@responses.activate
def test_unrecognized_permissions_response_exits_with_error(api_env, capsys) -> None:
    responses.add(responses.GET, FETCH_URL, json={"rows": []}, status=200)

    with pytest.raises(SystemExit) as excinfo:
        main(["options"])

    assert excinfo.value.code == 1
    assert json.loads(capsys.readouterr().out)["title"] == "Page permissions unavailable"
