"""Tests for the console command line."""

from datetime import timedelta

import pytest

from task_manager.console import cli
from task_manager.console.client import GatewayClient
from task_manager.console.session import CredentialStore, Session
from task_manager.console.state import TaskConsole
from task_manager.utils.time import utc_now
from tests.helpers import future_deadline, task_payload


@pytest.fixture
def run(client, alice):
    """Parse argv and run it against an in-process console for Alice."""

    def _run(*argv: str) -> int:
        args = cli.build_parser().parse_args(list(argv))
        console = TaskConsole(GatewayClient(Session(token=alice.token), http=client))
        return cli.run_command(args, console)

    return _run


@pytest.mark.db
def test_list_empty(run, capsys):
    assert run("list") == cli.EXIT_OK
    assert "No tasks yet" in capsys.readouterr().out


@pytest.mark.db
def test_add_then_list(run, capsys):
    assert run("add", "--title", "Write report", "--deadline", future_deadline(days=2)) == cli.EXIT_OK
    assert "Created task #" in capsys.readouterr().out

    assert run("list") == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "Write report" in out
    assert "[pending" in out


@pytest.mark.db
def test_add_with_invalid_deadline(run, capsys):
    assert run("add", "--title", "Late", "--deadline", future_deadline(days=800)) == cli.EXIT_FAILED
    assert "deadline: The deadline field must be a date before one year from now." in capsys.readouterr().err


@pytest.mark.db
def test_edit_and_show(run, client, alice, capsys):
    task = client.post("/tasks", json=task_payload(), headers=alice.headers).json()["data"]

    assert run("edit", str(task["id"]), "--status", "completed") == cli.EXIT_OK
    assert "Status:   completed" in capsys.readouterr().out

    assert run("show", str(task["id"])) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert f"Task #{task['id']}: Write report" in out
    assert "Quarterly numbers" in out


@pytest.mark.db
def test_show_unknown_task(run, capsys):
    assert run("show", "9999") == cli.EXIT_FAILED
    assert "Task not found" in capsys.readouterr().err


@pytest.mark.db
def test_delete_with_yes(run, client, alice, count_tasks):
    task = client.post("/tasks", json=task_payload(), headers=alice.headers).json()["data"]
    assert run("delete", str(task["id"]), "--yes") == cli.EXIT_OK
    assert count_tasks() == 0


@pytest.mark.db
def test_delete_declined(run, client, alice, count_tasks, monkeypatch, capsys):
    task = client.post("/tasks", json=task_payload(), headers=alice.headers).json()["data"]
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")

    assert run("delete", str(task["id"])) == cli.EXIT_OK
    assert "Cancelled" in capsys.readouterr().out
    assert count_tasks() == 1


@pytest.mark.unit
def test_main_without_session(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("TASK_CONSOLE_CREDENTIALS_PATH", str(tmp_path / "credentials.json"))
    assert cli.main(["list"]) == cli.EXIT_NO_SESSION
    assert "Not logged in" in capsys.readouterr().err


@pytest.mark.unit
def test_main_logout_clears_session(tmp_path, monkeypatch):
    path = tmp_path / "credentials.json"
    CredentialStore(path).save(Session(token="abc"))
    monkeypatch.setenv("TASK_CONSOLE_CREDENTIALS_PATH", str(path))

    assert cli.main(["logout"]) == cli.EXIT_OK
    assert not path.exists()


@pytest.mark.db
def test_edit_status_of_overdue_task(client, alice, monkeypatch, capsys):
    task = client.post(
        "/tasks", json=task_payload(deadline=future_deadline(days=1)), headers=alice.headers
    ).json()["data"]

    def two_days_later():
        return utc_now() + timedelta(days=2)

    monkeypatch.setattr("task_manager.services.task_service.utc_now", two_days_later)
    console = TaskConsole(GatewayClient(Session(token=alice.token), http=client), clock=two_days_later)
    args = cli.build_parser().parse_args(["edit", str(task["id"]), "--status", "completed"])

    assert cli.run_command(args, console) == cli.EXIT_OK, capsys.readouterr().err
    assert "Status:   completed" in capsys.readouterr().out


@pytest.mark.db
def test_login_stores_token_and_user(client, alice, tmp_path, capsys):
    store = CredentialStore(tmp_path / "credentials.json")
    gateway = GatewayClient(Session(token=alice.token), http=client)

    assert cli.login(store, gateway) == cli.EXIT_OK
    assert "Logged in as Alice <alice@example.com>" in capsys.readouterr().out

    session = store.load()
    assert session.token == alice.token
    assert session.user.id == alice.id
    assert session.user.email == "alice@example.com"


@pytest.mark.db
def test_login_with_rejected_token_writes_nothing(client, tmp_path, capsys):
    path = tmp_path / "credentials.json"
    gateway = GatewayClient(Session(token="not-a-jwt"), http=client)

    assert cli.login(CredentialStore(path), gateway) == cli.EXIT_FAILED
    assert "Unauthenticated." in capsys.readouterr().err
    assert not path.exists()
