import importlib.util
import json
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SNAPSHOT = REPO_ROOT / "examples" / "snapshot.json"


@pytest.fixture
def script(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    spec = importlib.util.spec_from_file_location("audit_balance", REPO_ROOT / "scripts" / "audit_balance.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_json_output(script, capsys):
    assert script.main([str(SNAPSHOT), "--student", "s1", "--group", "g1", "--today", "2024-01-20", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["lessons_owed"] == 2
    assert data["audit_entries"][0]["lesson_id"] == "l1"


def test_export_writes_workbook(script, tmp_path, capsys):
    out = tmp_path / "audit.xlsx"

    script.main([str(SNAPSHOT), "--student", "s1", "--group", "g1", "--today", "2024-01-20", "--export", str(out)])

    assert out.exists()
    assert "Report written" in capsys.readouterr().out


def test_unknown_group_exits_with_message(script):
    with pytest.raises(SystemExit, match="Group g9 not found"):
        script.main([str(SNAPSHOT), "--student", "s1", "--group", "g9", "--today", "2024-01-20"])
