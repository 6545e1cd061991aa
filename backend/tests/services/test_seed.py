"""Seed Script — file import into a database through the CLI entry point."""

import yaml

from structuresync.seed import main, run_seed


async def test_run_seed_creates_tables_and_imports(tmp_path, schema_document):
    path = tmp_path / "schema.yaml"
    path.write_text(yaml.safe_dump(schema_document), encoding="utf-8")
    url = f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"

    result = await run_seed(str(path), url, create_tables=True)
    assert result["imported"] == {"categories": 3, "properties": 5, "subobjects": 1}

    assert await run_seed(str(path), url) is None
    forced = await run_seed(str(path), url, force=True)
    assert forced["imported"]["categories"] == 3


def test_main_reports_invalid_file(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("categories: {}\n", encoding="utf-8")
    url = f"sqlite+aiosqlite:///{tmp_path / 'bad.db'}"
    code = main([str(path), "--database-url", url, "--create-tables", "--force"])
    assert code == 1
    assert "Missing required field: schemaVersion" in capsys.readouterr().err
