import asyncio

from typer.testing import CliRunner
from unittest.mock import patch
from langchain_core.messages import AIMessage

from superprompt.cli import app
from superprompt.gateway import ModelGateway
from superprompt.models import PromptCreate
from superprompt.store import AsyncStore
from superprompt.taxonomy import PromptCategory

runner = CliRunner()


def _seed(db_path):
    async def _run():
        store = AsyncStore(db_path)
        await store.connect()
        await store.init_db()
        bucket = await store.ensure_default_bucket("alice")
        await store.create_prompt(
            "alice",
            PromptCreate(
                original_idea="Plan a product launch",
                super_prompt="You are a launch strategist...",
                bucket_id=bucket.id,
                category=PromptCategory.MARKETING,
            ),
        )
        await store.close()

    asyncio.run(_run())


def test_version():
    """Test the --version option."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "superprompt" in result.stdout


def test_init_db(tmp_path):
    db_path = str(tmp_path / "cli.db")
    result = runner.invoke(app, ["init-db", "--db", db_path])
    assert result.exit_code == 0
    assert "Database initialized" in result.stdout
    assert (tmp_path / "cli.db").exists()


def test_stats(tmp_path):
    db_path = str(tmp_path / "cli.db")
    _seed(db_path)

    result = runner.invoke(app, ["stats", "--user", "alice", "--db", db_path])
    assert result.exit_code == 0
    assert "Marketing" in result.stdout


def test_stats_empty(tmp_path):
    db_path = str(tmp_path / "cli.db")
    result = runner.invoke(app, ["stats", "--user", "nobody", "--db", db_path])
    assert result.exit_code == 0
    assert "No saved prompts found" in result.stdout


def test_export(tmp_path):
    db_path = str(tmp_path / "cli.db")
    output = tmp_path / "out.csv"
    _seed(db_path)

    result = runner.invoke(app, ["export", "--user", "alice", "--output", str(output), "--db", db_path])
    assert result.exit_code == 0
    assert "Plan a product launch" in output.read_text(encoding="utf-8")


def test_export_single_prompt(tmp_path):
    db_path = str(tmp_path / "cli.db")
    output = tmp_path / "out.csv"
    _seed(db_path)

    result = runner.invoke(app, ["export", "--user", "alice", "--prompt", "1", "--output", str(output), "--db", db_path])
    assert result.exit_code == 0
    assert "Plan a product launch" in output.read_text(encoding="utf-8")

    result = runner.invoke(app, ["export", "--user", "bob", "--prompt", "1", "--output", str(output), "--db", db_path])
    assert result.exit_code == 1
    assert "Prompt not found" in result.stdout


def test_classify_command(mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("offline")
    with patch("superprompt.cli.prompts.ModelGateway.from_settings", return_value=ModelGateway(lambda c: mock_llm)):
        result = runner.invoke(app, ["classify", "Write a blog post about AI safety for policy makers"])

    assert result.exit_code == 0
    assert "content-writing" in result.stdout
    assert "keyword_fallback" in result.stdout


def test_analyze_command_manual(mock_llm):
    with patch("superprompt.cli.prompts.ModelGateway.from_settings", return_value=ModelGateway(lambda c: mock_llm)):
        result = runner.invoke(app, ["analyze", "Write a poem", "--mode", "manual"])

    assert result.exit_code == 0
    assert "No questions for this mode" in result.stdout
    mock_llm.ainvoke.assert_not_called()


def test_generate_command(mock_llm):
    mock_llm.ainvoke.side_effect = [AIMessage(content="not json"), AIMessage(content="Final super prompt")]
    with patch("superprompt.cli.prompts.ModelGateway.from_settings", return_value=ModelGateway(lambda c: mock_llm)):
        result = runner.invoke(app, ["generate", "Write a poem for my mother"])

    assert result.exit_code == 0
    assert "Final super prompt" in result.stdout


def test_generate_command_failure(mock_llm):
    mock_llm.ainvoke.side_effect = [AIMessage(content="not json"), AIMessage(content="")]
    with patch("superprompt.cli.prompts.ModelGateway.from_settings", return_value=ModelGateway(lambda c: mock_llm)):
        result = runner.invoke(app, ["generate", "Write a poem for my mother"])

    assert result.exit_code == 1
    assert "Generation failed" in result.stdout
