import pytest
from fastapi.testclient import TestClient

from superprompt.gateway import ModelGateway
from superprompt.store import AsyncStore
from superprompt.web_app import app, get_gateway, get_store

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def client(tmp_path, mock_llm):
    """TestClient with a temp database and the mock model."""
    db_file = str(tmp_path / "test.db")

    async def override_store():
        store = AsyncStore(db_file)
        await store.connect()
        await store.init_db()
        try:
            yield store
        finally:
            await store.close()

    app.dependency_overrides[get_store] = override_store
    app.dependency_overrides[get_gateway] = lambda: ModelGateway(lambda config: mock_llm)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _save(client, headers=ALICE, **overrides):
    body = {
        "originalIdea": "Write a blog post about AI safety",
        "superPrompt": "You are a policy writer...",
        "category": "content-writing",
        "subcategory": "blog-articles",
    }
    body.update(overrides)
    return client.post("/api/prompts", json=body, headers=headers)


def test_missing_user_is_unauthorized(client):
    response = client.get("/api/buckets")
    assert response.status_code == 401


def test_classify(client, reply_with):
    reply_with({"category": "software-development", "subcategory": "web-development"})
    response = client.post("/api/classify", json={"prompt": "Build a React dashboard"}, headers=ALICE)

    assert response.status_code == 200
    data = response.json()
    assert data["category"] == "software-development"
    assert data["subcategory"] == "web-development"
    assert data["confidence"] == 0.85


def test_analyze_rejects_bad_input(client, mock_llm):
    assert client.post("/api/analyze", json={"prompt": "  ", "mode": "normal"}, headers=ALICE).status_code == 400
    response = client.post("/api/analyze", json={"prompt": "Write a poem", "mode": "turbo"}, headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid analysis mode"}
    mock_llm.ainvoke.assert_not_called()


def test_analyze_ai_mode_shape(client, reply_with):
    reply_with({
        "questions": [{"question": f"Q{i}?", "suggestion": "e.g."} for i in range(4)],
        "autoAnswers": {"0": "Parents"},
    })
    response = client.post("/api/analyze", json={"prompt": "Write a poem", "mode": "ai"}, headers=ALICE)

    data = response.json()
    assert response.status_code == 200
    assert data["mode"] == "ai"
    assert len(data["questions"]) == 4
    assert data["autoAnswers"] == {"0": "Parents"}


def test_analyze_normal_mode_has_no_auto_answers(client, reply_with):
    reply_with("garbage")
    response = client.post("/api/analyze", json={"prompt": "Write a poem", "mode": "normal"}, headers=ALICE)
    data = response.json()
    assert len(data["questions"]) == 4
    assert "autoAnswers" not in data


def test_generate(client, reply_with):
    reply_with("The super prompt")
    response = client.post(
        "/api/generate",
        json={
            "initialPrompt": "Write a poem",
            "questionsAndAnswers": [{"question": "For whom?", "answer": "My mother"}],
        },
        headers=ALICE,
    )
    assert response.status_code == 200
    assert response.json() == {"superPrompt": "The super prompt"}


def test_generate_failure_is_502(client, reply_with):
    reply_with("")
    response = client.post("/api/generate", json={"initialPrompt": "Write a poem"}, headers=ALICE)
    assert response.status_code == 502
    assert response.json()["error"] == "Failed to generate super prompt: No response from AI model"


def test_generate_blank_prompt_is_400(client):
    response = client.post("/api/generate", json={"initialPrompt": " "}, headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid initial prompt provided"}


def test_ai_analyze_generate(client, reply_with):
    reply_with(
        {"questions": [{"question": f"Q{i}?"} for i in range(4)], "autoAnswers": {"0": "Parents"}},
        "Final prompt",
    )
    response = client.post("/api/ai-analyze-generate", json={"prompt": "Write a poem"}, headers=ALICE)
    data = response.json()
    assert data["superPrompt"] == "Final prompt"
    assert data["autoAnswers"] == {"0": "Parents"}
    assert data["mode"] == "ai"


def test_modes_and_categories(client):
    modes = client.get("/api/modes").json()
    assert [m["id"] for m in modes] == ["ai", "normal", "extensive", "manual"]

    categories = client.get("/api/categories").json()
    assert len(categories) == 10
    assert sum(len(c["subcategories"]) for c in categories) == 61


def test_buckets_crud(client):
    buckets = client.get("/api/buckets", headers=ALICE).json()
    assert [b["name"] for b in buckets] == ["Personal"]
    personal_id = buckets[0]["id"]

    created = client.post("/api/buckets", json={"name": "Work"}, headers=ALICE)
    assert created.status_code == 201
    work_id = created.json()["id"]

    assert client.post("/api/buckets", json={"name": "Work"}, headers=ALICE).status_code == 409

    renamed = client.put(f"/api/buckets/{work_id}", json={"name": "Office"}, headers=ALICE)
    assert renamed.json()["name"] == "Office"

    _save(client, bucketId=work_id)
    deleted = client.delete(f"/api/buckets/{work_id}?reassignTo={personal_id}", headers=ALICE)
    assert deleted.json() == {"success": True, "promptsMoved": 1}

    last = client.delete(f"/api/buckets/{personal_id}", headers=ALICE)
    assert last.status_code == 400
    assert last.json() == {"error": "Cannot delete your last bucket"}


def test_save_prompt_uses_default_bucket(client):
    response = _save(client)
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Write a blog post about AI safety"
    assert data["analysisMode"] == "normal"

    buckets = client.get("/api/buckets", headers=ALICE).json()
    assert data["bucketId"] == buckets[0]["id"]


def test_save_prompt_auto_classifies(client, mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("down")
    response = _save(client, category=None, subcategory=None)
    data = response.json()
    assert data["category"] == "content-writing"
    assert data["subcategory"] == "blog-articles"


def test_save_prompt_requires_fields(client):
    response = _save(client, superPrompt="")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_quick_save(client, mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("down")
    response = client.post("/api/prompts/quick-save", json={"promptText": "Draft a sales email"}, headers=ALICE)
    data = response.json()
    assert response.status_code == 201
    assert data["analysisMode"] == "manual"
    assert data["originalIdea"] == data["superPrompt"] == "Draft a sales email"


def test_prompts_are_private(client):
    prompt_id = _save(client).json()["id"]

    assert client.get("/api/prompts", headers=BOB).json() == []
    assert client.delete(f"/api/prompts/{prompt_id}", headers=BOB).status_code == 404

    listed = client.get("/api/prompts?search=blog", headers=ALICE).json()
    assert [p["id"] for p in listed] == [prompt_id]

    assert client.delete(f"/api/prompts/{prompt_id}", headers=ALICE).json() == {"success": True}
    assert client.get("/api/prompts", headers=ALICE).json() == []


def test_playground_and_answers(client, reply_with):
    prompt_id = _save(client).json()["id"]
    reply_with("An answer")

    result = client.post(
        "/api/playground/test",
        json={"promptId": prompt_id, "promptText": "You are a policy writer..."},
        headers=ALICE,
    )
    assert result.status_code == 200
    assert result.json()["answer"] == "An answer"

    denied = client.post(
        "/api/playground/test",
        json={"promptId": prompt_id, "promptText": "Hi"},
        headers=BOB,
    )
    assert denied.status_code == 404

    saved = client.post(
        "/api/prompt-answers",
        json={"promptId": prompt_id, "answerText": "An answer", "notes": "Solid"},
        headers=ALICE,
    )
    assert saved.status_code == 201

    answers = client.get(f"/api/prompt-answers?promptId={prompt_id}", headers=ALICE).json()
    assert [a["answerText"] for a in answers] == ["An answer"]


def test_category_stats(client):
    _save(client)
    stats = client.get("/api/stats/categories", headers=ALICE).json()
    assert stats[0]["category"] == "content-writing"
    assert stats[0]["count"] == 1


def test_export_csv(client):
    _save(client)
    response = client.get("/api/export", headers=ALICE)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]
    assert "Write a blog post about AI safety" in response.text


def test_export_single_prompt(client):
    first = _save(client).json()
    _save(client, originalIdea="Plan a product launch")

    response = client.get(f"/api/export?scope=prompt&promptId={first['id']}", headers=ALICE)
    assert response.status_code == 200
    assert "Write a blog post about AI safety" in response.text
    assert "Plan a product launch" not in response.text

    assert client.get(f"/api/export?scope=prompt&promptId={first['id']}", headers=BOB).status_code == 404


def test_export_scope_requires_id(client):
    response = client.get("/api/export?scope=prompt", headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "promptId required for prompt scope"}

    response = client.get("/api/export?scope=bucket", headers=ALICE)
    assert response.status_code == 400
    assert response.json() == {"error": "bucketId required for bucket scope"}


def test_export_bucket_scope(client):
    saved = _save(client).json()
    response = client.get(f"/api/export?scope=bucket&bucketId={saved['bucketId']}", headers=ALICE)
    assert response.status_code == 200
    assert "Write a blog post about AI safety" in response.text
    assert client.get(f"/api/export?scope=bucket&bucketId={saved['bucketId']}", headers=BOB).status_code == 404


def test_delete_prompt_answer(client):
    prompt_id = _save(client).json()["id"]
    answer = client.post(
        "/api/prompt-answers",
        json={"promptId": prompt_id, "answerText": "An answer"},
        headers=ALICE,
    ).json()

    response = client.delete(f"/api/prompt-answers?id={answer['id']}", headers=BOB)
    assert response.status_code == 404

    response = client.delete(f"/api/prompt-answers?id={answer['id']}", headers=ALICE)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/prompt-answers?promptId={prompt_id}", headers=ALICE).json() == []

    assert client.delete(f"/api/prompt-answers?id={answer['id']}", headers=ALICE).status_code == 404


def test_list_templates(client):
    templates = client.get("/api/templates").json()
    assert len(templates) == 12
    assert set(templates[0]) >= {"id", "category", "difficulty", "estimatedTime", "useCases", "popularity"}

    marketing = client.get("/api/templates?category=marketing-advertising").json()
    assert [t["id"] for t in marketing] == ["social-media-campaign", "email-marketing-sequence"]

    beginner_email = client.get("/api/templates?difficulty=beginner&search=EMAIL").json()
    assert [t["id"] for t in beginner_email] == ["newsletter-writer", "professional-email"]

    assert client.get("/api/templates?difficulty=expert").status_code == 422


def test_get_template(client):
    response = client.get("/api/templates/prd-generator")
    assert response.status_code == 200
    assert response.json()["title"] == "Product Requirements Document (PRD)"

    response = client.get("/api/templates/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Template not found"}
