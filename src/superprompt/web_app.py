"""FastAPI JSON API for the super prompt builder.

The acting user is identified by the opaque ``X-User-Id`` header. The store
and the model gateway are dependencies so they can be swapped out in tests.
"""

from __future__ import annotations

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from .analyze import analyze_prompt
from .classify import classify_prompt
from .config import get_settings
from .errors import DomainError, DomainValidationError, ModelGatewayError, NotFoundError
from .export import ExportScope, export_prompts_csv
from .gateway import ModelGateway
from .generate import generate_super_prompt, run_ai_mode
from .logging_config import get_logger
from .models import (
    AnalysisMode,
    AnswerCreate,
    ApiModel,
    PromptCreate,
    PromptFilters,
    QAPair,
    Question,
)
from .modes import MODE_METADATA
from .playground import run_playground
from .store import DEFAULT_BUCKET_COLOR, DEFAULT_BUCKET_ICON, AsyncStore
from .taxonomy import CATEGORIES, PromptCategory, PromptSubcategory, subcategories_for
from .templates import PromptTemplate, TemplateDifficulty, filter_templates, get_template

logger = get_logger(__name__)

app = FastAPI(title="Super Prompt Builder")
settings = get_settings()


# =============================================================================
# Request bodies
# =============================================================================


class PromptRequest(ApiModel):
    prompt: str = ""


class AnalyzeRequest(ApiModel):
    prompt: str = ""
    mode: str = AnalysisMode.NORMAL.value


class GenerateRequest(ApiModel):
    initial_prompt: str = ""
    questions_and_answers: list[QAPair] = []


class SavePromptRequest(ApiModel):
    """Save body; category and bucket are filled in when omitted."""

    original_idea: str = ""
    super_prompt: str = ""
    bucket_id: int | None = None
    title: str | None = None
    category: PromptCategory | None = None
    subcategory: PromptSubcategory | None = None
    analysis_mode: AnalysisMode = AnalysisMode.NORMAL
    questions: list[Question] = []
    answers: dict[int, str] = {}


class QuickSaveRequest(ApiModel):
    prompt_text: str = ""
    bucket_id: int | None = None
    title: str | None = None


class BucketRequest(ApiModel):
    name: str | None = None
    color: str | None = None
    icon: str | None = None


class PlaygroundRequest(ApiModel):
    prompt_id: int
    prompt_text: str = ""


# =============================================================================
# Dependencies
# =============================================================================


async def get_store():
    store = AsyncStore(settings.db_path)
    await store.connect()
    await store.init_db()
    try:
        yield store
    finally:
        await store.close()


def get_gateway() -> ModelGateway:
    return ModelGateway.from_settings(settings)


def get_current_user(x_user_id: str | None = Header(default=None)) -> str:
    """Resolve the acting user from the X-User-Id header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, status=exc.status_code, error=str(exc))
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


async def _resolve_bucket(store: AsyncStore, user_id: str, bucket_id: int | None) -> int:
    if bucket_id is not None:
        return bucket_id
    bucket = await store.ensure_default_bucket(user_id, settings.default_bucket_name)
    return bucket.id


# =============================================================================
# Core workflow
# =============================================================================


@app.post("/api/classify")
async def classify(
    body: PromptRequest,
    user_id: str = Depends(get_current_user),
    gateway: ModelGateway = Depends(get_gateway),
):
    result = await classify_prompt(body.prompt, gateway)
    return _dump(result)


@app.post("/api/analyze")
async def analyze(
    body: AnalyzeRequest,
    user_id: str = Depends(get_current_user),
    gateway: ModelGateway = Depends(get_gateway),
):
    if not body.prompt.strip():
        raise DomainValidationError("Invalid prompt provided")
    try:
        mode = AnalysisMode(body.mode)
    except ValueError:
        raise DomainValidationError("Invalid analysis mode") from None

    output = await analyze_prompt(body.prompt, mode, gateway)
    return output.model_dump(mode="json", by_alias=True, exclude_none=True)


@app.post("/api/generate")
async def generate(
    body: GenerateRequest,
    user_id: str = Depends(get_current_user),
    gateway: ModelGateway = Depends(get_gateway),
):
    try:
        super_prompt = await generate_super_prompt(body.initial_prompt, body.questions_and_answers, gateway)
    except ModelGatewayError as e:
        logger.error("generate_failed", user_id=user_id, error=str(e))
        return JSONResponse(status_code=502, content={"error": f"Failed to generate super prompt: {e}"})
    return {"superPrompt": super_prompt}


@app.post("/api/ai-analyze-generate")
async def ai_analyze_generate(
    body: PromptRequest,
    user_id: str = Depends(get_current_user),
    gateway: ModelGateway = Depends(get_gateway),
):
    try:
        result = await run_ai_mode(body.prompt, gateway)
    except ModelGatewayError as e:
        logger.error("ai_mode_failed", user_id=user_id, error=str(e))
        return JSONResponse(status_code=502, content={"error": f"Failed to generate super prompt: {e}"})
    return _dump(result)


@app.get("/api/modes")
async def list_modes():
    return [
        {
            "id": meta.id.value,
            "name": meta.name,
            "description": meta.description,
            "icon": meta.icon,
            "estimatedTime": meta.estimated_time,
            "questionCount": meta.question_count,
            "badge": meta.badge,
        }
        for meta in MODE_METADATA.values()
    ]


@app.get("/api/categories")
async def list_categories():
    return [
        {
            "id": category.id.value,
            "name": category.name,
            "description": category.description,
            "icon": category.icon,
            "subcategories": [
                {"id": sub.id.value, "name": sub.name, "description": sub.description, "icon": sub.icon}
                for sub in subcategories_for(category.id)
            ],
        }
        for category in CATEGORIES.values()
    ]


def _template_json(template: PromptTemplate) -> dict:
    return {
        "id": template.id,
        "title": template.title,
        "description": template.description,
        "category": template.category.value,
        "prompt": template.prompt,
        "icon": template.icon,
        "tags": list(template.tags),
        "difficulty": template.difficulty.value,
        "estimatedTime": template.estimated_time,
        "useCases": list(template.use_cases),
        "expectedOutput": template.expected_output,
        "popularity": template.popularity,
    }


@app.get("/api/templates")
async def list_templates(
    category: PromptCategory | None = None,
    difficulty: TemplateDifficulty | None = None,
    search: str | None = None,
):
    return [_template_json(t) for t in filter_templates(category, difficulty, search)]


@app.get("/api/templates/{template_id}")
async def get_template_by_id(template_id: str):
    template = get_template(template_id)
    if template is None:
        raise NotFoundError("Template not found")
    return _template_json(template)


# =============================================================================
# Saved prompts
# =============================================================================


@app.get("/api/prompts")
async def list_prompts(
    category: PromptCategory | None = None,
    subcategory: PromptSubcategory | None = None,
    bucket_id: int | None = Query(default=None, alias="bucketId"),
    search: str | None = None,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    filters = PromptFilters(category=category, subcategory=subcategory, bucket_id=bucket_id, search=search)
    prompts = await store.list_prompts(user_id, filters)
    return [_dump(p) for p in prompts]


@app.post("/api/prompts", status_code=201)
async def save_prompt(
    body: SavePromptRequest,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
    gateway: ModelGateway = Depends(get_gateway),
):
    if not body.original_idea.strip() or not body.super_prompt.strip():
        raise DomainValidationError("Missing required fields")

    category, subcategory = body.category, body.subcategory
    if category is None:
        classification = await classify_prompt(body.original_idea, gateway)
        category, subcategory = classification.category, classification.subcategory

    fields = PromptCreate(
        original_idea=body.original_idea,
        super_prompt=body.super_prompt,
        bucket_id=await _resolve_bucket(store, user_id, body.bucket_id),
        title=body.title,
        category=category,
        subcategory=subcategory,
        analysis_mode=body.analysis_mode,
        questions=body.questions,
        answers=body.answers,
    )
    prompt = await store.create_prompt(user_id, fields)
    return _dump(prompt)


@app.post("/api/prompts/quick-save", status_code=201)
async def quick_save_prompt(
    body: QuickSaveRequest,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
    gateway: ModelGateway = Depends(get_gateway),
):
    text = body.prompt_text.strip()
    if not text:
        raise DomainValidationError("Prompt text cannot be empty")

    classification = await classify_prompt(text, gateway)
    fields = PromptCreate(
        original_idea=text,
        super_prompt=text,
        bucket_id=await _resolve_bucket(store, user_id, body.bucket_id),
        title=body.title,
        category=classification.category,
        subcategory=classification.subcategory,
        analysis_mode=AnalysisMode.MANUAL,
    )
    prompt = await store.create_prompt(user_id, fields)
    return _dump(prompt)


@app.delete("/api/prompts/{prompt_id}")
async def delete_prompt(
    prompt_id: int,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    await store.delete_prompt(user_id, prompt_id)
    return {"success": True}


@app.get("/api/stats/categories")
async def category_stats(
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    return await store.get_category_stats(user_id)


# =============================================================================
# Buckets
# =============================================================================


@app.get("/api/buckets")
async def list_buckets(
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    await store.ensure_default_bucket(user_id, settings.default_bucket_name)
    buckets = await store.list_buckets(user_id)
    return [_dump(b) for b in buckets]


@app.post("/api/buckets", status_code=201)
async def create_bucket(
    body: BucketRequest,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    bucket = await store.create_bucket(
        user_id,
        body.name or "",
        color=body.color or DEFAULT_BUCKET_COLOR,
        icon=body.icon or DEFAULT_BUCKET_ICON,
    )
    return _dump(bucket)


@app.put("/api/buckets/{bucket_id}")
async def update_bucket(
    bucket_id: int,
    body: BucketRequest,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    bucket = await store.update_bucket(user_id, bucket_id, name=body.name, color=body.color, icon=body.icon)
    return _dump(bucket)


@app.delete("/api/buckets/{bucket_id}")
async def delete_bucket(
    bucket_id: int,
    reassign_to: int | None = Query(default=None, alias="reassignTo"),
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    moved = await store.delete_bucket(user_id, bucket_id, reassign_to)
    return {"success": True, "promptsMoved": moved}


# =============================================================================
# Playground
# =============================================================================


@app.post("/api/playground/test")
async def playground_test(
    body: PlaygroundRequest,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
    gateway: ModelGateway = Depends(get_gateway),
):
    await store.get_prompt(user_id, body.prompt_id)
    try:
        result = await run_playground(body.prompt_text, gateway)
    except ModelGatewayError as e:
        logger.error("playground_failed", user_id=user_id, prompt_id=body.prompt_id, error=str(e))
        return JSONResponse(status_code=502, content={"error": f"Failed to generate answer: {e}"})
    return _dump(result)


@app.get("/api/prompt-answers")
async def list_prompt_answers(
    prompt_id: int = Query(..., alias="promptId"),
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    answers = await store.list_answers(user_id, prompt_id)
    return [_dump(a) for a in answers]


@app.post("/api/prompt-answers", status_code=201)
async def save_prompt_answer(
    body: AnswerCreate,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    answer = await store.save_answer(user_id, body)
    return _dump(answer)


@app.delete("/api/prompt-answers")
async def delete_prompt_answer(
    answer_id: int = Query(..., alias="id"),
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    await store.delete_answer(user_id, answer_id)
    return {"success": True}


# =============================================================================
# Export
# =============================================================================


@app.get("/api/export")
async def export_csv(
    scope: ExportScope = ExportScope.ALL,
    prompt_id: int | None = Query(default=None, alias="promptId"),
    bucket_id: int | None = Query(default=None, alias="bucketId"),
    category: PromptCategory | None = None,
    search: str | None = None,
    user_id: str = Depends(get_current_user),
    store: AsyncStore = Depends(get_store),
):
    if scope == ExportScope.PROMPT:
        if prompt_id is None:
            raise DomainValidationError("promptId required for prompt scope")
        content = await export_prompts_csv(store, user_id, prompt_id=prompt_id)
    else:
        if scope == ExportScope.BUCKET:
            if bucket_id is None:
                raise DomainValidationError("bucketId required for bucket scope")
            await store.get_bucket(user_id, bucket_id)
        filters = PromptFilters(category=category, bucket_id=bucket_id, search=search)
        content = await export_prompts_csv(store, user_id, filters)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="super-prompts.csv"'},
    )
