"""Database schema for saved prompts, buckets and playground answers."""

SCHEMA = """
CREATE TABLE IF NOT EXISTS buckets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    color TEXT NOT NULL,
    icon TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (user_id, name)
);

CREATE TABLE IF NOT EXISTS prompts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    original_idea TEXT NOT NULL,
    super_prompt TEXT NOT NULL,
    bucket_id INTEGER NOT NULL REFERENCES buckets(id),

    -- Classification (slugs from the fixed taxonomy)
    category TEXT NOT NULL DEFAULT 'general-other',
    subcategory TEXT,

    -- ai, normal, extensive, manual
    analysis_mode TEXT NOT NULL DEFAULT 'normal',

    questions TEXT,  -- JSON array of {question, suggestion}
    answers TEXT,  -- JSON object {index: answer}

    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS prompt_answers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    prompt_id INTEGER NOT NULL REFERENCES prompts(id) ON DELETE CASCADE,
    user_id TEXT NOT NULL,
    answer_text TEXT NOT NULL,
    notes TEXT,
    tokens_used INTEGER,
    generation_time_ms INTEGER,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_buckets_user ON buckets(user_id);
CREATE INDEX IF NOT EXISTS idx_prompts_user_created ON prompts(user_id, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_prompts_bucket ON prompts(bucket_id);
CREATE INDEX IF NOT EXISTS idx_prompt_answers_prompt ON prompt_answers(prompt_id, created_at DESC);
"""
