"""Fixed two-level prompt taxonomy.

Categories and subcategories are defined once here and never change at
runtime. Declaration order matters: it is the tie-break order for keyword
scoring and decides which subcategory is a category's default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PromptCategory(str, Enum):
    """Top-level prompt categories."""

    SOFTWARE_DEV = "software-development"
    CONTENT_WRITING = "content-writing"
    MARKETING = "marketing-advertising"
    SEO_RESEARCH = "seo-research"
    BUSINESS_COMM = "business-communication"
    EDUCATION = "education-learning"
    CREATIVE_DESIGN = "creative-design"
    DATA_ANALYTICS = "data-analytics"
    PRODUCTIVITY = "productivity-planning"
    GENERAL = "general-other"


class PromptSubcategory(str, Enum):
    """Second-level prompt categories, grouped by parent."""

    # Software Development
    AI_ML_DEV = "ai-ml-development"
    WEB_DEV = "web-development"
    MOBILE_DEV = "mobile-development"
    DATABASE_BACKEND = "database-backend"
    DEVOPS_INFRA = "devops-infrastructure"
    TESTING_QA = "testing-quality"
    DOCS_ARCH = "docs-architecture"

    # Content Writing
    BLOG_ARTICLES = "blog-articles"
    CREATIVE_FICTION = "creative-fiction"
    JOURNALISM = "journalism-news"
    TECHNICAL_WRITING = "technical-writing"
    COPYWRITING = "copywriting"
    SCRIPTS = "scripts-screenplays"

    # Marketing & Advertising
    SOCIAL_MEDIA = "social-media"
    EMAIL_MARKETING = "email-marketing"
    CONTENT_MARKETING = "content-marketing"
    PAID_ADS = "paid-advertising"
    BRAND_STRATEGY = "brand-strategy"
    GROWTH_ANALYTICS = "growth-analytics"
    INFLUENCER = "influencer-marketing"

    # SEO & Research
    KEYWORD_RESEARCH = "keyword-research"
    ON_PAGE_SEO = "on-page-seo"
    LINK_BUILDING = "link-building"
    TECHNICAL_SEO = "technical-seo"
    COMPETITIVE = "competitive-analysis"

    # Business Communication
    PROF_EMAILS = "professional-emails"
    PRESENTATIONS = "presentations"
    REPORTS_DOCS = "reports-docs"
    PROPOSALS = "proposals-contracts"
    MEETINGS = "meeting-materials"
    CLIENT_COMM = "client-communication"

    # Education & Learning
    COURSE_CONTENT = "course-content"
    TUTORIALS = "tutorials"
    EDU_VIDEOS = "educational-videos"
    STUDY_GUIDES = "study-guides"
    LESSON_PLANS = "lesson-plans"
    ASSESSMENTS = "assessments"

    # Creative & Design
    UI_UX = "ui-ux-design"
    GRAPHIC_DESIGN = "graphic-design"
    BRANDING = "branding-identity"
    WEB_DESIGN = "web-design"
    VISUAL_CONCEPTS = "visual-concepts"
    ILLUSTRATION = "illustration-art"
    MOTION_DESIGN = "motion-design"

    # Data & Analytics
    DATA_ANALYSIS = "data-analysis"
    DATA_VIZ = "data-visualization"
    STATISTICS = "statistical-analysis"
    BUSINESS_INTEL = "business-intelligence"
    DATA_SCIENCE = "data-science-ml"
    REPORTING = "reporting-dashboards"

    # Productivity & Planning
    TASK_MGMT = "task-management"
    PROJECT_PLAN = "project-planning"
    GOALS_OKRS = "goals-okrs"
    BRAINSTORMING = "brainstorming"
    TIME_MGMT = "time-management"
    WORKFLOW = "workflow-optimization"

    # General & Other
    MISC = "miscellaneous"
    MULTI_CAT = "multi-category"
    CONVERSATIONAL = "conversational"
    EXPLORATORY = "exploratory"
    UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class CategoryInfo:
    """Display and matching metadata for a category."""

    id: PromptCategory
    name: str
    description: str
    icon: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class SubcategoryInfo:
    """Display and matching metadata for a subcategory."""

    id: PromptSubcategory
    name: str
    description: str
    parent: PromptCategory
    icon: str
    keywords: tuple[str, ...]


def _cat(id, name, description, icon, keywords):
    return id, CategoryInfo(id, name, description, icon, tuple(keywords))


def _sub(id, name, description, parent, icon, keywords):
    return id, SubcategoryInfo(id, name, description, parent, icon, tuple(keywords))


_C = PromptCategory
_S = PromptSubcategory

CATEGORIES: Mapping[PromptCategory, CategoryInfo] = MappingProxyType(dict([
    _cat(_C.SOFTWARE_DEV, "Software Development",
         "Code generation, debugging, architecture, technical documentation", "Code2",
         ["code", "programming", "debug", "function", "API", "database",
          "algorithm", "refactor", "bug", "test", "software", "development",
          "framework", "library", "git", "docker", "deployment", "backend",
          "frontend", "fullstack", "javascript", "python", "java", "react",
          "node", "typescript", "sql", "mongodb", "kubernetes", "CI/CD"]),
    _cat(_C.CONTENT_WRITING, "Content Writing",
         "Blog posts, articles, creative writing, storytelling", "PenTool",
         ["write", "article", "blog", "story", "content", "creative",
          "narrative", "essay", "post", "author", "paragraph", "draft",
          "edit", "copy", "headline", "body", "fiction", "poetry",
          "journalism", "publication", "manuscript", "novel", "screenplay"]),
    _cat(_C.MARKETING, "Marketing & Advertising",
         "Campaign ideas, ad copy, social media, branding", "TrendingUp",
         ["marketing", "advertising", "campaign", "brand", "social media",
          "ad", "promotion", "audience", "customer", "engagement",
          "conversion", "viral", "influencer", "product launch", "CTR",
          "ROI", "funnel", "lead generation", "email marketing", "PPC",
          "Facebook", "Instagram", "LinkedIn", "Twitter", "TikTok"]),
    _cat(_C.SEO_RESEARCH, "SEO & Research",
         "Keyword research, optimization, competitor analysis", "Search",
         ["SEO", "keyword", "search engine", "ranking", "optimization",
          "backlink", "meta", "title tag", "competitor analysis", "research",
          "Google", "traffic", "SERP", "domain authority", "analytics",
          "organic", "on-page", "off-page", "link building", "content strategy"]),
    _cat(_C.BUSINESS_COMM, "Business Communication",
         "Emails, proposals, presentations, reports", "Mail",
         ["email", "business", "proposal", "presentation", "report",
          "memo", "meeting", "communication", "professional", "letter",
          "corporate", "executive", "stakeholder", "client", "B2B",
          "pitch", "RFP", "contract", "agreement", "minutes", "summary"]),
    _cat(_C.EDUCATION, "Education & Learning",
         "Tutorials, explanations, lesson plans, teaching", "GraduationCap",
         ["education", "learning", "teach", "tutorial", "explain",
          "lesson", "study", "course", "training", "student",
          "instructor", "curriculum", "pedagogy", "quiz", "exam",
          "educational", "workshop", "seminar", "syllabus", "assessment"]),
    _cat(_C.CREATIVE_DESIGN, "Creative & Design",
         "UI/UX, graphic design, visual concepts, branding", "Palette",
         ["design", "creative", "visual", "UI", "UX", "interface",
          "graphic", "layout", "color", "typography", "logo",
          "brand identity", "mockup", "wireframe", "aesthetic", "artistic",
          "Figma", "Photoshop", "illustration", "icon", "prototype"]),
    _cat(_C.DATA_ANALYTICS, "Data & Analytics",
         "Data analysis, visualization, statistical insights", "BarChart3",
         ["data", "analytics", "statistics", "analysis", "chart",
          "graph", "visualization", "metrics", "KPI", "dashboard",
          "insight", "trend", "forecast", "dataset", "SQL", "query",
          "reporting", "BI", "business intelligence", "data science",
          "machine learning", "pandas", "excel", "tableau", "power bi"]),
    _cat(_C.PRODUCTIVITY, "Productivity & Planning",
         "Task organization, project planning, brainstorming", "ListTodo",
         ["productivity", "planning", "organize", "task", "project",
          "schedule", "agenda", "brainstorm", "strategy", "goal",
          "timeline", "workflow", "management", "prioritize", "roadmap",
          "kanban", "scrum", "agile", "sprint", "milestone", "OKR",
          "time management", "to-do", "checklist", "calendar"]),
    _cat(_C.GENERAL, "General & Other",
         "Miscellaneous or multi-category prompts", "HelpCircle",
         ["general", "miscellaneous", "other", "various", "mixed",
          "multiple", "diverse", "uncategorized", "general purpose"]),
]))

SUBCATEGORIES: Mapping[PromptSubcategory, SubcategoryInfo] = MappingProxyType(dict([
    # Software Development
    _sub(_S.AI_ML_DEV, "AI & ML Development", "Machine learning models, AI algorithms, data science",
         _C.SOFTWARE_DEV, "🤖", ["ai", "machine learning", "neural network", "tensorflow", "pytorch"]),
    _sub(_S.WEB_DEV, "Web Development", "Frontend, backend, full-stack web applications",
         _C.SOFTWARE_DEV, "🌐", ["react", "javascript", "html", "css", "nodejs", "web app"]),
    _sub(_S.MOBILE_DEV, "Mobile Development", "iOS, Android, React Native, Flutter apps",
         _C.SOFTWARE_DEV, "📱", ["ios", "android", "react native", "flutter", "mobile app"]),
    _sub(_S.DATABASE_BACKEND, "Database & Backend", "Database design, API development, server architecture",
         _C.SOFTWARE_DEV, "🗄️", ["database", "api", "backend", "sql", "nosql", "server"]),
    _sub(_S.DEVOPS_INFRA, "DevOps & Infrastructure", "CI/CD, cloud services, containerization, deployment",
         _C.SOFTWARE_DEV, "⚙️", ["devops", "docker", "kubernetes", "aws", "ci/cd", "deployment"]),
    _sub(_S.TESTING_QA, "Testing & Quality", "Unit tests, integration tests, QA processes",
         _C.SOFTWARE_DEV, "🧪", ["testing", "qa", "unit test", "integration", "quality assurance"]),
    _sub(_S.DOCS_ARCH, "Documentation & Architecture", "Technical docs, system design, architecture planning",
         _C.SOFTWARE_DEV, "📚", ["documentation", "architecture", "system design", "tech docs"]),

    # Content Writing
    _sub(_S.BLOG_ARTICLES, "Blog Posts & Articles", "Blog content, online articles, web copy",
         _C.CONTENT_WRITING, "📝", ["blog", "article", "web content", "online writing"]),
    _sub(_S.CREATIVE_FICTION, "Creative & Fiction", "Stories, novels, creative writing, fiction",
         _C.CONTENT_WRITING, "✨", ["story", "fiction", "creative writing", "novel", "narrative"]),
    _sub(_S.JOURNALISM, "Journalism & News", "News articles, interviews, investigative pieces",
         _C.CONTENT_WRITING, "📰", ["news", "journalism", "interview", "investigative", "reporter"]),
    _sub(_S.TECHNICAL_WRITING, "Technical Writing", "Technical documentation, how-to guides, manuals",
         _C.CONTENT_WRITING, "⚡", ["technical writing", "documentation", "manual", "how-to"]),
    _sub(_S.COPYWRITING, "Copywriting", "Sales copy, marketing copy, persuasive writing",
         _C.CONTENT_WRITING, "💰", ["copywriting", "sales copy", "marketing copy", "persuasive"]),
    _sub(_S.SCRIPTS, "Scripts & Screenplays", "Video scripts, screenplays, dialogue writing",
         _C.CONTENT_WRITING, "🎬", ["script", "screenplay", "dialogue", "video script"]),

    # Marketing & Advertising
    _sub(_S.SOCIAL_MEDIA, "Social Media Marketing", "Social posts, engagement strategies, platform-specific content",
         _C.MARKETING, "📱", ["social media", "facebook", "instagram", "twitter", "linkedin"]),
    _sub(_S.EMAIL_MARKETING, "Email Marketing", "Email campaigns, newsletters, drip sequences",
         _C.MARKETING, "📧", ["email marketing", "newsletter", "email campaign", "drip sequence"]),
    _sub(_S.CONTENT_MARKETING, "Content Marketing", "Content strategy, editorial calendars, content planning",
         _C.MARKETING, "📈", ["content marketing", "content strategy", "editorial calendar"]),
    _sub(_S.PAID_ADS, "Paid Advertising", "PPC campaigns, ad copy, display ads, sponsored content",
         _C.MARKETING, "💸", ["ppc", "paid ads", "ad copy", "google ads", "facebook ads"]),
    _sub(_S.BRAND_STRATEGY, "Brand Strategy", "Brand positioning, messaging, identity development",
         _C.MARKETING, "🎯", ["branding", "brand strategy", "positioning", "messaging"]),
    _sub(_S.GROWTH_ANALYTICS, "Growth & Analytics", "Growth hacking, marketing analytics, performance tracking",
         _C.MARKETING, "📊", ["growth hacking", "analytics", "marketing metrics", "conversion"]),
    _sub(_S.INFLUENCER, "Influencer Marketing", "Influencer partnerships, creator content, collaborations",
         _C.MARKETING, "⭐", ["influencer", "creator", "partnership", "collaboration"]),

    # SEO & Research
    _sub(_S.KEYWORD_RESEARCH, "Keyword Research", "Keyword analysis, search intent, competition research",
         _C.SEO_RESEARCH, "🔍", ["keyword research", "search intent", "keyword analysis"]),
    _sub(_S.ON_PAGE_SEO, "On-Page SEO", "Content optimization, meta tags, internal linking",
         _C.SEO_RESEARCH, "📄", ["on-page seo", "meta tags", "content optimization", "internal linking"]),
    _sub(_S.LINK_BUILDING, "Link Building", "Backlink strategies, outreach, link acquisition",
         _C.SEO_RESEARCH, "🔗", ["link building", "backlinks", "outreach", "link acquisition"]),
    _sub(_S.TECHNICAL_SEO, "Technical SEO", "Site speed, crawling, indexing, technical optimization",
         _C.SEO_RESEARCH, "⚙️", ["technical seo", "site speed", "crawling", "indexing"]),
    _sub(_S.COMPETITIVE, "Competitive Analysis", "Competitor research, market analysis, SWOT analysis",
         _C.SEO_RESEARCH, "🎯", ["competitor analysis", "market research", "competitive intelligence"]),

    # Business Communication
    _sub(_S.PROF_EMAILS, "Professional Emails", "Business emails, client communication, formal correspondence",
         _C.BUSINESS_COMM, "📧", ["professional email", "business communication", "formal email"]),
    _sub(_S.PRESENTATIONS, "Presentations", "Slide decks, pitch presentations, speaking engagements",
         _C.BUSINESS_COMM, "📊", ["presentation", "slide deck", "pitch deck", "speaking"]),
    _sub(_S.REPORTS_DOCS, "Reports & Documents", "Business reports, white papers, formal documents",
         _C.BUSINESS_COMM, "📄", ["business report", "white paper", "formal document", "analysis"]),
    _sub(_S.PROPOSALS, "Proposals & Contracts", "Project proposals, contracts, agreements, RFPs",
         _C.BUSINESS_COMM, "📋", ["proposal", "contract", "agreement", "rfp", "project proposal"]),
    _sub(_S.MEETINGS, "Meeting Materials", "Agendas, meeting notes, action items, summaries",
         _C.BUSINESS_COMM, "🤝", ["meeting agenda", "meeting notes", "action items", "meeting summary"]),
    _sub(_S.CLIENT_COMM, "Client Communication", "Client updates, status reports, relationship management",
         _C.BUSINESS_COMM, "👥", ["client communication", "client update", "status report"]),

    # Education & Learning
    _sub(_S.COURSE_CONTENT, "Course Content", "Online courses, curriculum design, educational modules",
         _C.EDUCATION, "🎓", ["course content", "curriculum", "online course", "educational module"]),
    _sub(_S.TUTORIALS, "Tutorials & How-To", "Step-by-step guides, instructional content, walkthroughs",
         _C.EDUCATION, "📚", ["tutorial", "how-to guide", "step-by-step", "instructional"]),
    _sub(_S.EDU_VIDEOS, "Educational Videos", "Video scripts, educational content, learning videos",
         _C.EDUCATION, "🎥", ["educational video", "video script", "learning video", "explainer"]),
    _sub(_S.STUDY_GUIDES, "Study Guides", "Study materials, exam prep, reference guides",
         _C.EDUCATION, "📖", ["study guide", "exam prep", "study materials", "reference guide"]),
    _sub(_S.LESSON_PLANS, "Lesson Plans", "Teaching plans, classroom activities, educational objectives",
         _C.EDUCATION, "📝", ["lesson plan", "teaching plan", "classroom activity", "education"]),
    _sub(_S.ASSESSMENTS, "Assessments & Quizzes", "Tests, quizzes, evaluation methods, rubrics",
         _C.EDUCATION, "✅", ["assessment", "quiz", "test", "evaluation", "rubric"]),

    # Creative & Design
    _sub(_S.UI_UX, "UI/UX Design", "User interface design, user experience, wireframes",
         _C.CREATIVE_DESIGN, "🎨", ["ui design", "ux design", "wireframe", "user interface"]),
    _sub(_S.GRAPHIC_DESIGN, "Graphic Design", "Visual design, graphics, print design, digital art",
         _C.CREATIVE_DESIGN, "🎭", ["graphic design", "visual design", "print design", "digital art"]),
    _sub(_S.BRANDING, "Branding & Identity", "Brand identity, logo design, visual branding",
         _C.CREATIVE_DESIGN, "🏷️", ["branding", "brand identity", "logo design", "visual identity"]),
    _sub(_S.WEB_DESIGN, "Web Design", "Website design, landing pages, web layouts",
         _C.CREATIVE_DESIGN, "🌐", ["web design", "website design", "landing page", "web layout"]),
    _sub(_S.VISUAL_CONCEPTS, "Visual Concepts", "Creative concepts, visual storytelling, artistic direction",
         _C.CREATIVE_DESIGN, "💡", ["visual concept", "creative concept", "visual storytelling"]),
    _sub(_S.ILLUSTRATION, "Illustration & Art", "Digital illustration, artwork, creative visuals",
         _C.CREATIVE_DESIGN, "🖌️", ["illustration", "digital art", "artwork", "creative visual"]),
    _sub(_S.MOTION_DESIGN, "Motion Design", "Animation, motion graphics, video design",
         _C.CREATIVE_DESIGN, "🎬", ["motion design", "animation", "motion graphics", "video design"]),

    # Data & Analytics
    _sub(_S.DATA_ANALYSIS, "Data Analysis", "Data interpretation, statistical analysis, insights",
         _C.DATA_ANALYTICS, "📊", ["data analysis", "statistical analysis", "data interpretation"]),
    _sub(_S.DATA_VIZ, "Data Visualization", "Charts, graphs, dashboards, visual data representation",
         _C.DATA_ANALYTICS, "📈", ["data visualization", "charts", "graphs", "dashboard", "data viz"]),
    _sub(_S.STATISTICS, "Statistical Analysis", "Statistical methods, hypothesis testing, data modeling",
         _C.DATA_ANALYTICS, "📉", ["statistics", "statistical analysis", "hypothesis testing"]),
    _sub(_S.BUSINESS_INTEL, "Business Intelligence", "BI tools, business metrics, performance analysis",
         _C.DATA_ANALYTICS, "💼", ["business intelligence", "bi tools", "business metrics", "kpi"]),
    _sub(_S.DATA_SCIENCE, "Data Science & ML", "Machine learning, predictive analytics, data modeling",
         _C.DATA_ANALYTICS, "🔬", ["data science", "machine learning", "predictive analytics"]),
    _sub(_S.REPORTING, "Reporting & Dashboards", "Reports, dashboards, data presentation, metrics",
         _C.DATA_ANALYTICS, "📋", ["reporting", "dashboard", "data presentation", "metrics"]),

    # Productivity & Planning
    _sub(_S.TASK_MGMT, "Task Management", "To-do lists, task organization, productivity systems",
         _C.PRODUCTIVITY, "✅", ["task management", "to-do list", "productivity system", "gtd"]),
    _sub(_S.PROJECT_PLAN, "Project Planning", "Project management, timelines, resource planning",
         _C.PRODUCTIVITY, "📅", ["project planning", "project management", "timeline", "gantt"]),
    _sub(_S.GOALS_OKRS, "Goals & OKRs", "Goal setting, OKRs, strategic planning, objectives",
         _C.PRODUCTIVITY, "🎯", ["goals", "okr", "objectives", "strategic planning", "goal setting"]),
    _sub(_S.BRAINSTORMING, "Brainstorming", "Idea generation, creative thinking, innovation sessions",
         _C.PRODUCTIVITY, "💡", ["brainstorming", "idea generation", "creative thinking", "innovation"]),
    _sub(_S.TIME_MGMT, "Time Management", "Scheduling, calendar management, time optimization",
         _C.PRODUCTIVITY, "⏰", ["time management", "scheduling", "calendar", "time blocking"]),
    _sub(_S.WORKFLOW, "Workflow Optimization", "Process improvement, automation, efficiency",
         _C.PRODUCTIVITY, "⚙️", ["workflow", "process improvement", "automation", "efficiency"]),

    # General & Other
    _sub(_S.MISC, "Miscellaneous", "Various topics that don't fit other categories",
         _C.GENERAL, "🔀", ["miscellaneous", "various", "mixed", "other"]),
    _sub(_S.MULTI_CAT, "Multi-Category", "Prompts spanning multiple categories or disciplines",
         _C.GENERAL, "🔄", ["multi-category", "cross-functional", "interdisciplinary"]),
    _sub(_S.CONVERSATIONAL, "Conversational", "Chat-based interactions, dialogue, conversation starters",
         _C.GENERAL, "💬", ["conversation", "chat", "dialogue", "conversational ai"]),
    _sub(_S.EXPLORATORY, "Exploratory", "Research, discovery, open-ended exploration",
         _C.GENERAL, "🔍", ["exploratory", "research", "discovery", "open-ended"]),
    _sub(_S.UNCATEGORIZED, "Uncategorized", "Prompts that haven't been classified yet",
         _C.GENERAL, "❓", ["uncategorized", "unclassified", "unknown"]),
]))

_SUBCATEGORIES_BY_PARENT: Mapping[PromptCategory, tuple[SubcategoryInfo, ...]] = MappingProxyType({
    category: tuple(sub for sub in SUBCATEGORIES.values() if sub.parent == category)
    for category in CATEGORIES
})


def get_category(category: PromptCategory) -> CategoryInfo:
    """Get category metadata by id."""
    return CATEGORIES[category]


def get_subcategory(subcategory: PromptSubcategory) -> SubcategoryInfo:
    """Get subcategory metadata by id."""
    return SUBCATEGORIES[subcategory]


def subcategories_for(category: PromptCategory) -> tuple[SubcategoryInfo, ...]:
    """Subcategories of a category, in declaration order."""
    return _SUBCATEGORIES_BY_PARENT[category]


def first_subcategory(category: PromptCategory) -> PromptSubcategory:
    """The default subcategory of a category (its first declared one)."""
    return _SUBCATEGORIES_BY_PARENT[category][0].id


def parse_category(value: str | None) -> PromptCategory | None:
    """Map a slug to a category, or None if it is not in the taxonomy."""
    if not isinstance(value, str):
        return None
    try:
        return PromptCategory(value.strip().lower())
    except ValueError:
        return None


def parse_subcategory(value: str | None) -> PromptSubcategory | None:
    """Map a slug to a subcategory, or None if it is not in the taxonomy."""
    if not isinstance(value, str):
        return None
    try:
        return PromptSubcategory(value.strip().lower())
    except ValueError:
        return None


def is_valid_pair(category: PromptCategory, subcategory: PromptSubcategory | None) -> bool:
    """True when the subcategory is absent or belongs to the category."""
    if subcategory is None:
        return True
    return SUBCATEGORIES[subcategory].parent == category


def format_taxonomy_for_prompt() -> str:
    """Render the full taxonomy as an indented list for the classifier prompt."""
    lines = []
    for category in CATEGORIES.values():
        lines.append(f"- {category.id.value}: {category.name} ({category.description})")
        for sub in subcategories_for(category.id):
            hints = ", ".join(sub.keywords[:4])
            lines.append(f"    - {sub.id.value}: {sub.description} [hints: {hints}]")
    return "\n".join(lines)
