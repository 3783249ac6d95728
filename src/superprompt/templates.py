"""Curated prompt templates.

A small static library of ready-made prompt ideas, tagged by category and
difficulty, that a user can pick as the starting point of the workflow.
Placeholders in square brackets are meant to be replaced before analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .taxonomy import PromptCategory


class TemplateDifficulty(str, Enum):
    """Skill level a template assumes."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class PromptTemplate:
    """One curated template."""

    id: str
    title: str
    description: str
    category: PromptCategory
    prompt: str
    icon: str
    tags: tuple[str, ...]
    difficulty: TemplateDifficulty
    estimated_time: str
    use_cases: tuple[str, ...]
    expected_output: str
    popularity: int  # 1-10, higher sorts first

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, description and tags."""
        query = query.lower()
        return (
            query in self.title.lower()
            or query in self.description.lower()
            or any(query in tag.lower() for tag in self.tags)
        )


# =============================================================================
# Template bodies
# =============================================================================

_PRD_PROMPT = """Create a detailed Product Requirements Document (PRD) for [Product Name - describe briefly].

**Structure Required:**

1. **Executive Summary** - product vision, primary goals, target launch timeline, key stakeholders
2. **Problem Statement & Market Analysis** - user pain points, market opportunity, competitive landscape
3. **Target Users & Personas** - primary and secondary personas, user journey mapping
4. **Core Features & Functionality** - must-have (P0), should-have (P1) and nice-to-have (P2) features with prioritization rationale
5. **Technical Requirements** - stack recommendations, performance benchmarks, security and compliance, integrations
6. **Success Metrics & KPIs** - engagement, business and technical performance metrics
7. **Timeline & Milestones** - development phases, deliverable milestones, go-to-market timeline
8. **Risks & Mitigation Strategies** - technical and market risks with contingencies

Make it professional, stakeholder-ready, and actionable for engineering teams."""

_API_DOCS_PROMPT = """Generate comprehensive API documentation for [API Name - brief description].

**Documentation Structure:**

1. **Overview & Authentication** - purpose, base URL, auth methods, rate limits
2. **Getting Started** - quick start guide, first request example, SDK options
3. **Endpoint Documentation** - for each endpoint: method and path, parameters, request and response examples, status codes
4. **Data Models** - object schemas, field types, validation rules
5. **Error Handling** - error format, common errors and how to resolve them
6. **Changelog & Versioning** - versioning policy, deprecation notices

Make it developer-friendly with clear examples and comprehensive reference material."""

_CODE_REVIEW_PROMPT = """Perform a comprehensive code review and analysis of the following code:

[Paste your code here]

**Review Areas:**

1. **Code Quality Assessment** - readability, naming, structure, duplication
2. **Security Analysis** - injection risks, input validation, secrets handling, authentication flaws
3. **Performance Evaluation** - algorithmic complexity, resource usage, bottlenecks
4. **Best Practices Check** - language idioms, error handling, test coverage
5. **Improvement Recommendations** - prioritized fixes with refactored code examples

Rate each area and explain the reasoning behind every recommendation."""

_SEO_BLOG_PROMPT = """Write a comprehensive, SEO-optimized blog post about [Your Topic].

**SEO Requirements:** primary keyword [keyword], 3-5 secondary keywords, 1,500+ words, meta description under 160 characters

**Content Structure:**
1. **Compelling Headline** (include primary keyword + power word)
2. **Introduction** (150-200 words) with a hook and a clear promise to the reader
3. **Main Body** (5-7 H2 sections, each 200-300 words) with examples and data
4. **Conclusion** (100-150 words) with a summary and call to action

**Optimization Elements:** internal and external link suggestions, image alt text, FAQ section

**Tone & Style:** conversational yet authoritative, short paragraphs, scannable formatting

Make it valuable, engaging, and optimized for both search engines and human readers."""

_NEWSLETTER_PROMPT = """Create an engaging newsletter edition about [Your Topic/Industry Update].

**Newsletter Structure:**

**Header Section:** subject line options, preview text, edition number
**Opening Hook:** a personal or timely opening that earns the next paragraph

**Main Content Blocks (3-4 sections):**
1. **Primary Story/Update**
2. **Quick Hits/Industry Roundup**
3. **Educational/How-To Section**
4. **Community/Personal Touch**

**Call-to-Action Sections:** one primary and one secondary action
**Footer Elements:** sharing prompt, feedback request, unsubscribe note

**Style Guidelines:** friendly, skimmable, under 800 words

Make it feel like a valuable update from a knowledgeable friend, not a sales pitch."""

_SOCIAL_CAMPAIGN_PROMPT = """Create a comprehensive social media campaign plan for [Your Product/Service/Event].

**Campaign Overview:** goals, target audience, duration, budget, key message

**Platform Strategy:**
- **Facebook/Instagram:** content formats, posting frequency, ad targeting
- **LinkedIn** (if B2B): thought leadership angle, company page and personal posts
- **Twitter/X:** real-time engagement, threads, hashtags

**Content Calendar (Week by Week):** themes, post types and publishing times
**Content Creation:** copy examples, visual direction, hashtag sets
**Engagement Strategy:** community management, influencer and user-generated content
**Measurement & Optimization:** KPIs per platform, reporting cadence, A/B tests

Include specific examples and actionable next steps for immediate implementation."""

_EMAIL_SEQUENCE_PROMPT = """Design a comprehensive email marketing sequence for [Your Product/Service].

**Sequence Overview:** audience segment, goal of the sequence, trigger event

**Email Sequence Structure:**
**Email 1: Welcome & Value Delivery** (Send immediately)
**Email 2: Problem Agitation** (Send after 2-3 days)
**Email 3: Solution Introduction** (Send after 5-7 days)
**Email 4: Social Proof & Authority** (Send after 10-12 days)
**Email 5: Urgency & Call-to-Action** (Send after 15-18 days)
**Email 6: Final Value & Soft Close** (Send after 20-22 days)

For each email give subject line options, preview text, body copy and the call to action.

**Technical Specifications:** segmentation rules, personalization fields, send times
**Performance Tracking:** open, click and conversion benchmarks per email"""

_PROFESSIONAL_EMAIL_PROMPT = """Compose a professional business email for the following situation:

**Email Purpose:** [Describe the main goal - request, update, proposal, etc.]
**Recipient:** [Relationship and context - client, colleague, vendor, etc.]
**Key Points to Address:** [List 2-4 main points that must be covered]
**Desired Outcome:** [What you want the recipient to do after reading]
**Tone:** [Professional, friendly, formal, urgent - specify preference]

**Email Structure:** subject line options, opening, body paragraphs, call to action, professional closing

**Formatting Guidelines:** short paragraphs, bullet points for lists, under 200 words where possible

Ensure the email is concise, action-oriented, and maintains professional relationships while achieving the stated goal."""

_EXEC_SUMMARY_PROMPT = """Create a comprehensive executive summary for [Your Project/Report/Proposal].

**Document Context:** audience, decision required, length of the full document

**Executive Summary Structure:**
**Opening Statement** (1-2 sentences)
**Problem/Opportunity** (2-3 sentences)
**Proposed Solution** (3-4 sentences)
**Financial Impact** (2-3 sentences)
**Key Benefits** (Bullet points)
**Implementation Overview** (2-3 sentences)
**Risk Assessment** (1-2 sentences)
**Call to Action** (1-2 sentences)

**Formatting Requirements:** one to two pages, bold key figures, no jargon

Ensure the summary stands alone and provides enough information for decision-making without requiring the full document."""

_DATA_REPORT_PROMPT = """Create a comprehensive data analysis report for [Your Dataset/Business Question].

**Analysis Context:** business question, data sources, time period, stakeholders

**Report Structure:**
**Executive Summary** (1 paragraph)
**Methodology** (1-2 paragraphs)
**Key Findings** (3-5 main insights)

**Detailed Analysis:**
1. **Trend Analysis**
2. **Segment Analysis**
3. **Correlation Analysis**
4. **Benchmarking** (if applicable)

**Actionable Recommendations**, **Risk Assessment**, **Next Steps**
**Technical Appendix:** data quality notes, assumptions, statistical methods
**Visualization Recommendations:** the chart type for each finding

Make the report actionable, data-driven, and accessible to non-technical stakeholders while maintaining analytical rigor."""

_TUTORIAL_PROMPT = """Create an interactive, comprehensive tutorial for [Your Topic/Skill].

**Tutorial Context:** learner level, prerequisites, learning objectives, time to complete

**Tutorial Structure:**
**Introduction & Setup** (10% of content)
**Foundation Knowledge** (20% of content)
**Step-by-Step Instructions** (60% of content), one section per skill or concept
**Hands-On Practice** (10% of content)
**Advanced Applications & Next Steps**

**Interactive Elements:** checkpoints, exercises with solutions, self-check quizzes
**Learning Aids:** analogies, diagrams to draw, common mistakes to avoid
**Accessibility & Inclusion:** plain language, alternatives for visual content

Make the tutorial engaging, practical, and immediately applicable to real-world situations."""

_DESIGN_BRIEF_PROMPT = """Generate a comprehensive UI/UX design brief for [Your Product/Feature].

**Project Overview:** product description, problem being solved, project scope
**Business Context:** goals, target market, competitors, constraints

**User Research & Personas:** primary and secondary personas, user journey mapping

**Functional Requirements:**
- **Core Features (Must-Have)**
- **Secondary Features (Should-Have)**
- **Future Considerations (Could-Have)**

**Technical Constraints:** platforms, frameworks, performance budgets
**Design Requirements:** visual style direction, interaction design, responsive design
**Usability Requirements:** accessibility standard, key tasks and their success rates
**Deliverables, Timeline & Milestones, Success Criteria**

Ensure the brief provides clear direction while allowing creative flexibility for innovative solutions."""


# =============================================================================
# Template table
# =============================================================================


def _tpl(id, title, description, category, prompt, icon, tags, difficulty, estimated_time, use_cases,
         expected_output, popularity):
    return id, PromptTemplate(
        id, title, description, category, prompt, icon, tuple(tags), difficulty, estimated_time,
        tuple(use_cases), expected_output, popularity,
    )


_C = PromptCategory
_D = TemplateDifficulty

PROMPT_TEMPLATES: Mapping[str, PromptTemplate] = MappingProxyType(dict([
    # Software development
    _tpl("prd-generator", "Product Requirements Document (PRD)",
         "Generate comprehensive PRDs for software products with all essential sections.",
         _C.SOFTWARE_DEV, _PRD_PROMPT, "FileText",
         ["prd", "requirements", "software", "product", "planning", "documentation"],
         _D.INTERMEDIATE, "4-6 minutes",
         ["New product launches", "Feature specifications", "Stakeholder presentations", "Engineering handoffs"],
         "Comprehensive 8-section PRD with user stories, technical specs, and success metrics", 10),
    _tpl("api-documentation", "API Documentation Generator",
         "Create comprehensive API documentation with examples and best practices.",
         _C.SOFTWARE_DEV, _API_DOCS_PROMPT, "Code2",
         ["api", "documentation", "endpoints", "development", "technical"],
         _D.INTERMEDIATE, "3-5 minutes",
         ["REST API documentation", "GraphQL API guides", "SDK documentation", "Developer onboarding"],
         "Complete API reference with examples, schemas, and developer guides", 8),
    _tpl("code-review-analyzer", "Code Review & Analysis",
         "Perform thorough code reviews with security, performance, and best practice analysis.",
         _C.SOFTWARE_DEV, _CODE_REVIEW_PROMPT, "Search",
         ["code review", "analysis", "security", "performance", "best practices"],
         _D.ADVANCED, "2-4 minutes",
         ["Pull request reviews", "Legacy code assessment", "Security audits", "Performance optimization"],
         "Detailed code analysis with specific improvements and security recommendations", 7),
    # Content writing
    _tpl("seo-blog-post", "SEO-Optimized Blog Post",
         "Create engaging, search-engine-optimized blog content that ranks and converts.",
         _C.CONTENT_WRITING, _SEO_BLOG_PROMPT, "PenTool",
         ["blog", "seo", "content marketing", "writing", "organic traffic"],
         _D.BEGINNER, "3-4 minutes",
         ["Content marketing campaigns", "Organic traffic generation", "Thought leadership", "Educational content"],
         "1,500+ word SEO-optimized blog post with proper structure and keyword integration", 9),
    _tpl("newsletter-writer", "Engaging Newsletter Content",
         "Create compelling newsletter content that drives engagement and action.",
         _C.CONTENT_WRITING, _NEWSLETTER_PROMPT, "Mail",
         ["newsletter", "email marketing", "engagement", "content", "communication"],
         _D.BEGINNER, "3-4 minutes",
         ["Weekly industry updates", "Company newsletters", "Educational content series", "Community building"],
         "Complete newsletter with engaging subject line, structured content, and clear CTAs", 8),
    # Marketing
    _tpl("social-media-campaign", "Social Media Campaign Planner",
         "Plan comprehensive social media campaigns with content calendar and engagement strategy.",
         _C.MARKETING, _SOCIAL_CAMPAIGN_PROMPT, "TrendingUp",
         ["social media", "campaign", "marketing", "content calendar", "engagement"],
         _D.INTERMEDIATE, "4-5 minutes",
         ["Product launches", "Brand awareness campaigns", "Event promotion", "Seasonal marketing"],
         "Complete campaign plan with content calendar, platform strategies, and measurement framework", 9),
    _tpl("email-marketing-sequence", "Email Marketing Sequence",
         "Design automated email sequences that nurture leads and drive conversions.",
         _C.MARKETING, _EMAIL_SEQUENCE_PROMPT, "Send",
         ["email marketing", "automation", "lead nurturing", "conversion", "sequence"],
         _D.INTERMEDIATE, "4-6 minutes",
         ["Lead nurturing campaigns", "Customer onboarding", "Product launches", "Re-engagement sequences"],
         "6-email automated sequence with subject lines, copy, and performance tracking setup", 8),
    # Business communication
    _tpl("professional-email", "Professional Email Composer",
         "Craft polished, effective business emails for any professional situation.",
         _C.BUSINESS_COMM, _PROFESSIONAL_EMAIL_PROMPT, "Mail",
         ["email", "business communication", "professional", "correspondence", "workplace"],
         _D.BEGINNER, "2-3 minutes",
         ["Client communications", "Project updates", "Meeting requests", "Vendor negotiations"],
         "Professional email with subject lines, structured body, and clear call-to-action", 10),
    _tpl("executive-summary", "Executive Summary Generator",
         "Create compelling executive summaries that communicate key information to stakeholders.",
         _C.BUSINESS_COMM, _EXEC_SUMMARY_PROMPT, "FileText",
         ["executive summary", "business communication", "leadership", "reports", "decision making"],
         _D.INTERMEDIATE, "3-4 minutes",
         ["Business proposals", "Project reports", "Investment pitches", "Strategic plans"],
         "Concise 1-2 page executive summary with financial impact and clear recommendations", 7),
    # Data analytics
    _tpl("data-analysis-report", "Data Analysis Report",
         "Generate comprehensive data analysis reports with insights and recommendations.",
         _C.DATA_ANALYTICS, _DATA_REPORT_PROMPT, "BarChart3",
         ["data analysis", "reporting", "insights", "analytics", "business intelligence"],
         _D.ADVANCED, "4-5 minutes",
         ["Business performance analysis", "Market research reports", "Customer behavior analysis",
          "Operations optimization"],
         "Comprehensive analysis report with findings, visualizations, and actionable recommendations", 6),
    # Education
    _tpl("interactive-tutorial", "Interactive Tutorial Creator",
         "Design engaging, step-by-step tutorials that effectively teach complex topics.",
         _C.EDUCATION, _TUTORIAL_PROMPT, "GraduationCap",
         ["tutorial", "education", "learning", "training", "skill development"],
         _D.INTERMEDIATE, "5-6 minutes",
         ["Employee training programs", "Online course content", "Software documentation",
          "Skill development workshops"],
         "Complete interactive tutorial with exercises, assessments, and progression tracking", 7),
    # Creative design
    _tpl("ui-ux-design-brief", "UI/UX Design Brief Generator",
         "Create detailed design briefs that guide successful user interface and experience projects.",
         _C.CREATIVE_DESIGN, _DESIGN_BRIEF_PROMPT, "Palette",
         ["ui design", "ux design", "design brief", "user experience", "interface design"],
         _D.INTERMEDIATE, "4-5 minutes",
         ["App design projects", "Website redesigns", "Feature development", "Design team briefings"],
         "Comprehensive design brief with user personas, requirements, and success criteria", 6),
]))


# =============================================================================
# Lookups
# =============================================================================


def get_template(template_id: str) -> PromptTemplate | None:
    """Get a template by id, or None if there is no such template."""
    return PROMPT_TEMPLATES.get(template_id)


def get_top_templates(count: int = 10) -> list[PromptTemplate]:
    """Most popular templates first; equal popularity keeps table order."""
    return sorted(PROMPT_TEMPLATES.values(), key=lambda t: t.popularity, reverse=True)[:count]


def get_templates_by_category(category: PromptCategory) -> list[PromptTemplate]:
    return [t for t in PROMPT_TEMPLATES.values() if t.category == category]


def search_templates(query: str) -> list[PromptTemplate]:
    """Templates whose title, description or any tag contains the query."""
    return [t for t in PROMPT_TEMPLATES.values() if t.matches(query)]


def filter_templates(
    category: PromptCategory | None = None,
    difficulty: TemplateDifficulty | None = None,
    search: str | None = None,
) -> list[PromptTemplate]:
    """Combine category, difficulty and text filters.

    Args:
        category: Only this category (None for all)
        difficulty: Only this difficulty (None for all)
        search: Substring to match, blank for no text filter

    Returns:
        Matching templates in table order
    """
    templates = list(PROMPT_TEMPLATES.values())
    if category is not None:
        templates = [t for t in templates if t.category == category]
    if difficulty is not None:
        templates = [t for t in templates if t.difficulty == difficulty]
    if search and search.strip():
        templates = [t for t in templates if t.matches(search.strip())]
    return templates
