"""Chat-completion proxy to an OpenRouter-compatible endpoint, plus roadmap prompts."""
import json
import logging
import re

import requests
from flask import current_app

logger = logging.getLogger(__name__)

SUGGESTED_MODELS = [
    {"id": "google/gemma-3-27b-it:free", "name": "Gemma 3 27B", "brand": "google"},
    {"id": "xiaomi/mimo-v2-flash:free", "name": "Mimo V2 Flash", "brand": "xiaomi"},
    {"id": "nvidia/nemotron-3-nano-30b-a3b:free", "name": "Nemotron 3 Nano", "brand": "nvidia"},
    {"id": "deepseek/deepseek-r1-0528:free", "name": "Deepseek R1", "brand": "deepseek"},
]

PURPOSE_OPTIONS = {
    "from-scratch": "Start from zero",
    "career-switch": "Switch careers",
    "skill-upgrade": "Upgrade my skills",
    "job-ready": "Get job-ready",
    "freelance": "Become a freelancer",
}

SKILL_LEVELS = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
    "professional": "Professional",
}

DAILY_TIME_OPTIONS = {
    "1-2": "1-2 hours/day",
    "2-4": "2-4 hours/day",
    "4-6": "4-6 hours/day",
    "6+": "6+ hours/day (full time)",
}

DURATION_OPTIONS = {
    "1-month": "1 month",
    "3-months": "3 months",
    "6-months": "6 months",
    "12-months": "12 months",
}

GOAL_OPTIONS = {
    "portfolio": "Build a portfolio",
    "first-job": "Land a first job",
    "promotion": "Get promoted",
    "certification": "Earn a certification",
    "side-income": "Earn side income",
}

ROADMAP_FIELDS = ("purpose", "field", "level", "daily_time", "duration", "goal")

ROADMAP_TEMPLATE = """You are an AI assistant that builds personal, well-structured learning roadmaps.

Create a detailed learning roadmap for the following learner profile:

**Learner profile:**
- Purpose: {purpose}
- Field of interest: {field}
- Current level: {level}
- Study time: {daily_time}
- Target duration: {duration}
- Goal: {goal}
{additional}
**Required roadmap format:**

1. **Overview** - a short summary of the journey ahead
2. **Weekly/Monthly timeline** - what to learn in each period
3. **Milestones & checkpoints** - targets for each phase
4. **Free resources** - tutorials, courses and documentation
5. **Practice projects** - project ideas for each phase
6. **Tips & motivation** - advice for staying consistent

Write the roadmap in clean Markdown with headings, bullet points and a clear timeline.
After the Markdown, add a ```json fenced block with the shape
{{"title": str, "phases": [{{"name": str, "duration": str, "topics": [str], "project": str}}]}}.
Make the roadmap as actionable as possible."""

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


class AIServiceError(Exception):
    def __init__(self, message, status=500, detail=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail


def chat_completion(message, model=None):
    """Send a single user message and return ``(reply, model)``.

    Raises AIServiceError when the key is missing, the provider can't be
    reached, or it answers with a non-2xx status (that status is kept).
    """
    config = current_app.config
    api_key = config.get("OPENROUTER_API_KEY")
    if not api_key:
        raise AIServiceError("OpenRouter API key is not configured", 500)

    payload = {
        "model": model or config["OPENROUTER_DEFAULT_MODEL"],
        "messages": [{"role": "user", "content": message}],
    }
    headers = {
        "Authorization": f"Bearer {api_key}",
        "HTTP-Referer": config["OPENROUTER_REFERER"],
        "X-Title": config["OPENROUTER_TITLE"],
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            config["OPENROUTER_URL"],
            json=payload,
            headers=headers,
            timeout=config["OPENROUTER_TIMEOUT"],
        )
    except requests.RequestException as e:
        logger.error("AI service request failed: %s", e)
        raise AIServiceError("Could not reach the AI service", 500, str(e))

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if not response.ok:
        error = data.get("error")
        detail = error.get("message") if isinstance(error, dict) else error
        logger.warning("AI service answered %s: %s", response.status_code, detail)
        raise AIServiceError("The AI service returned an error", response.status_code, detail)

    choices = data.get("choices") or []
    reply = choices[0].get("message", {}).get("content") if choices else None
    return reply, data.get("model")


def _label(options, value):
    return options.get(value, value)


def build_roadmap_prompt(profile):
    additional = profile.get("additional_info")
    return ROADMAP_TEMPLATE.format(
        purpose=_label(PURPOSE_OPTIONS, profile["purpose"]),
        field=profile["field"],
        level=_label(SKILL_LEVELS, profile["level"]),
        daily_time=_label(DAILY_TIME_OPTIONS, profile["daily_time"]),
        duration=_label(DURATION_OPTIONS, profile["duration"]),
        goal=_label(GOAL_OPTIONS, profile["goal"]),
        additional=f"- Additional info: {additional}\n" if additional else "",
    )


def extract_json_block(text):
    """Pull the first JSON object out of a model reply, or None.

    A fenced ```json block wins; otherwise the outermost ``{...}`` span is tried.
    """
    if not text:
        return None

    candidates = [m.group(1) for m in _FENCED_JSON_RE.finditer(text)]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
