"""
Teacher-facing insights for a scan, generated by a chat-completion model.

Every public method degrades to fixed defaults: a missing API key, a transport
error or a malformed model answer never fails the scan.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..config import ScannerConfig
from ..llm_client import ChatCompletionClient

if TYPE_CHECKING:
    from .scanner import DeepResource, ScanResult

logger = logging.getLogger("mcp.playmcp.scanner")

SETUP_COMPLEXITY = ("easy", "medium", "complex")
MAX_INSIGHT_ITEMS = 5
MAX_TIPS = 3


def default_insights(tool_name: str) -> dict[str, Any]:
    return {
        "toolOverview": f"{tool_name} is an educational tool that can enhance teaching and learning.",
        "teacherBenefits": [
            "Saves time on lesson preparation",
            "Increases student engagement",
            "Provides progress tracking",
            "Supports diverse learning styles",
            "Facilitates collaboration",
        ],
        "commonUseCases": [
            "Classroom instruction",
            "Homework assignments",
            "Student assessment",
            "Group projects",
            "Remote learning",
        ],
        "setupComplexity": "medium",
        "bestFeatures": [
            "User-friendly interface",
            "Educational content",
            "Progress tracking",
            "Collaboration tools",
            "Reporting features",
        ],
    }


def default_resource_analysis(resource_type: str, tool_name: str) -> dict[str, Any]:
    return {
        "relevanceScore": 7,
        "teacherValue": f"Useful {resource_type} resource for implementing {tool_name}",
        "quickTips": ["Review before using", "Share with colleagues", "Bookmark for reference"],
    }


def _string_list(value: Any, fallback: list[str], limit: int) -> list[str]:
    if not isinstance(value, list):
        return fallback
    items = [str(v).strip() for v in value if isinstance(v, (str, int, float)) and str(v).strip()]
    return items[:limit] if items else fallback


class InsightGenerator:
    """Builds prompts, calls the model in JSON mode and validates the answers."""

    def __init__(self, config: ScannerConfig | None = None, client: ChatCompletionClient | None = None) -> None:
        self.config = config or ScannerConfig.from_env()
        if client is None and self.config.ai_enabled:
            client = ChatCompletionClient(
                api_key=self.config.openai_api_key or "",
                model=self.config.model,
                base_url=self.config.openai_base_url,
                timeout=self.config.llm_timeout,
            )
        self.client = client

    @property
    def ai_enabled(self) -> bool:
        return self.client is not None

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()

    async def _ask(self, prompt: str, max_tokens: int) -> dict[str, Any] | None:
        if self.client is None:
            return None
        try:
            return await self.client.complete_json(prompt, max_tokens=max_tokens, temperature=0.3)
        except Exception as exc:  # noqa: BLE001
            logger.warning("insight request failed: %s", exc)
            return None

    async def generate(self, result: ScanResult, tool_name: str) -> dict[str, Any]:
        """Tool-level insights from the first 15 discovered resources."""
        defaults = default_insights(tool_name)
        resources = [r for bucket in result.categorized_resources.values() for r in bucket][:15]
        summary = "\n".join(f"{r.title}: {r.type}" for r in resources)
        prompt = (
            f"Analyze these {tool_name} resources for teachers:\n\n"
            f"Resources found:\n{summary}\n\n"
            "Provide teacher-focused insights in this exact JSON format:\n"
            "{\n"
            f'  "toolOverview": "2-3 sentences about how teachers can use {tool_name}",\n'
            '  "teacherBenefits": ["Benefit 1", "Benefit 2", "Benefit 3", "Benefit 4", "Benefit 5"],\n'
            '  "commonUseCases": ["Use case 1", "Use case 2", "Use case 3", "Use case 4", "Use case 5"],\n'
            '  "setupComplexity": "easy",\n'
            '  "bestFeatures": ["Feature 1", "Feature 2", "Feature 3", "Feature 4", "Feature 5"]\n'
            "}\n\n"
            "setupComplexity must be exactly one of: easy, medium, or complex"
        )
        answer = await self._ask(prompt, max_tokens=800)
        if answer is None:
            return defaults

        overview = answer.get("toolOverview")
        if not isinstance(overview, str) or not overview.strip():
            overview = f"{tool_name} helps teachers enhance their classroom instruction."
        complexity = answer.get("setupComplexity")
        insights: dict[str, Any] = {"toolOverview": overview.strip()}
        for key in ("teacherBenefits", "commonUseCases"):
            insights[key] = _string_list(answer.get(key), defaults[key], MAX_INSIGHT_ITEMS)
        insights["setupComplexity"] = complexity if complexity in SETUP_COMPLEXITY else "medium"
        insights["bestFeatures"] = _string_list(answer.get("bestFeatures"), defaults["bestFeatures"], MAX_INSIGHT_ITEMS)
        return insights

    async def analyze_resource(self, resource: DeepResource, tool_name: str) -> dict[str, Any]:
        """Per-resource relevance score (1-10), one-line value statement and up to three tips."""
        defaults = default_resource_analysis(resource.type, tool_name)
        prompt = (
            f"Analyze this {tool_name} resource for teachers:\n"
            f"Title: {resource.title}\n"
            f"Type: {resource.type}\n\n"
            "Provide JSON:\n"
            "{\n"
            '  "relevanceScore": 8,\n'
            '  "teacherValue": "One sentence about value for teachers",\n'
            '  "quickTips": ["Tip 1", "Tip 2", "Tip 3"]\n'
            "}"
        )
        answer = await self._ask(prompt, max_tokens=200)
        if answer is None:
            return defaults

        score = answer.get("relevanceScore")
        if isinstance(score, (int, float)) and not isinstance(score, bool):
            score = min(10, max(1, round(score)))
        else:
            score = defaults["relevanceScore"]
        value = answer.get("teacherValue")
        return {
            "relevanceScore": score,
            "teacherValue": value.strip() if isinstance(value, str) and value.strip() else defaults["teacherValue"],
            "quickTips": _string_list(answer.get("quickTips"), defaults["quickTips"], MAX_TIPS),
        }
