"""
AI assistant service.

Uses Claude to suggest SKU to MSKU mappings, translate questions into SQL
and pick chart settings. Everything it returns is advisory: generated SQL
is shown to the user and never executed.
"""

import json
import os
import re
from typing import Any, Optional
import structlog

# Load .env file for ANTHROPIC_API_KEY
from dotenv import load_dotenv
load_dotenv()

import anthropic

from config import settings
from models.ai import AIQueryResult, ChartConfig
from models.mapping import MappingSuggestion

logger = structlog.get_logger(__name__)

MAX_SUGGESTIONS = 3

SCHEMA_DESCRIPTION = """
Database Schema for Warehouse Management System:

Tables:
1. skus (id, sku, name, marketplace, created_at)
2. mskus (id, msku, name, category, created_at)
3. sku_mappings (id, sku_id, msku_id, confidence, status, mapped_by, created_at)
4. inventory (id, msku_id, warehouse, quantity, reserved_quantity, last_updated)
5. sales_data (id, sku_id, msku_id, order_date, quantity, revenue, marketplace, processed_at)
6. file_uploads (id, filename, original_name, file_size, status, progress, uploaded_at)

Key relationships:
- SKUs map to MSKUs through sku_mappings
- Inventory is tracked by MSKU and warehouse
- Sales data links to both SKUs and MSKUs
- Revenue is stored as decimal values
"""

FALLBACK_CHART = {
    "chart_type": "bar",
    "config": {"xAxisKey": "name", "yAxisKey": "value", "title": "Data Visualization"},
    "title": "Data Chart",
}


def parse_json_reply(text: str) -> dict:
    """
    Parse a model reply as JSON.

    Tolerates replies wrapped in ```json fences.

    Raises:
        ValueError: If the reply is not a JSON object
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r'^```(?:json)?\s*', '', cleaned)
        cleaned = re.sub(r'\s*```$', '', cleaned)

    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


class AIService:
    """
    Claude-backed advisory calls.

    Each public method degrades to a safe result instead of raising when
    the API is unavailable or returns something unusable.
    """

    MAPPING_SYSTEM_PROMPT = (
        "You are a warehouse management expert specializing in SKU to MSKU "
        "mapping. Always respond with valid JSON, no markdown."
    )

    SQL_SYSTEM_PROMPT = (
        "You are a PostgreSQL expert who generates safe, read-only queries for "
        "warehouse management analytics. Always respond with valid JSON, no markdown."
    )

    def __init__(self, client: Optional[Any] = None):
        api_key = settings.anthropic_api_key or os.getenv("ANTHROPIC_API_KEY")
        if client is not None:
            self.client = client
        elif api_key:
            self.client = anthropic.Anthropic(api_key=api_key)
        else:
            self.client = None
        self.model = settings.ai_model
        self.max_tokens = settings.ai_max_tokens

    @property
    def available(self) -> bool:
        return self.client is not None

    def _complete(self, prompt: str, system: Optional[str] = None, temperature: float = 0.3) -> dict:
        kwargs = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        response = self.client.messages.create(**kwargs)
        response_text = response.content[0].text
        logger.debug("ai_response_received", response_length=len(response_text))
        return parse_json_reply(response_text)

    # ===================
    # MAPPING SUGGESTIONS
    # ===================

    def suggest_sku_mapping(
        self,
        sku_name: str,
        available_mskus: list[str]
    ) -> list[MappingSuggestion]:
        """
        Suggest up to three MSKUs for a SKU name, best first.

        Returns:
            Suggestions ordered by confidence; [] on any failure
        """
        if not self.available:
            logger.warning("ai_unavailable", operation="suggest_sku_mapping")
            return []

        msku_lines = "\n".join(f"- {msku}" for msku in available_mskus)
        prompt = f"""Given a SKU name and a list of available Master SKUs (MSKUs), suggest the best mapping.

SKU to map: "{sku_name}"

Available MSKUs:
{msku_lines}

Consider product name similarity, brand/category matches, marketplace
variations (e.g. "flipkart", "amazon" suffixes) and common abbreviations.

Respond with JSON in this format:
{{
  "suggestions": [
    {{"suggestedMsku": "exact-msku-name", "confidence": 0.95, "reasoning": "Why"}}
  ]
}}

Provide up to {MAX_SUGGESTIONS} suggestions, ordered by confidence (0-1)."""

        try:
            data = self._complete(prompt, system=self.MAPPING_SYSTEM_PROMPT)
            suggestions = [
                MappingSuggestion(
                    suggested_msku=item["suggestedMsku"],
                    confidence=float(item.get("confidence", 0)),
                    reasoning=item.get("reasoning", ""),
                )
                for item in data.get("suggestions", [])
            ]
            suggestions.sort(key=lambda s: s.confidence, reverse=True)

            logger.info("ai_mapping_suggested", sku_name=sku_name, count=len(suggestions))
            return suggestions[:MAX_SUGGESTIONS]

        except Exception as e:
            logger.error("ai_mapping_suggestion_failed", sku_name=sku_name, error=str(e))
            return []

    # ===================
    # TEXT TO SQL
    # ===================

    def process_text_to_sql(self, query: str) -> AIQueryResult:
        """
        Translate a question into a read-only SQL query with an explanation.

        The SQL is returned for display only; result is always empty.
        """
        if not self.available:
            logger.warning("ai_unavailable", operation="process_text_to_sql")
            return AIQueryResult(
                error="AI service not configured",
                explanation="The AI assistant is not configured. Set ANTHROPIC_API_KEY to enable it."
            )

        prompt = f"""Given this database schema and user query, generate a safe PostgreSQL query and explain what it does.

User Query: "{query}"

{SCHEMA_DESCRIPTION}

Rules:
1. Only generate SELECT queries (no INSERT, UPDATE, DELETE, DROP, etc.)
2. Use proper JOINs to get meaningful data
3. Use aggregate functions for summaries
4. Limit results to reasonable numbers

Respond with JSON in this format:
{{
  "sql": "SELECT statement here",
  "explanation": "What this query does and what results to expect",
  "queryType": "analytics|report|lookup",
  "canExecute": true
}}

If the query cannot be safely generated, set canExecute to false and explain why."""

        try:
            data = self._complete(prompt, system=self.SQL_SYSTEM_PROMPT, temperature=0.1)

        except anthropic.RateLimitError as e:
            logger.warning("ai_rate_limited", error=str(e))
            return AIQueryResult(
                error="Rate limit exceeded",
                explanation="Too many requests to the AI service. Please wait a moment and try again."
            )
        except anthropic.APIStatusError as e:
            logger.error("ai_api_error", status_code=e.status_code, error=str(e))
            if "credit" in str(e).lower() or "quota" in str(e).lower():
                return AIQueryResult(
                    error="AI API quota exceeded",
                    explanation=(
                        "The AI service is temporarily unavailable due to quota limits. "
                        "Please try again later or contact support."
                    )
                )
            return self._query_failed()
        except Exception as e:
            logger.error("ai_text_to_sql_failed", error=str(e))
            return self._query_failed()

        if not data.get("canExecute"):
            return AIQueryResult(
                error="Query cannot be executed safely",
                explanation=data.get("explanation") or "The requested operation is not supported"
            )

        logger.info("ai_sql_generated", query_type=data.get("queryType"))
        return AIQueryResult(
            sql=data.get("sql"),
            explanation=data.get("explanation", ""),
            result=[],
        )

    def _query_failed(self) -> AIQueryResult:
        return AIQueryResult(
            error="Failed to process query",
            explanation="There was an error processing your request. Please try rephrasing your question."
        )

    # ===================
    # CHART CONFIG
    # ===================

    def generate_chart_config(self, data: list[dict], request: str) -> ChartConfig:
        """
        Suggest a chart type and axis keys for some rows.

        Falls back to a generic bar chart on any failure.
        """
        if not self.available:
            return ChartConfig(**FALLBACK_CHART)

        prompt = f"""Given this data and user request, suggest the best chart configuration:

Data: {json.dumps(data[:5], default=str)}... (showing first 5 rows)
User Request: "{request}"

Available chart types: line, bar, pie, area, scatter

Respond with JSON:
{{
  "chartType": "line|bar|pie|area|scatter",
  "config": {{"xAxisKey": "field_name", "yAxisKey": "field_name", "dataKey": "field_name", "title": "Chart Title"}},
  "title": "Descriptive chart title"
}}"""

        try:
            reply = self._complete(prompt)
            return ChartConfig(
                chart_type=reply["chartType"],
                config=reply.get("config") or {},
                title=reply.get("title") or "Data Chart",
            )
        except Exception as e:
            logger.error("ai_chart_config_failed", error=str(e))
            return ChartConfig(**FALLBACK_CHART)


_ai_service: Optional[AIService] = None


def get_ai_service() -> AIService:
    """Get or create AI service instance."""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service
