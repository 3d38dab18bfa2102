"""
AI assistant API routes.

Generated SQL is returned for display only.
"""

from fastapi import APIRouter, Depends

from models.ai import AIQueryRequest, AIQueryResult, ChartConfigRequest, ChartConfig
from services.container import ServiceContainer, get_services
from routes.errors import handle_error
from exceptions import EmptyQueryError

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.post("/query", response_model=AIQueryResult)
async def query(data: AIQueryRequest, services: ServiceContainer = Depends(get_services)):
    """
    Translate a question into SQL with an explanation.

    AI failures come back as a 200 with error and explanation set.

    Raises:
        400: Empty query
    """
    try:
        if not data.query:
            raise EmptyQueryError()
        return services.ai.process_text_to_sql(data.query)
    except Exception as e:
        return handle_error(e)


@router.post("/chart-config", response_model=ChartConfig)
async def chart_config(data: ChartConfigRequest, services: ServiceContainer = Depends(get_services)):
    """Suggest a chart for some rows; falls back to a bar chart."""
    try:
        return services.ai.generate_chart_config(data.data, data.request)
    except Exception as e:
        return handle_error(e)
