"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    StoredRecord,
)
from models.sku import (
    SKUCreate,
    SKUResponse,
    MSKUCreate,
    MSKUResponse,
)
from models.mapping import (
    MappingStatus,
    MappingMethod,
    MappingCreate,
    MappingUpdate,
    MappingResponse,
    MappingWithDetails,
    MappingSuggestionRequest,
    MappingSuggestion,
)
from models.inventory import (
    InventoryCreate,
    InventoryResponse,
    MSKUWithInventory,
)
from models.sales import (
    SalesFactCreate,
    SalesFactResponse,
    SalesFactWithDetails,
    TopProduct,
    SalesChartPoint,
)
from models.upload import (
    UploadStatus,
    UploadJobCreate,
    UploadJobUpdate,
    UploadJobResponse,
)
from models.dashboard import DashboardMetrics
from models.ai import (
    AIQueryRequest,
    AIQueryResult,
    ChartConfigRequest,
    ChartConfig,
)

__all__ = [
    # Base
    "BaseSchema",
    "StoredRecord",

    # SKU / MSKU
    "SKUCreate",
    "SKUResponse",
    "MSKUCreate",
    "MSKUResponse",

    # Mappings
    "MappingStatus",
    "MappingMethod",
    "MappingCreate",
    "MappingUpdate",
    "MappingResponse",
    "MappingWithDetails",
    "MappingSuggestionRequest",
    "MappingSuggestion",

    # Inventory
    "InventoryCreate",
    "InventoryResponse",
    "MSKUWithInventory",

    # Sales
    "SalesFactCreate",
    "SalesFactResponse",
    "SalesFactWithDetails",
    "TopProduct",
    "SalesChartPoint",

    # Uploads
    "UploadStatus",
    "UploadJobCreate",
    "UploadJobUpdate",
    "UploadJobResponse",

    # Dashboard
    "DashboardMetrics",

    # AI
    "AIQueryRequest",
    "AIQueryResult",
    "ChartConfigRequest",
    "ChartConfig",
]
