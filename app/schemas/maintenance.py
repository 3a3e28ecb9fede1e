"""Database maintenance schemas"""

from pydantic import BaseModel, ConfigDict, Field


class CapacityStats(BaseModel):
    """Storage usage snapshot, in megabytes, formatted like the alert copy"""
    model_config = ConfigDict(populate_by_name=True)

    size_mb: str = Field(..., alias="sizeInMB")
    storage_mb: str = Field(..., alias="storageInMB")
    index_size_mb: str = Field(..., alias="indexSizeInMB")
    free_storage_mb: str = Field(..., alias="freeStorageMB")
    usage_percentage: str = Field(..., alias="usagePercentage")

    @property
    def storage_used(self) -> float:
        return float(self.storage_mb)


class CapacityAlerts(BaseModel):
    """Thresholds crossed by the current storage usage"""
    warning: bool = False
    critical: bool = False
    emergency: bool = False


class HealthReport(CapacityStats):
    """Result of a health check: the snapshot plus the crossed thresholds"""
    alerts: CapacityAlerts
