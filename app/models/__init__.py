from app.models.profile import Profile
from app.models.seed import Seed
from app.models.zip_frost import ZipFrostData
from app.models.logs import PipelineRun, ApiRequestLog

__all__ = [
    "Profile",
    "Seed",
    "ZipFrostData",
    "PipelineRun",
    "ApiRequestLog",
]
