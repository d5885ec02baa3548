# Routers package
from .logs import router as logs_router
from .week import router as week_router
from .summary import router as summary_router
from .maintenance import router as maintenance_router
