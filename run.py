#!/usr/bin/env python3
"""
Run Resources API
"""

import uvicorn

from resources_api.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "resources_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
