import uvicorn

from travel_blog.config import get_settings

settings = get_settings()

uvicorn.run(
    "travel_blog.main:app",
    host=settings.host,
    port=settings.port,
    reload=settings.debug,
    log_level=settings.log_level.lower(),
)
