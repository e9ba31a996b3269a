import uvicorn

from landing_builder.config import settings

if __name__ == "__main__":
    uvicorn.run("landing_builder.main:app", host="0.0.0.0", port=8000, reload=settings.debug)  # nosec B104
