"""Basic example demonstrating segment-router.

Serves the sample service routes over FastAPI. Settings are read from
SEGMENT_ROUTER_* environment variables.

Run with:
    uvicorn main:app --reload

Available endpoints:
    GET /health    - Health check
    GET /hello     - Greeting
    GET /users/:id - Get user by ID
"""

import logging

from segment_router import Settings, create_app, create_router

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)

app = create_app(create_router(settings), settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
