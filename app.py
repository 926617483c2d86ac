"""Local development server for the recipe handler.

Serves the same handle_request() the serverless platform runs, so the
frontend can be pointed at http://localhost:<PORT>/recipe (or the
historical /.netlify/functions/recipe path) without deploying:
- every HTTP method is forwarded, so preflight and 405 behave as deployed
- GET /health reports the active handler mode and model

Run with: python app.py
"""

import uuid

from fastapi import FastAPI, Request, Response

from recipe_snap import __version__
from recipe_snap.handlers.recipe import handle_request
from recipe_snap.utils.config import config
from recipe_snap.utils.logger import logger


RECIPE_PATHS = ("/recipe", "/.netlify/functions/recipe")
FORWARDED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

app = FastAPI(
    title="Recipe Snap",
    description="Turns a food photo or an ingredient list into three recipes",
    version=__version__,
)
# Completion client override; None builds a fresh client per request
app.state.completion_client = None


async def recipe_endpoint(request: Request) -> Response:
    """Translate the HTTP request into a platform event and back."""
    raw_body = await request.body()
    event = {
        "httpMethod": request.method,
        "body": raw_body.decode("utf-8", errors="replace") if raw_body else None,
    }

    result = await handle_request(
        event,
        settings=config,
        client=request.app.state.completion_client,
        request_id=uuid.uuid4().hex[:12],
    )
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
    )


for path in RECIPE_PATHS:
    app.add_api_route(path, recipe_endpoint, methods=FORWARDED_METHODS, tags=["Recipes"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Check service health and the active configuration."""
    return {
        "status": "healthy",
        "mode": config.HANDLER_MODE,
        "model": config.GEMINI_MODEL,
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting recipe dev server on port {config.PORT} (mode={config.HANDLER_MODE})")
    logger.info(f"POST recipes to: http://localhost:{config.PORT}/recipe")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run("app:app", host="0.0.0.0", port=config.PORT, reload=True)
