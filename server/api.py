"""FastAPI server exposing wardrobe and recommendation endpoints."""

import os
from datetime import date as dt_date
from typing import Optional

from fastapi import FastAPI, HTTPException

from logic.validation import ItemPayload, ItemUpdatePayload, RecommendationRequest, RecommendationResponse
from models.context import RecommendOptions
from models.errors import InvalidItemError
from stylesync.app import StyleSyncApp
from stylesync.logging_config import configure_logging
from tools.weather_provider import WeatherReport

configure_logging()

_stylesync_app: Optional[StyleSyncApp] = None
app = FastAPI(title="StyleSync", version="0.1.0")


def get_stylesync_app() -> StyleSyncApp:
    """Lazily build the application so tests can swap in their own instance."""

    global _stylesync_app
    if _stylesync_app is None:
        _stylesync_app = StyleSyncApp()
    return _stylesync_app


def set_stylesync_app(instance: StyleSyncApp) -> None:
    global _stylesync_app
    _stylesync_app = instance


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness check."""

    stylesync_app = get_stylesync_app()
    return {
        "status": "ok",
        "service": "stylesync",
        "environment": stylesync_app.config.environment or "local",
    }


@app.post("/wardrobe/{user_id}/items", status_code=201)
def create_item(user_id: str, payload: ItemPayload) -> dict:
    """Add one item to the user's wardrobe."""

    try:
        item = get_stylesync_app().add_item(user_id, payload.to_record())
    except InvalidItemError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"item": item.to_record()}


@app.get("/wardrobe/{user_id}/items")
def list_items(user_id: str) -> dict:
    return {"items": [item.to_record() for item in get_stylesync_app().list_items(user_id)]}


@app.get("/wardrobe/{user_id}/items/{item_id}")
def get_item(user_id: str, item_id: str) -> dict:
    item = get_stylesync_app().get_item(user_id, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="item not found")
    return {"item": item.to_record()}


@app.patch("/wardrobe/{user_id}/items/{item_id}")
def update_item(user_id: str, item_id: str, payload: ItemUpdatePayload) -> dict:
    """Update stored attributes; the category itself is immutable."""

    try:
        item = get_stylesync_app().update_item(user_id, item_id, payload.to_fields())
    except InvalidItemError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if item is None:
        raise HTTPException(status_code=404, detail="item not found")
    return {"item": item.to_record()}


@app.delete("/wardrobe/{user_id}/items/{item_id}")
def delete_item(user_id: str, item_id: str) -> dict:
    if not get_stylesync_app().delete_item(user_id, item_id):
        raise HTTPException(status_code=404, detail="item not found")
    return {"deleted": item_id}


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(request: RecommendationRequest) -> RecommendationResponse:
    """Rank outfits from the stored wardrobe for the requested context."""

    weather = None
    if request.weather is not None:
        weather = WeatherReport(temperature_c=request.weather.temperature_c, condition=request.weather.condition)
    try:
        return get_stylesync_app().recommend_for_user(
            user_id=request.user_id,
            location=request.location,
            weather=weather,
            occasion=request.occasion,
            season=request.season,
            on_date=request.date or dt_date.today(),
            options=RecommendOptions(max_results=request.max_results, max_skeletons=request.max_skeletons),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")), reload=False)
