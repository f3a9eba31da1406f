"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Query, Request, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from calorie_tracker.api.models import FoodEntryPayload, LiveSearchMessage
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer, build_container
from calorie_tracker.domain.food import DayLog, LoggedFoodEntry, MealSlot
from calorie_tracker.domain.serialization import entry_to_dict
from calorie_tracker.domain.stats import MealBreakdown, TrendPoint
from calorie_tracker.services.navigation import (
    human_readable_day,
    parse_meal_slot,
    parse_view_date,
)
from calorie_tracker.services.search import DebouncedSearch
from calorie_tracker.services.stats import TREND_DAYS, DaySummary


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(request: Request, q: str = "") -> dict[str, object]:
        """Return catalog candidates for a query."""
        state_container: AppContainer = request.app.state.container
        entries = await state_container.catalog_service.search(q)
        return {"query": q, "results": _format_entries(entries)}

    @app.websocket("/foods/search/live")
    async def live_search(websocket: WebSocket) -> None:
        """Debounced search: one message per keystroke, latest results pushed."""
        state_container: AppContainer = websocket.app.state.container
        await websocket.accept()

        async def push(sequence: int, entries: list[LoggedFoodEntry]) -> None:
            await websocket.send_json(
                {"sequence": sequence, "results": _format_entries(entries)}
            )

        search = DebouncedSearch(
            lookup=state_container.catalog_service.search,
            on_results=push,
            delay_seconds=state_container.settings.search_debounce_seconds,
        )
        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    message = LiveSearchMessage.model_validate_json(raw)
                except ValidationError:
                    logger.warning("Ignoring malformed live search message")
                    continue
                search.submit(message.query)
        except WebSocketDisconnect:
            logger.debug("Live search client disconnected")
        finally:
            await search.aclose()

    @app.get("/log/{day}")
    async def get_day_log(day: str, request: Request) -> dict[str, object]:
        """Return every meal logged on a day."""
        state_container: AppContainer = request.app.state.container
        view_day = parse_view_date(day, state_container.today())
        meals = state_container.food_log_store.get_day(view_day.isoformat())
        return {"date": view_day.isoformat(), "meals": _format_day(meals)}

    @app.get("/log/{day}/{meal}")
    async def get_meal_log(
        day: str, meal: str, request: Request
    ) -> dict[str, object]:
        """Return the entries of one meal."""
        state_container: AppContainer = request.app.state.container
        view_day = parse_view_date(day, state_container.today())
        slot = parse_meal_slot(meal)
        return _format_meal(state_container, view_day, slot)

    @app.post("/log/{day}/{meal}")
    async def add_food_item(
        day: str, meal: str, payload: FoodEntryPayload, request: Request
    ) -> dict[str, object]:
        """Log a catalog food under a day's meal."""
        state_container: AppContainer = request.app.state.container
        view_day = parse_view_date(day, state_container.today())
        slot = parse_meal_slot(meal)
        state_container.food_log_store.add_food_item(
            view_day.isoformat(), slot.value, payload.to_entry()
        )
        logger.info("Logged %s for %s/%s", payload.food.label, view_day, slot.value)
        return _format_meal(state_container, view_day, slot)

    @app.delete("/log/{day}/{meal}/{index}")
    async def remove_food_item(
        day: str, meal: str, index: int, request: Request
    ) -> dict[str, object]:
        """Remove the entry at index; unknown indexes leave the log unchanged."""
        state_container: AppContainer = request.app.state.container
        view_day = parse_view_date(day, state_container.today())
        slot = parse_meal_slot(meal)
        state_container.food_log_store.remove_food_item(
            view_day.isoformat(), slot.value, index
        )
        return _format_meal(state_container, view_day, slot)

    @app.get("/summary/{day}")
    async def day_summary(day: str, request: Request) -> dict[str, object]:
        """Return totals, goal progress and meal cards for a day."""
        state_container: AppContainer = request.app.state.container
        today = state_container.today()
        view_day = parse_view_date(day, today)
        summary = state_container.stats_service.get_day_summary(view_day)
        return _format_summary(summary, human_readable_day(view_day, today))

    @app.get("/trend")
    async def calorie_trend(
        request: Request,
        end: str | None = None,
        days: int = Query(default=TREND_DAYS, ge=1, le=366),
    ) -> dict[str, object]:
        """Return daily calories for the days ending at end."""
        state_container: AppContainer = request.app.state.container
        end_day = parse_view_date(end, state_container.today())
        points = state_container.stats_service.get_trend(end_day, days)
        return {"end": end_day.isoformat(), "points": _format_trend(points)}

    return app


def build_app() -> FastAPI:
    """Create the app from environment settings (uvicorn --factory)."""
    return create_app(build_container())


def _format_entries(entries: Iterable[LoggedFoodEntry]) -> list[dict[str, object]]:
    return [entry_to_dict(entry) for entry in entries]


def _format_day(meals: DayLog) -> dict[str, list[dict[str, object]]]:
    return {meal: _format_entries(entries) for meal, entries in meals.items()}


def _format_meal(
    container: AppContainer, view_day: date, slot: MealSlot
) -> dict[str, object]:
    entries = container.food_log_store.get_meal(view_day.isoformat(), slot.value)
    return {
        "date": view_day.isoformat(),
        "meal": slot.value,
        "entries": _format_entries(entries),
    }


def _format_summary(summary: DaySummary, label: str) -> dict[str, object]:
    totals = summary.totals
    return {
        "date": totals.day.isoformat(),
        "label": label,
        "totals": {
            "calories": totals.calories,
            "protein_g": totals.protein_g,
            "fat_g": totals.fat_g,
            "carbs_g": totals.carbs_g,
        },
        "target": summary.target,
        "percent_of_target": summary.percent_of_target,
        "meals": [_format_breakdown(card) for card in summary.meals],
    }


def _format_breakdown(card: MealBreakdown) -> dict[str, object]:
    return {
        "meal": card.meal,
        "title": card.title,
        "total_calories": card.total_calories,
        "ingredients": [
            {"text": ingredient.text, "weight": ingredient.weight}
            for ingredient in card.ingredients
        ],
    }


def _format_trend(points: list[TrendPoint]) -> list[dict[str, object]]:
    return [
        {
            "date": point.day.isoformat(),
            "label": point.label,
            "calories": point.calories,
        }
        for point in points
    ]
