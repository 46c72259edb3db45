"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from plate_nutrition.api.goals import router as goals_router
from plate_nutrition.api.models import PlateSummaryRequest, ServingEditPayload
from plate_nutrition.app_logging import configure_logging
from plate_nutrition.containers import AppContainer
from plate_nutrition.services.nutrition import (
    MacroSummary,
    NutrientRowDisplay,
    PlateSummary,
)
from plate_nutrition.services.plates import PlateSession
from plate_nutrition.services.servings import (
    serving_description,
    serving_weight_grams,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(
        logging.DEBUG if container.settings.debug else logging.INFO,
    )
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(goals_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/plates/summary")
    async def plate_summary(
        payload: PlateSummaryRequest, request: Request
    ) -> dict[str, object]:
        """Aggregate the posted plate and return its nutrient breakdown."""
        state_container: AppContainer = request.app.state.container
        session = PlateSession(
            strict_units=state_container.settings.strict_unit_reconciliation
        )
        try:
            for item in payload.items:
                session.add_item(item.to_domain())
            for edit in payload.edits:
                _apply_edit(session, edit)
            summary = state_container.summary_service.summarize(session)
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except ValueError as exc:
            logger.warning("Rejected plate summary request: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {
            "items": _format_items(session),
            "macros": _format_macros(summary.macros),
            "sections": _format_sections(summary),
        }

    return app


def _apply_edit(session: PlateSession, edit: ServingEditPayload) -> None:
    if edit.measure_id is not None:
        session.select_measure(edit.item_id, edit.measure_id)
    if edit.serving_amount is not None:
        session.set_serving_amount(edit.item_id, edit.serving_amount)
    if edit.serving_text is not None:
        session.set_serving_text(edit.item_id, edit.serving_text)
    if edit.deleted:
        session.delete_item(edit.item_id)


def _format_items(session: PlateSession) -> list[dict[str, object]]:
    items = []
    for entry in session.entries():
        items.append(
            {
                "id": entry.item.id,
                "display_name": entry.item.display_name,
                "active": entry.active,
                "serving_amount": entry.state.serving_amount,
                "serving_text": entry.state.raw_input_text,
                "serving": serving_description(entry.state, entry.item.measures),
                "grams": serving_weight_grams(entry.state, entry.item.measures),
                "scale": session.scale_of(entry.item.id),
            }
        )
    return items


def _format_macros(macros: MacroSummary) -> dict[str, float]:
    return {
        "calories": macros.calories,
        "protein_g": macros.protein_g,
        "carbs_g": macros.carbs_g,
        "fat_g": macros.fat_g,
        "protein_share": macros.protein_share,
        "carbs_share": macros.carbs_share,
        "fat_share": macros.fat_share,
    }


def _format_row(row: NutrientRowDisplay) -> dict[str, object]:
    return {
        "label": row.label,
        "slug": row.slug,
        "value": row.value,
        "goal": row.goal,
        "unit": row.unit,
        "percentage": row.percentage_text,
        "progress": row.progress,
        "ratio": row.ratio_text,
    }


def _format_sections(summary: PlateSummary) -> list[dict[str, object]]:
    return [
        {"section": section.value, "rows": [_format_row(row) for row in rows]}
        for section, rows in summary.sections.items()
    ]
