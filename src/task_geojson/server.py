"""FastAPI server that renders gliding tasks to GeoJSON or shapefiles."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse

from .exporter import collection_to_shapefile_zip
from .features import task_to_feature_collection
from .geodesy import MissingOrientationReference
from .models import FeatureCollection, Task
from .tsk_reader import TaskFormatError, read_task

logger = logging.getLogger(__name__)

app = FastAPI(title="Task GeoJSON", version="0.1.0")


@app.post("/render")
async def render_task_file(
    file: UploadFile,
    format: str = Query("geojson", pattern="^(geojson|shapefile)$"),
):
    """Render an uploaded ``.tsk`` file.

    Returns a GeoJSON FeatureCollection, or with ``format=shapefile`` a zip
    archive holding one shapefile layer per geometry kind.
    """
    content = await file.read()
    try:
        task = read_task(content)
    except TaskFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

    collection = _render(task)
    logger.info("Rendered %s (%d points) as %s", file.filename, len(task.points), format)

    if format == "geojson":
        return _geojson(collection)

    basename = Path(file.filename or "task").stem or "task"
    return StreamingResponse(
        io.BytesIO(collection_to_shapefile_zip(collection, basename=basename)),
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={basename}_shapefiles.zip"},
    )


@app.post("/render/task")
def render_task_model(task: Task):
    """Render a task posted as JSON."""
    return _geojson(_render(task))


def _render(task: Task) -> FeatureCollection:
    try:
        return task_to_feature_collection(task)
    except MissingOrientationReference as e:
        raise HTTPException(status_code=422, detail=str(e))


def _geojson(collection: FeatureCollection) -> dict:
    return collection.model_dump(mode="json", exclude_none=True)
