"""Export a rendered feature collection as zipped ESRI shapefile layers."""

from __future__ import annotations

import io
import logging
import zipfile

import shapefile
from pyproj import CRS
from pyproj.enums import WktVersion

from .models import FeatureCollection, LineStringGeometry, PointGeometry, PolygonGeometry

logger = logging.getLogger(__name__)

WGS84_EPSG = 4326

# (layer suffix, pyshp shape type, geometry model)
LAYERS = (
    ("points", shapefile.POINT, PointGeometry),
    ("lines", shapefile.POLYLINE, LineStringGeometry),
    ("polygons", shapefile.POLYGON, PolygonGeometry),
)

FIELDS = (
    ("feat_type", 20),  # dBase field names are capped at 10 characters
    ("name", 80),
    ("point_type", 16),
)


def collection_to_shapefile_zip(collection: FeatureCollection, basename: str = "task") -> bytes:
    """Write ``collection`` to a zip of shapefiles, one layer per geometry kind.

    Layers are named ``<basename>_points``, ``<basename>_lines`` and
    ``<basename>_polygons``. Empty layers are left out.
    """
    prj = CRS.from_epsg(WGS84_EPSG).to_wkt(WktVersion.WKT1_ESRI)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for suffix, shape_type, geometry_cls in LAYERS:
            features = [f for f in collection.features if isinstance(f.geometry, geometry_cls)]
            if not features:
                continue
            layer = f"{basename}_{suffix}"
            for ext, content in _write_layer(features, shape_type).items():
                zf.writestr(layer + ext, content)
            zf.writestr(layer + ".prj", prj)
            logger.debug("Wrote shapefile layer %s with %d features", layer, len(features))
    return buf.getvalue()


def _write_layer(features, shape_type: int) -> dict[str, bytes]:
    shp, shx, dbf = io.BytesIO(), io.BytesIO(), io.BytesIO()
    with shapefile.Writer(shp=shp, shx=shx, dbf=dbf, shapeType=shape_type) as w:
        for name, size in FIELDS:
            w.field(name, "C", size=size)
        for feature in features:
            geometry = feature.geometry
            if shape_type == shapefile.POINT:
                lon, lat = geometry.coordinates
                w.point(lon, lat)
            elif shape_type == shapefile.POLYLINE:
                w.line([[list(p) for p in geometry.coordinates]])
            else:
                w.poly([[list(p) for p in ring] for ring in geometry.coordinates])
            props = feature.properties
            w.record(props.feature_type, props.name or "", props.point_type or "")
    return {".shp": shp.getvalue(), ".shx": shx.getvalue(), ".dbf": dbf.getvalue()}
